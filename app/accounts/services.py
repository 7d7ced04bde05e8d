"""
Account services.

AccountService covers registration and DRF API tokens. Login, logout,
password change/reset and JWT refresh are handled by dj-rest-auth and
simplejwt and need no service code.

Related files:
    - models.py: User, Profile
    - views.py: RegisterView, APITokenView, ProfileView
    - signals.py: Profile auto-creation
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import authenticate
from rest_framework.authtoken.models import Token
from rest_framework_simplejwt.tokens import RefreshToken

from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.http import HttpRequest

    from accounts.models import Profile, User


class AccountService(BaseService):
    """
    Registration and token operations.

    Usage:
        result = AccountService.register("a@example.com", "s3cret-pass", "Ada")
        if result:
            tokens = AccountService.issue_tokens(result.data)
    """

    @classmethod
    def register(
        cls, email: str, password: str, display_name: str = ""
    ) -> ServiceResult[User]:
        """
        Create a user and fill the auto-created profile.

        Password strength is validated by the serializer before this runs.
        """
        from accounts.models import User

        if User.objects.filter(email__iexact=email).exists():
            return ServiceResult.failure(
                "A user with this email already exists.",
                error_code="EMAIL_EXISTS",
                errors={"email": ["A user with this email already exists."]},
            )

        with cls.atomic():
            user = User.objects.create_user(email=email, password=password)
            if display_name:
                user.profile.display_name = display_name
                user.profile.save(update_fields=["display_name", "updated_at"])

        cls.get_logger().info(
            f"Registered user {user.pk}", extra={"user_id": user.pk}
        )
        return ServiceResult.success(user)

    @staticmethod
    def issue_tokens(user: User) -> dict[str, str]:
        """Return a JWT pair plus a DRF token for the user."""
        refresh = RefreshToken.for_user(user)
        token, _ = Token.objects.get_or_create(user=user)
        return {
            "access": str(refresh.access_token),
            "refresh": str(refresh),
            "token": token.key,
        }

    @classmethod
    def obtain_api_token(
        cls, request: HttpRequest | None, email: str, password: str
    ) -> ServiceResult[Token]:
        """Exchange credentials for a DRF token (get or create)."""
        user = authenticate(request, email=email, password=password)
        if user is None or not user.is_active:
            return ServiceResult.failure(
                "Unable to log in with provided credentials.",
                error_code="INVALID_CREDENTIALS",
            )
        token, created = Token.objects.get_or_create(user=user)
        if created:
            cls.get_logger().info(f"API token issued for user {user.pk}")
        return ServiceResult.success(token)

    @classmethod
    def revoke_api_token(cls, user: User) -> int:
        """Delete the user's DRF token. Returns the number of tokens removed."""
        deleted, _ = Token.objects.filter(user=user).delete()
        if deleted:
            cls.get_logger().info(f"API token revoked for user {user.pk}")
        return deleted

    @staticmethod
    def get_or_create_profile(user: User) -> Profile:
        from accounts.models import Profile

        profile, _ = Profile.objects.get_or_create(user=user)
        return profile
