"""
Account views.

This module provides API views for:
- Registration (returns JWT pair and DRF token)
- DRF API token obtain/revoke
- Profile read/update

Related files:
    - serializers.py: Request/response serialization
    - services.py: AccountService
    - urls.py: URL routing

Note:
    Most authentication endpoints are handled by dj-rest-auth:
    - Login: /api/v1/auth/login/
    - Logout: /api/v1/auth/logout/
    - Password reset: /api/v1/auth/password/reset/
    - Password change: /api/v1/auth/password/change/
    - Current user: /api/v1/auth/user/
    - JWT refresh: /api/v1/auth/token/refresh/
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.serializers import (
    APITokenRequestSerializer,
    APITokenResponseSerializer,
    ProfileSerializer,
    RegisterResponseSerializer,
    RegisterSerializer,
    UserSerializer,
)
from accounts.services import AccountService


class RegisterView(APIView):
    """
    Create an account.

    URL: /api/v1/auth/register/
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_scope = "auth"

    @extend_schema(
        summary="Register",
        description=(
            "Create an account with email and password. Returns the user, "
            "a JWT pair and a DRF API token."
        ),
        tags=["Auth"],
        request=RegisterSerializer,
        responses={
            201: RegisterResponseSerializer,
            400: OpenApiResponse(description="Validation error"),
        },
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AccountService.register(
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
            display_name=serializer.validated_data.get("display_name", ""),
        )
        if not result:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)

        user = result.data
        payload = {"user": UserSerializer(user).data}
        payload.update(AccountService.issue_tokens(user))
        return Response(payload, status=status.HTTP_201_CREATED)


class APITokenView(APIView):
    """
    DRF token authentication for scripts and simple clients.

    POST: Exchange email/password for a token (get or create)
    DELETE: Revoke the caller's token

    URL: /api/v1/auth/token/
    """

    throttle_scope = "auth"

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_authenticators(self):
        # Credentials in the body must not be rejected by a stale header
        if self.request.method == "POST":
            return []
        return super().get_authenticators()

    @extend_schema(
        summary="Obtain API token",
        tags=["Auth"],
        request=APITokenRequestSerializer,
        responses={
            200: APITokenResponseSerializer,
            400: OpenApiResponse(description="Invalid credentials"),
        },
    )
    def post(self, request):
        serializer = APITokenRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AccountService.obtain_api_token(
            request,
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        if not result:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)
        return Response({"token": result.data.key})

    @extend_schema(
        summary="Revoke API token",
        tags=["Auth"],
        request=None,
        responses={204: None},
    )
    def delete(self, request):
        AccountService.revoke_api_token(request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProfileView(APIView):
    """
    API view for the current user's profile.

    GET: Retrieve current user's profile
    PATCH: Update display name, bio, website, avatar or preferred language

    URL: /api/v1/auth/profile/
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(
        summary="Get current user's profile",
        tags=["Auth - Profile"],
        responses={200: ProfileSerializer},
    )
    def get(self, request):
        profile = AccountService.get_or_create_profile(request.user)
        return Response(ProfileSerializer(profile, context={"request": request}).data)

    @extend_schema(
        summary="Update profile",
        tags=["Auth - Profile"],
        request=ProfileSerializer,
        responses={200: ProfileSerializer},
    )
    def patch(self, request):
        profile = AccountService.get_or_create_profile(request.user)
        serializer = ProfileSerializer(
            profile,
            data=request.data,
            partial=True,
            context={"request": request},
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)
