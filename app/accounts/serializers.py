"""
Serializers for account models.

This module provides DRF serializers for:
- User model (read operations, dj-rest-auth USER_DETAILS_SERIALIZER)
- Profile model (read/update)
- Registration and API token requests

Security:
    - Password fields are write-only
    - Passwords run through Django's AUTH_PASSWORD_VALIDATORS
"""

from django.contrib.auth import password_validation
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from accounts.models import Profile, User


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    Used by dj-rest-auth for /api/v1/auth/user/ and nested as the author
    of posts and comments.
    """

    display_name = serializers.CharField(source="get_full_name", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "display_name",
            "email_verified",
            "date_joined",
        ]
        read_only_fields = fields


class AuthorSerializer(serializers.ModelSerializer):
    """Public author representation; omits the email address."""

    display_name = serializers.CharField(source="get_full_name", read_only=True)

    class Meta:
        model = User
        fields = ["id", "display_name"]
        read_only_fields = fields


class ProfileSerializer(serializers.ModelSerializer):
    """Read/update serializer for the current user's profile."""

    email = serializers.EmailField(source="user.email", read_only=True)
    avatar_url = serializers.SerializerMethodField()

    class Meta:
        model = Profile
        fields = [
            "email",
            "display_name",
            "bio",
            "website",
            "avatar",
            "avatar_url",
            "preferred_language",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["email", "avatar_url", "created_at", "updated_at"]
        extra_kwargs = {"avatar": {"write_only": True, "required": False}}

    def get_avatar_url(self, obj):
        if not obj.avatar:
            return None
        request = self.context.get("request")
        if request:
            return request.build_absolute_uri(obj.avatar.url)
        return obj.avatar.url


class RegisterSerializer(serializers.Serializer):
    """
    Validates registration input.

    Request body:
        {
            "email": "author@example.com",
            "password": "...",
            "password_confirm": "...",
            "display_name": "Ada"      // Optional
        }
    """

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
    password_confirm = serializers.CharField(
        write_only=True, style={"input_type": "password"}
    )
    display_name = serializers.CharField(
        max_length=100, required=False, allow_blank=True
    )

    def validate_email(self, value):
        value = User.objects.normalize_email(value)
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError(
                _("A user with this email already exists.")
            )
        return value

    def validate(self, attrs):
        if attrs["password"] != attrs["password_confirm"]:
            raise serializers.ValidationError(
                {"password_confirm": _("Passwords do not match.")}
            )
        candidate = User(email=attrs["email"])
        try:
            password_validation.validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"password": list(exc.messages)})
        return attrs


class RegisterResponseSerializer(serializers.Serializer):
    """Documents the registration response for the OpenAPI schema."""

    user = UserSerializer()
    access = serializers.CharField()
    refresh = serializers.CharField()
    token = serializers.CharField()


class APITokenRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class APITokenResponseSerializer(serializers.Serializer):
    token = serializers.CharField()
