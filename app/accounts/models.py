"""
Account models.

This module defines:
- User: Custom user model with email-based authentication
- Profile: Public author data shown next to posts and comments

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: AccountService (registration, API tokens)
    - signals.py: Auto-create profile on user creation
"""

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils.translation import gettext_lazy as _

from accounts.managers import UserManager
from core.models import BaseModel
from core.validators import validate_file_extension, validate_file_size

AVATAR_EXTENSIONS = ["jpg", "jpeg", "png", "gif", "webp"]


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Fields:
        email: Primary identifier, unique, used for login
        email_verified: Whether the user's email has been verified
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
        updated_at: When the user record was last modified
    """

    email = models.EmailField(
        _("email address"),
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )
    email_verified = models.BooleanField(
        _("email verified"),
        default=False,
        help_text="Whether the user's email has been verified",
    )
    is_active = models.BooleanField(
        _("active"),
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        _("staff status"),
        default=False,
        help_text="Whether the user can access the admin site.",
    )
    date_joined = models.DateTimeField(
        _("date joined"),
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        _("updated at"),
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    # Email is required implicitly as USERNAME_FIELD
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = _("user")
        verbose_name_plural = _("users")
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    def get_full_name(self):
        """Display name from the profile, falling back to the email."""
        try:
            return self.profile.display_name or self.email
        except Profile.DoesNotExist:
            return self.email

    def get_short_name(self):
        return self.get_full_name().split("@")[0]


class Profile(BaseModel):
    """
    Public author profile.

    Fields:
        user: OneToOne link to User (also serves as primary key)
        display_name: Name shown on posts and comments
        bio: Short author biography
        website: Personal site
        avatar: Profile picture (max 2MB)
        preferred_language: One of settings.LANGUAGES; used for e-mails

    Note:
        Profile is automatically created via signals when a User is created.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        primary_key=True,
        verbose_name=_("user"),
    )
    display_name = models.CharField(
        _("display name"),
        max_length=100,
        blank=True,
    )
    bio = models.TextField(_("bio"), max_length=1000, blank=True)
    website = models.URLField(_("website"), blank=True)
    avatar = models.ImageField(
        _("avatar"),
        upload_to="avatars/",
        blank=True,
        null=True,
        validators=[
            validate_file_size(max_mb=2),
            validate_file_extension(AVATAR_EXTENSIONS),
        ],
    )
    preferred_language = models.CharField(
        _("preferred language"),
        max_length=10,
        choices=settings.LANGUAGES,
        default="en",
    )

    class Meta:
        verbose_name = _("profile")
        verbose_name_plural = _("profiles")

    def __str__(self):
        return self.display_name or str(self.user)
