"""
Django app configuration for accounts.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AccountsConfig(AppConfig):
    """Configuration for the accounts application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
    verbose_name = _("Accounts")

    def ready(self):
        """
        Import signals when the app is ready.

        This ensures signal handlers are connected when Django starts.
        """
        from accounts import signals  # noqa: F401
