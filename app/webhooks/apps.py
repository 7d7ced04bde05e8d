"""
Django app configuration for webhooks.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class WebhooksConfig(AppConfig):
    """Configuration for the webhooks application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "webhooks"
    verbose_name = _("Webhooks")

    def ready(self):
        """Connect blog signal receivers that dispatch outbound events."""
        from webhooks import receivers  # noqa: F401
