"""
Django app configuration for blog.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class BlogConfig(AppConfig):
    """Configuration for the blog application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "blog"
    verbose_name = _("Blog")

    def ready(self):
        """Connect cache invalidation and notification receivers."""
        from blog import receivers  # noqa: F401
