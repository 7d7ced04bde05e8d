"""
Django signals for accounts.

Handlers:
- create_user_profile: Auto-create Profile when a User is created

Related files:
    - models.py: User and Profile models
    - apps.py: Signal import in ready()
"""

import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(
    post_save,
    sender=settings.AUTH_USER_MODEL,
    dispatch_uid="accounts.create_user_profile",
)
def create_user_profile(sender, instance, created, raw=False, **kwargs):
    """
    Create a Profile for newly created users.

    Skipped for fixture loading (raw=True), where the profile row is
    loaded from the fixture itself.
    """
    if not created or raw:
        return

    from accounts.models import Profile

    Profile.objects.get_or_create(user=instance)
    logger.debug(f"Profile created for user: {instance.email}")
