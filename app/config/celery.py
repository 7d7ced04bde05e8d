"""
Celery configuration for the blog platform.

Background work handled by Celery:
- Comment notification e-mails (blog.tasks)
- Outbound webhook deliveries and retries (webhooks.tasks)
- Inbound webhook processing (webhooks.tasks)
- External post imports (integrations.tasks)
- Periodic maintenance such as purging soft-deleted posts, scheduled
  through django-celery-beat's DatabaseScheduler

Redis is both the message broker and result backend. Tasks are
auto-discovered from the tasks.py module of every installed app.

Usage:
    from celery import shared_task

    @shared_task
    def purge_deleted_posts(days=30):
        ...

    purge_deleted_posts.delay(days=7)

For more information, see:
https://docs.celeryq.dev/en/stable/django/first-steps-with-django.html
"""

import logging
import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

logger = logging.getLogger(__name__)

app = Celery("blog")

# All Celery settings are prefixed with CELERY_ in settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()


@app.task(bind=True, ignore_result=True)
def debug_task(self):
    """Log the task request; used to check worker connectivity."""
    logger.info(f"Request: {self.request!r}")
