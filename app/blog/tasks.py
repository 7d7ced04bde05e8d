"""
Celery tasks for the blog app.

Tasks:
- send_comment_notification: E-mail the post author about a new comment
- purge_deleted_posts: Hard-delete long soft-deleted posts (celery-beat, daily)

Usage:
    from blog.tasks import send_comment_notification
    send_comment_notification.delay(comment.pk)
"""

from __future__ import annotations

import logging

from celery import shared_task
from django.conf import settings
from django.utils import translation
from django.utils.translation import gettext as _

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    retry_backoff=True,
    retry_backoff_max=600,
    max_retries=3,
)
def send_comment_notification(self, comment_id: int) -> dict:
    """
    Send the "new comment" e-mail in the author's preferred language.

    Returns:
        Dict with status: sent, not_found or failed
    """
    from blog.models import Comment
    from toolkit.services import EmailService

    try:
        comment = Comment.objects.select_related(
            "post", "post__author", "post__author__profile", "author__profile"
        ).get(pk=comment_id)
    except Comment.DoesNotExist:
        logger.warning(
            "Comment not found for notification", extra={"comment_id": comment_id}
        )
        return {"status": "not_found", "comment_id": comment_id}

    post = comment.post
    recipient = post.author
    language = getattr(
        getattr(recipient, "profile", None), "preferred_language", None
    ) or settings.LANGUAGE_CODE

    with translation.override(language):
        subject = _("New comment on \"%(title)s\"") % {"title": post.title}

    sent = EmailService.send(
        to=recipient.email,
        subject=subject,
        template_name="emails/comment_notification",
        context={
            "post": post,
            "comment": comment,
            "post_url": f"{settings.SITE_URL.rstrip('/')}{post.get_absolute_url()}",
        },
        language=language,
    )

    if not sent:
        raise self.retry()

    logger.info(
        "Comment notification sent",
        extra={"comment_id": comment_id, "post_id": post.pk},
    )
    return {"status": "sent", "comment_id": comment_id}


@shared_task
def purge_deleted_posts(days: int | None = None) -> dict:
    """Hard-delete posts soft-deleted more than `days` ago."""
    from blog.services import PostService

    if days is None:
        days = settings.POST_PURGE_AFTER_DAYS

    count = PostService.purge_deleted(days)
    logger.info("Purge of deleted posts finished", extra={"count": count, "days": days})
    return {"purged": count, "days": days}
