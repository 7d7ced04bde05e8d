"""
Signal receivers for the blog app.

Handlers:
- invalidate_post_lists: Bump the list cache version on any content write
- notify_post_author: Queue an e-mail to the post author on a new comment

Related files:
    - signals.py: Custom signals
    - cache.py: Versioned list cache keys
    - tasks.py: send_comment_notification
"""

import logging

from django.db import transaction
from django.db.models.signals import m2m_changed, post_delete, post_save
from django.dispatch import receiver

from blog.cache import bump_posts_version
from blog.models import Category, Comment, Post, Tag
from blog.signals import comment_posted

logger = logging.getLogger(__name__)

CACHED_MODELS = (Post, Comment, Category, Tag)


def invalidate_post_lists(sender, raw=False, **kwargs):
    if raw:
        return
    bump_posts_version()


for model in CACHED_MODELS:
    post_save.connect(
        invalidate_post_lists,
        sender=model,
        dispatch_uid=f"blog.invalidate_post_lists.save.{model.__name__}",
    )
    post_delete.connect(
        invalidate_post_lists,
        sender=model,
        dispatch_uid=f"blog.invalidate_post_lists.delete.{model.__name__}",
    )

m2m_changed.connect(
    invalidate_post_lists,
    sender=Post.tags.through,
    dispatch_uid="blog.invalidate_post_lists.tags",
)


@receiver(comment_posted, dispatch_uid="blog.notify_post_author")
def notify_post_author(sender, comment, **kwargs):
    """
    E-mail the post author about a comment from someone else.

    Queued on commit so the worker never reads a comment that was rolled
    back.
    """
    if comment.author_id == comment.post.author_id:
        return

    from blog.tasks import send_comment_notification

    comment_id = comment.pk
    transaction.on_commit(lambda: send_comment_notification.delay(comment_id))
    logger.debug(f"Comment notification queued for comment {comment_id}")
