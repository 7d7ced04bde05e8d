"""
Signal receivers that turn blog events into outbound webhooks.

    post_published -> "post.published"
    comment_posted -> "comment.created"
"""

from __future__ import annotations

from django.conf import settings
from django.dispatch import receiver

from blog.signals import comment_posted, post_published
from webhooks.services import WebhookService


def absolute_url(path: str) -> str:
    return f"{settings.SITE_URL.rstrip('/')}{path}"


@receiver(post_published, dispatch_uid="webhooks.post_published")
def dispatch_post_published(sender, post, **kwargs):
    WebhookService.dispatch_event(
        "post.published",
        {
            "id": post.pk,
            "slug": post.slug,
            "title": post.title,
            "author": post.author.email,
            "language": post.language,
            "published_at": post.published_at,
            "url": absolute_url(post.get_absolute_url()),
        },
    )


@receiver(comment_posted, dispatch_uid="webhooks.comment_posted")
def dispatch_comment_created(sender, comment, **kwargs):
    WebhookService.dispatch_event(
        "comment.created",
        {
            "id": comment.pk,
            "post": comment.post.slug,
            "author": comment.author.email,
            "body": comment.body,
            "created_at": comment.created_at,
        },
    )
