"""
Blog service layer.

PostService and CommentService hold the status and comment rules. Views,
admin actions, webhook handlers and tasks all go through them so the
custom signals fire consistently.

Related files:
    - signals.py: post_published, comment_posted
    - receivers.py: Cache bump and author notification
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from django.db.models import F
from django.utils import timezone

from blog.models import Comment, Post
from blog.signals import comment_posted, post_published
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from accounts.models import User


class PostService(BaseService):
    """
    Post lifecycle operations.

    Usage:
        result = PostService.publish(post)
        if not result:
            return Response(result.to_response(), status=400)
    """

    @classmethod
    def publish(cls, post: Post) -> ServiceResult[Post]:
        """Move a post to published and announce it."""
        if post.status == Post.Status.PUBLISHED:
            return ServiceResult.failure(
                "Post is already published.", error_code="ALREADY_PUBLISHED"
            )

        with cls.atomic():
            post.status = Post.Status.PUBLISHED
            if post.published_at is None:
                post.published_at = timezone.now()
            post.save(update_fields=["status", "published_at", "updated_at"])

        cls.get_logger().info(
            f"Published post {post.pk}", extra={"post_id": post.pk}
        )
        post_published.send(sender=cls, post=post)
        return ServiceResult.success(post)

    @classmethod
    def unpublish(cls, post: Post) -> ServiceResult[Post]:
        """Move a published post back to draft. published_at is kept."""
        if post.status != Post.Status.PUBLISHED:
            return ServiceResult.failure(
                "Post is not published.", error_code="NOT_PUBLISHED"
            )

        post.status = Post.Status.DRAFT
        post.save(update_fields=["status", "updated_at"])

        cls.get_logger().info(
            f"Unpublished post {post.pk}", extra={"post_id": post.pk}
        )
        return ServiceResult.success(post)

    @classmethod
    def archive(cls, post: Post) -> ServiceResult[Post]:
        if post.status == Post.Status.ARCHIVED:
            return ServiceResult.failure(
                "Post is already archived.", error_code="ALREADY_ARCHIVED"
            )
        post.status = Post.Status.ARCHIVED
        post.save(update_fields=["status", "updated_at"])
        return ServiceResult.success(post)

    @classmethod
    def record_status_change(cls, post: Post, previous_status: str | None) -> bool:
        """
        Announce a post that a create or update moved into published.

        Use after saving through a serializer or form, where publish() is
        not called. Returns True when post_published was sent.
        """
        if post.status != Post.Status.PUBLISHED:
            return False
        if previous_status == Post.Status.PUBLISHED:
            return False

        cls.get_logger().info(
            f"Post {post.pk} published on save", extra={"post_id": post.pk}
        )
        post_published.send(sender=cls, post=post)
        return True

    @staticmethod
    def increment_views(post: Post) -> None:
        """Count a view without a read-modify-write race."""
        Post.all_objects.filter(pk=post.pk).update(view_count=F("view_count") + 1)
        post.view_count = (post.view_count or 0) + 1

    @classmethod
    def purge_deleted(cls, days: int, dry_run: bool = False) -> int:
        """
        Hard-delete posts soft-deleted more than `days` ago.

        Returns:
            Number of posts removed (or that would be removed on dry_run)
        """
        cutoff = timezone.now() - timedelta(days=days)
        queryset = Post.objects.deleted().filter(deleted_at__lt=cutoff)
        count = queryset.count()

        if dry_run or count == 0:
            return count

        queryset.hard_delete()
        cls.get_logger().info(
            f"Purged {count} posts deleted before {cutoff.isoformat()}",
            extra={"count": count, "days": days},
        )
        return count


class CommentService(BaseService):
    """Comment creation and moderation."""

    @classmethod
    def add_comment(cls, post: Post, author: User, body: str) -> ServiceResult[Comment]:
        """
        Create an approved comment on a published post.

        Body validation (length, script content) is the caller's job; the
        serializer and form run the model validators.
        """
        validation = cls.validate_required(body=body)
        if validation is not None:
            return validation

        if not post.is_published or post.is_deleted:
            return ServiceResult.failure(
                "Comments are only allowed on published posts.",
                error_code="POST_NOT_PUBLISHED",
            )

        comment = Comment.objects.create(post=post, author=author, body=body.strip())
        cls.get_logger().info(
            f"Comment {comment.pk} added to post {post.pk}",
            extra={"post_id": post.pk, "comment_id": comment.pk},
        )
        comment_posted.send(sender=cls, comment=comment)
        return ServiceResult.success(comment)

    @classmethod
    def set_approval(cls, comment: Comment, approved: bool) -> Comment:
        if comment.is_approved != approved:
            comment.is_approved = approved
            comment.save(update_fields=["is_approved", "updated_at"])
            cls.get_logger().info(
                f"Comment {comment.pk} {'approved' if approved else 'rejected'}"
            )
        return comment
