"""
Model mixins providing reusable functionality for Django models.

Available Mixins:
    UUIDPrimaryKeyMixin: Use UUID as primary key
    SoftDeleteMixin: Soft delete support (is_deleted, deleted_at)
    SlugMixin: Auto-generated unique URL slugs

Usage:
    from core.models import BaseModel
    from core.model_mixins import SlugMixin, SoftDeleteMixin
    from core.managers import SoftDeleteManager

    class Post(SoftDeleteMixin, SlugMixin, BaseModel):
        objects = SoftDeleteManager()
        all_objects = models.Manager()

        title = models.CharField(max_length=200)

        def get_slug_source(self):
            return self.title

Note:
    - Always list mixins before BaseModel in inheritance
    - SoftDeleteMixin requires SoftDeleteManager (see core.managers)
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from django.db import models
from django.utils import timezone
from django.utils.text import slugify

if TYPE_CHECKING:
    from typing import Any


class UUIDPrimaryKeyMixin(models.Model):
    """
    Use UUID as primary key instead of auto-increment integer.

    Used for records whose IDs leave the system (webhook deliveries,
    inbound webhook events) so they are not guessable or sequential.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for this record",
    )

    class Meta:
        abstract = True


class SoftDeleteMixin(models.Model):
    """
    Soft delete support for models.

    Instead of permanently deleting records, marks them as deleted.
    Deleted records can be restored and are purged later by a
    maintenance task.

    Fields:
        is_deleted: Boolean flag indicating soft delete status
        deleted_at: Timestamp when the record was soft deleted

    Usage:
        post.soft_delete()
        Post.objects.all()        # Excludes the post
        Post.objects.deleted()    # Only deleted
        post.restore()
    """

    is_deleted = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Whether this record has been soft deleted",
    )
    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Timestamp when this record was soft deleted",
    )

    class Meta:
        abstract = True

    def soft_delete(self) -> None:
        """
        Mark this record as deleted.

        Calls the optional on_soft_delete() hook first so subclasses can
        release resources or invalidate caches.
        """
        if self.is_deleted:
            return
        if hasattr(self, "on_soft_delete"):
            self.on_soft_delete()
        self.is_deleted = True
        self.deleted_at = timezone.now()
        self.save(update_fields=["is_deleted", "deleted_at", "updated_at"])

    def restore(self) -> None:
        """Restore a soft-deleted record."""
        if not self.is_deleted:
            return
        if hasattr(self, "on_restore"):
            self.on_restore()
        self.is_deleted = False
        self.deleted_at = None
        self.save(update_fields=["is_deleted", "deleted_at", "updated_at"])

    def hard_delete(self) -> None:
        """
        Permanently delete this record.

        Warning:
            This cannot be undone. Consider soft_delete() instead.
        """
        super().delete()


class SlugMixin(models.Model):
    """
    Add URL-safe slug field with auto-generation support.

    Slugs are derived from get_slug_source() on first save.
    Example: "My First Post" -> "my-first-post"

    Duplicate sources get numbered slugs ("my-first-post-1", ...).
    Uniqueness is checked through the base manager so that rows hidden
    by a filtering default manager (soft-deleted posts) still reserve
    their slug.

    Override:
        get_slug_source(): Return the string to slugify (required)
    """

    slug = models.SlugField(
        max_length=255,
        unique=True,
        db_index=True,
        blank=True,
        help_text="URL-safe identifier for this record",
    )

    # Leave room for the "-<counter>" suffix
    slug_max_base_length = 240

    class Meta:
        abstract = True

    def get_slug_source(self) -> str:
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement get_slug_source()"
        )

    def generate_unique_slug(self) -> str:
        """Build a slug from get_slug_source() that no other row uses."""
        base_slug = slugify(self.get_slug_source(), allow_unicode=False)
        base_slug = base_slug[: self.slug_max_base_length].strip("-")
        if not base_slug:
            base_slug = self.__class__.__name__.lower()

        queryset = self.__class__._base_manager.all()
        if self.pk:
            queryset = queryset.exclude(pk=self.pk)

        slug = base_slug
        counter = 1
        while queryset.filter(slug=slug).exists():
            slug = f"{base_slug}-{counter}"
            counter += 1
        return slug

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self.slug:
            self.slug = self.generate_unique_slug()
            update_fields = kwargs.get("update_fields")
            if update_fields is not None and "slug" not in update_fields:
                kwargs["update_fields"] = [*update_fields, "slug"]
        super().save(*args, **kwargs)
