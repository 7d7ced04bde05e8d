"""
Custom QuerySet and Manager classes for soft-deletable models.

Manager vs QuerySet:
    - QuerySet: Defines chainable methods (filter, exclude, etc.)
    - Manager: Attaches QuerySet to model, defines table-level operations

Usage:
    from core.managers import SoftDeleteManager, SoftDeleteQuerySet

    class PostQuerySet(SoftDeleteQuerySet):
        def published(self):
            return self.filter(status="published")

    class Post(SoftDeleteMixin, BaseModel):
        objects = SoftDeleteManager.from_queryset(PostQuerySet)()
        all_objects = models.Manager()

    Post.objects.published()   # Active and published
    Post.objects.deleted()     # Only deleted
    Post.all_objects.all()     # Everything

Related:
    - core.model_mixins.SoftDeleteMixin: Model mixin for soft delete fields
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class SoftDeleteQuerySet(models.QuerySet):
    """
    QuerySet that provides soft delete operations.

    Methods:
        delete(): Soft delete (marks is_deleted=True)
        hard_delete(): Permanent delete
        restore(): Restore soft-deleted records
        deleted(): Filter to only deleted records
        active(): Filter to only active records

    Note:
        The default filtering of deleted records happens in SoftDeleteManager,
        not in this QuerySet.
    """

    def delete(self) -> tuple[int, dict[str, int]]:
        """
        Soft delete all objects in queryset.

        Calls the on_soft_delete() hook on each instance before the
        bulk update.

        Returns:
            Tuple of (count, {model_label: count}) matching Django's delete()
        """
        instances = list(self.filter(is_deleted=False))

        for instance in instances:
            if hasattr(instance, "on_soft_delete"):
                instance.on_soft_delete()

        count = self.filter(is_deleted=False).update(
            is_deleted=True, deleted_at=timezone.now()
        )

        return count, {self.model._meta.label: count}

    delete.alters_data = True
    delete.queryset_only = True

    def hard_delete(self) -> tuple[int, dict[str, int]]:
        """
        Permanently delete all objects in queryset.

        Warning:
            This cannot be undone.
        """
        return super().delete()

    hard_delete.alters_data = True

    def restore(self) -> int:
        """
        Restore all soft-deleted objects in queryset.

        Returns:
            Number of restored records
        """
        instances = list(self.filter(is_deleted=True))

        for instance in instances:
            if hasattr(instance, "on_restore"):
                instance.on_restore()

        return self.filter(is_deleted=True).update(is_deleted=False, deleted_at=None)

    restore.alters_data = True

    def deleted(self) -> SoftDeleteQuerySet:
        return self.filter(is_deleted=True)

    def active(self) -> SoftDeleteQuerySet:
        return self.filter(is_deleted=False)


class SoftDeleteManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """
    Manager that filters out soft-deleted records by default.

    Always pair with a standard Manager (all_objects) for accessing
    deleted records in admin and maintenance code.

    Works with from_queryset() so domain querysets that extend
    SoftDeleteQuerySet keep the default filtering.
    """

    def get_queryset(self) -> SoftDeleteQuerySet:
        """Return queryset excluding soft-deleted records."""
        return super().get_queryset().filter(is_deleted=False)

    def deleted(self) -> SoftDeleteQuerySet:
        """Shortcut to get only deleted records."""
        return self._queryset_class(self.model, using=self._db).filter(
            is_deleted=True
        )

    def with_deleted(self) -> SoftDeleteQuerySet:
        """Get queryset including deleted records."""
        return self._queryset_class(self.model, using=self._db)
