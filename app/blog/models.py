"""
Blog models.

This module defines:
- Category: Single-level grouping of posts
- Tag: Free-form labels, many-to-many with posts
- Post: Soft-deletable article with a draft/published/archived lifecycle
- Comment: Reader comment on a published post

Related files:
    - services.py: PostService, CommentService (status changes, comments)
    - receivers.py: Cache invalidation and comment notifications
    - cache.py: Versioned list cache keys
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.db import models
from django.db.models import Count, Q
from django.urls import reverse
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.managers import SoftDeleteManager, SoftDeleteQuerySet
from core.model_mixins import SlugMixin, SoftDeleteMixin
from core.models import BaseModel
from core.validators import (
    validate_file_extension,
    validate_file_size,
    validate_no_script,
)

if TYPE_CHECKING:
    from typing import Any

IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "gif", "webp"]


class Category(SlugMixin, BaseModel):
    name = models.CharField(_("name"), max_length=100, unique=True)
    description = models.TextField(_("description"), blank=True)

    class Meta:
        verbose_name = _("category")
        verbose_name_plural = _("categories")
        ordering = ["name"]

    def __str__(self):
        return self.name

    def get_slug_source(self) -> str:
        return self.name


class Tag(SlugMixin, BaseModel):
    name = models.CharField(_("name"), max_length=50, unique=True)

    class Meta:
        verbose_name = _("tag")
        verbose_name_plural = _("tags")
        ordering = ["name"]

    def __str__(self):
        return self.name

    def get_slug_source(self) -> str:
        return self.name


class PostQuerySet(SoftDeleteQuerySet):
    """Chainable filters shared by the API, the HTML pages and the admin."""

    def published(self) -> PostQuerySet:
        return self.filter(status=Post.Status.PUBLISHED)

    def visible_to(self, user) -> PostQuerySet:
        """
        Published posts plus everything the user wrote.

        Staff see every post so they can moderate drafts.
        """
        if user is None or not user.is_authenticated:
            return self.published()
        if user.is_staff:
            return self
        return self.filter(Q(status=Post.Status.PUBLISHED) | Q(author=user))

    def with_comment_count(self) -> PostQuerySet:
        return self.annotate(
            comment_count=Count(
                "comments",
                filter=Q(comments__is_approved=True),
                distinct=True,
            )
        )

    def for_listing(self) -> PostQuerySet:
        return (
            self.select_related("author", "author__profile", "category")
            .prefetch_related("tags")
            .with_comment_count()
            .order_by("-published_at", "-created_at")
        )


class Post(SoftDeleteMixin, SlugMixin, BaseModel):
    """
    Blog post.

    Lifecycle:
        draft -> published (PostService.publish) -> draft (unpublish)
        any -> archived (admin action)

    Deleting a post only flags it (SoftDeleteMixin); purge_deleted_posts
    removes rows that have been deleted for longer than
    settings.POST_PURGE_AFTER_DAYS.
    """

    class Status(models.TextChoices):
        DRAFT = "draft", _("Draft")
        PUBLISHED = "published", _("Published")
        ARCHIVED = "archived", _("Archived")

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="posts",
        verbose_name=_("author"),
    )
    title = models.CharField(_("title"), max_length=200)
    content = models.TextField(_("content"))
    excerpt = models.CharField(_("excerpt"), max_length=300, blank=True)
    image = models.ImageField(
        _("image"),
        upload_to="posts/%Y/%m/",
        blank=True,
        null=True,
        validators=[
            validate_file_size(max_mb=5),
            validate_file_extension(IMAGE_EXTENSIONS),
        ],
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="posts",
        verbose_name=_("category"),
    )
    tags = models.ManyToManyField(
        Tag, blank=True, related_name="posts", verbose_name=_("tags")
    )
    status = models.CharField(
        _("status"),
        max_length=20,
        choices=Status.choices,
        default=Status.DRAFT,
        db_index=True,
    )
    published_at = models.DateTimeField(
        _("published at"), null=True, blank=True, db_index=True
    )
    language = models.CharField(
        _("language"),
        max_length=10,
        choices=settings.LANGUAGES,
        default="en",
    )
    view_count = models.PositiveIntegerField(_("view count"), default=0)
    external_id = models.CharField(
        _("external id"),
        max_length=64,
        blank=True,
        db_index=True,
        help_text="Identifier in the third-party source this post was imported from",
    )

    objects = SoftDeleteManager.from_queryset(PostQuerySet)()
    all_objects = models.Manager()

    class Meta:
        verbose_name = _("post")
        verbose_name_plural = _("posts")
        ordering = ["-published_at", "-created_at"]
        indexes = [
            models.Index(
                fields=["status", "published_at"], name="blog_post_status_pub_idx"
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["external_id"],
                condition=~Q(external_id=""),
                name="blog_post_unique_external_id",
            ),
        ]

    def __str__(self):
        return self.title

    def get_slug_source(self) -> str:
        return self.title

    def get_absolute_url(self) -> str:
        return reverse("blog:post_detail", kwargs={"slug": self.slug})

    @property
    def is_published(self) -> bool:
        return self.status == self.Status.PUBLISHED

    def save(self, *args: Any, **kwargs: Any) -> None:
        # A published post always carries its publication time
        if self.is_published and self.published_at is None:
            self.published_at = timezone.now()
            update_fields = kwargs.get("update_fields")
            if update_fields is not None and "published_at" not in update_fields:
                kwargs["update_fields"] = [*update_fields, "published_at"]
        super().save(*args, **kwargs)


class Comment(BaseModel):
    """
    Reader comment.

    Unapproved comments stay in the database but are hidden from the API,
    the HTML pages and comment counts.
    """

    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        related_name="comments",
        verbose_name=_("post"),
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="comments",
        verbose_name=_("author"),
    )
    body = models.TextField(
        _("body"), max_length=2000, validators=[validate_no_script]
    )
    is_approved = models.BooleanField(_("approved"), default=True, db_index=True)

    class Meta:
        verbose_name = _("comment")
        verbose_name_plural = _("comments")
        ordering = ["created_at"]

    def __str__(self):
        return f"Comment by {self.author} on {self.post}"
