"""
Django admin configuration for blog models.

Provides admin interfaces for:
- Post management (inline comments, publish/archive actions)
- Comment moderation (approve/reject actions)
- Category and Tag taxonomy

Status changes from bulk actions go through PostService so
post_published (and the webhooks hanging off it) fire as they do for API
and page edits.
"""

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _
from django.utils.translation import ngettext

from blog.models import Category, Comment, Post, Tag
from blog.services import CommentService, PostService


class CommentInline(admin.TabularInline):
    """Inline display of comments in post admin."""

    model = Comment
    extra = 0
    fields = ["author", "body", "is_approved", "created_at"]
    readonly_fields = ["created_at"]
    raw_id_fields = ["author"]


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    """Admin interface for Post model. Soft-deleted posts stay listed."""

    list_display = [
        "title",
        "author",
        "status",
        "category",
        "language",
        "published_at",
        "view_count",
        "is_deleted",
    ]
    list_filter = ["status", "language", "category", "is_deleted", "published_at"]
    search_fields = ["title", "content", "author__email"]
    prepopulated_fields = {"slug": ["title"]}
    readonly_fields = ["view_count", "external_id", "created_at", "updated_at", "deleted_at"]
    raw_id_fields = ["author"]
    filter_horizontal = ["tags"]
    date_hierarchy = "published_at"
    inlines = [CommentInline]
    actions = ["publish_selected", "archive_selected"]
    ordering = ["-created_at"]

    def get_queryset(self, request):
        return Post.all_objects.select_related("author", "category")

    @admin.action(description=_("Publish selected posts"))
    def publish_selected(self, request, queryset):
        published = sum(1 for post in queryset if PostService.publish(post))
        self.message_user(
            request,
            ngettext(
                "%d post was published.", "%d posts were published.", published
            )
            % published,
            messages.SUCCESS,
        )

    @admin.action(description=_("Archive selected posts"))
    def archive_selected(self, request, queryset):
        archived = sum(1 for post in queryset if PostService.archive(post))
        self.message_user(
            request,
            ngettext("%d post was archived.", "%d posts were archived.", archived)
            % archived,
            messages.SUCCESS,
        )


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    """Admin interface for comment moderation."""

    list_display = ["id", "post", "author", "body_preview", "is_approved", "created_at"]
    list_filter = ["is_approved", "created_at"]
    search_fields = ["body", "author__email", "post__title"]
    raw_id_fields = ["post", "author"]
    readonly_fields = ["created_at", "updated_at"]
    actions = ["approve_comments", "reject_comments"]
    ordering = ["-created_at"]

    @admin.display(description=_("Body"))
    def body_preview(self, obj: Comment) -> str:
        max_length = 50
        if len(obj.body) > max_length:
            return obj.body[:max_length] + "..."
        return obj.body

    @admin.action(description=_("Approve selected comments"))
    def approve_comments(self, request, queryset):
        for comment in queryset:
            CommentService.set_approval(comment, approved=True)
        self.message_user(request, _("Comments approved."), messages.SUCCESS)

    @admin.action(description=_("Reject selected comments"))
    def reject_comments(self, request, queryset):
        for comment in queryset:
            CommentService.set_approval(comment, approved=False)
        self.message_user(request, _("Comments rejected."), messages.SUCCESS)


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "created_at"]
    search_fields = ["name"]
    prepopulated_fields = {"slug": ["name"]}


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ["name", "slug"]
    search_fields = ["name"]
    prepopulated_fields = {"slug": ["name"]}
