"""
Serializers for blog models.

- CategorySerializer, TagSerializer: taxonomy (slug read-only)
- PostListSerializer: compact list item with comment_count
- PostDetailSerializer: full post, also used for create/update
- CommentSerializer: comment read/create/update
"""

from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from accounts.serializers import AuthorSerializer
from blog.models import Category, Comment, Post, Tag


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description"]
        read_only_fields = ["id", "slug"]


class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ["id", "name", "slug"]
        read_only_fields = ["id", "slug"]


class PostListSerializer(serializers.ModelSerializer):
    """
    List representation.

    Expects the queryset from PostQuerySet.for_listing(), which annotates
    comment_count and prefetches author, category and tags.
    """

    author = AuthorSerializer(read_only=True)
    category = serializers.SlugRelatedField(slug_field="slug", read_only=True)
    tags = serializers.SlugRelatedField(slug_field="slug", many=True, read_only=True)
    comment_count = serializers.IntegerField(read_only=True)
    image_url = serializers.SerializerMethodField()

    class Meta:
        model = Post
        fields = [
            "id",
            "slug",
            "title",
            "excerpt",
            "author",
            "category",
            "tags",
            "status",
            "language",
            "published_at",
            "view_count",
            "comment_count",
            "image_url",
            "created_at",
        ]
        read_only_fields = fields

    def get_image_url(self, obj):
        if not obj.image:
            return None
        request = self.context.get("request")
        if request:
            return request.build_absolute_uri(obj.image.url)
        return obj.image.url


class PostDetailSerializer(PostListSerializer):
    """
    Full post. Writes accept category and tag slugs.

    Request body (create):
        {
            "title": "Hello Django",
            "content": "...",
            "excerpt": "",           // Optional
            "category": "tutorials", // Optional, slug
            "tags": ["django"],      // Optional, slugs
            "status": "draft",       // draft | published | archived
            "language": "en"
        }
    """

    category = serializers.SlugRelatedField(
        slug_field="slug",
        queryset=Category.objects.all(),
        required=False,
        allow_null=True,
    )
    tags = serializers.SlugRelatedField(
        slug_field="slug", many=True, queryset=Tag.objects.all(), required=False
    )
    image = serializers.ImageField(write_only=True, required=False, allow_null=True)
    comment_count = serializers.SerializerMethodField()

    class Meta(PostListSerializer.Meta):
        fields = PostListSerializer.Meta.fields + [
            "content",
            "image",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "slug",
            "author",
            "published_at",
            "view_count",
            "comment_count",
            "image_url",
            "created_at",
            "updated_at",
        ]

    def get_comment_count(self, obj):
        annotated = getattr(obj, "comment_count", None)
        if annotated is not None:
            return annotated
        return obj.comments.filter(is_approved=True).count()

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError(_("Title cannot be blank."))
        return value.strip()


class CommentSerializer(serializers.ModelSerializer):
    author = AuthorSerializer(read_only=True)
    post = serializers.SlugRelatedField(slug_field="slug", read_only=True)

    class Meta:
        model = Comment
        fields = ["id", "post", "author", "body", "is_approved", "created_at", "updated_at"]
        read_only_fields = ["id", "post", "author", "is_approved", "created_at", "updated_at"]
