"""
API views for the blog.

URL Structure (prefix /api/v1/blog/):
    posts/                          GET, POST
    posts/{slug}/                   GET, PUT, PATCH, DELETE
    posts/{slug}/publish/           POST
    posts/{slug}/unpublish/         POST
    posts/{slug}/comments/          GET, POST
    comments/{id}/                  GET, PUT, PATCH, DELETE
    categories/, categories/{slug}/ GET (staff: POST, PUT, PATCH, DELETE)
    tags/, tags/{slug}/             GET (staff: POST, PUT, PATCH, DELETE)

Design Decisions:
    - Posts are looked up by slug; drafts of other users are invisible (404)
    - Status changes go through PostService so post_published fires once
    - Anonymous list responses are cached under a versioned key
      (blog.cache); any content write bumps the version
"""

from __future__ import annotations

from django.conf import settings
from django.core.cache import cache
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import (
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
)
from rest_framework import filters, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import (
    AllowAny,
    IsAuthenticated,
    IsAuthenticatedOrReadOnly,
)
from rest_framework.response import Response

from blog.cache import build_list_cache_key
from blog.filters import PostFilter
from blog.models import Category, Comment, Post, Tag
from blog.serializers import (
    CategorySerializer,
    CommentSerializer,
    PostDetailSerializer,
    PostListSerializer,
    TagSerializer,
)
from blog.services import CommentService, PostService
from core.permissions import IsOwnerOrReadOnly, IsStaffOrReadOnly

API_LIST_CACHE_PREFIX = "blog:api:posts"


@extend_schema_view(
    list=extend_schema(
        summary="List posts",
        description=(
            "Published posts plus the caller's own posts in any status. "
            "Supports filtering, ?search= and ?ordering=."
        ),
        tags=["Blog - Posts"],
    ),
    create=extend_schema(summary="Create post", tags=["Blog - Posts"]),
    retrieve=extend_schema(
        summary="Get post",
        description="Returns the post and counts the view.",
        tags=["Blog - Posts"],
    ),
    update=extend_schema(summary="Replace post", tags=["Blog - Posts"]),
    partial_update=extend_schema(summary="Update post", tags=["Blog - Posts"]),
    destroy=extend_schema(summary="Delete post (soft)", tags=["Blog - Posts"]),
)
class PostViewSet(viewsets.ModelViewSet):
    """
    ViewSet for posts.

    list:
        Paginated posts visible to the caller. Anonymous responses are
        served from the cache.

    retrieve:
        Post detail; increments view_count.

    publish / unpublish:
        Status changes for the author or staff. Service failures return
        400 with the ServiceResult body.

    comments:
        Approved comments (GET) or a new comment (POST).
    """

    lookup_field = "slug"
    permission_classes = [IsAuthenticatedOrReadOnly, IsOwnerOrReadOnly]
    # Set per action; ScopedRateThrottle ignores None
    throttle_scope = None
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = PostFilter
    search_fields = ["title", "content", "excerpt"]
    ordering_fields = ["published_at", "created_at", "view_count", "title"]
    ordering = ["-published_at", "-created_at"]

    def get_queryset(self):
        return Post.objects.visible_to(self.request.user).for_listing()

    def get_serializer_class(self):
        if self.action == "list":
            return PostListSerializer
        if self.action == "comments":
            return CommentSerializer
        return PostDetailSerializer

    def list(self, request, *args, **kwargs):
        if request.user.is_authenticated:
            return super().list(request, *args, **kwargs)

        cache_key = build_list_cache_key(request, prefix=API_LIST_CACHE_PREFIX)
        data = cache.get(cache_key)
        if data is None:
            data = super().list(request, *args, **kwargs).data
            cache.set(cache_key, data, timeout=settings.POST_LIST_CACHE_SECONDS)
        return Response(data)

    def retrieve(self, request, *args, **kwargs):
        post = self.get_object()
        PostService.increment_views(post)
        serializer = self.get_serializer(post)
        return Response(serializer.data)

    def perform_create(self, serializer):
        post = serializer.save(author=self.request.user)
        PostService.record_status_change(post, previous_status=None)

    def perform_update(self, serializer):
        previous_status = serializer.instance.status
        post = serializer.save()
        PostService.record_status_change(post, previous_status=previous_status)

    def perform_destroy(self, instance):
        instance.soft_delete()

    @extend_schema(
        summary="Publish post",
        tags=["Blog - Posts"],
        request=None,
        responses={
            200: PostDetailSerializer,
            400: OpenApiResponse(description="Post is already published"),
        },
    )
    @action(detail=True, methods=["post"])
    def publish(self, request, slug=None):
        post = self.get_object()
        result = PostService.publish(post)
        if not result:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)
        return Response(PostDetailSerializer(result.data, context={"request": request}).data)

    @extend_schema(
        summary="Unpublish post",
        description="Move a published post back to draft.",
        tags=["Blog - Posts"],
        request=None,
        responses={
            200: PostDetailSerializer,
            400: OpenApiResponse(description="Post is not published"),
        },
    )
    @action(detail=True, methods=["post"])
    def unpublish(self, request, slug=None):
        post = self.get_object()
        result = PostService.unpublish(post)
        if not result:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)
        return Response(PostDetailSerializer(result.data, context={"request": request}).data)

    @extend_schema(
        methods=["GET"],
        summary="List comments",
        tags=["Blog - Comments"],
        responses={200: CommentSerializer(many=True)},
    )
    @extend_schema(
        methods=["POST"],
        summary="Add comment",
        tags=["Blog - Comments"],
        request=CommentSerializer,
        responses={
            201: CommentSerializer,
            400: OpenApiResponse(description="Post is not published"),
        },
    )
    @action(
        detail=True,
        methods=["get", "post"],
        permission_classes=[IsAuthenticatedOrReadOnly],
        throttle_scope="comments",
    )
    def comments(self, request, slug=None):
        post = self.get_object()

        if request.method == "GET":
            queryset = (
                post.comments.filter(is_approved=True)
                .select_related("author", "author__profile", "post")
                .order_by("created_at")
            )
            page = self.paginate_queryset(queryset)
            serializer = CommentSerializer(page, many=True, context={"request": request})
            return self.get_paginated_response(serializer.data)

        serializer = CommentSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        result = CommentService.add_comment(
            post=post,
            author=request.user,
            body=serializer.validated_data["body"],
        )
        if not result:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)
        return Response(
            CommentSerializer(result.data, context={"request": request}).data,
            status=status.HTTP_201_CREATED,
        )


@extend_schema_view(
    list=extend_schema(summary="List comments", tags=["Blog - Comments"]),
    retrieve=extend_schema(summary="Get comment", tags=["Blog - Comments"]),
    update=extend_schema(summary="Replace comment", tags=["Blog - Comments"]),
    partial_update=extend_schema(summary="Edit comment", tags=["Blog - Comments"]),
    destroy=extend_schema(summary="Delete comment", tags=["Blog - Comments"]),
)
class CommentViewSet(viewsets.ModelViewSet):
    """
    Approved comments on visible posts. Editing and deletion are limited
    to the comment's author and staff. Comments are created through
    posts/{slug}/comments/.
    """

    serializer_class = CommentSerializer
    permission_classes = [IsAuthenticatedOrReadOnly, IsOwnerOrReadOnly]
    http_method_names = ["get", "put", "patch", "delete", "head", "options"]

    def get_queryset(self):
        visible_posts = Post.objects.visible_to(self.request.user)
        return (
            Comment.objects.filter(is_approved=True, post__in=visible_posts)
            .select_related("author", "author__profile", "post")
            .order_by("-created_at")
        )


@extend_schema_view(
    list=extend_schema(summary="List categories", tags=["Blog - Taxonomy"]),
    retrieve=extend_schema(summary="Get category", tags=["Blog - Taxonomy"]),
    create=extend_schema(summary="Create category", tags=["Blog - Taxonomy"]),
    update=extend_schema(summary="Replace category", tags=["Blog - Taxonomy"]),
    partial_update=extend_schema(summary="Update category", tags=["Blog - Taxonomy"]),
    destroy=extend_schema(summary="Delete category", tags=["Blog - Taxonomy"]),
)
class CategoryViewSet(viewsets.ModelViewSet):
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    lookup_field = "slug"

    def get_permissions(self):
        if self.request.method in ("GET", "HEAD", "OPTIONS"):
            return [AllowAny()]
        return [IsAuthenticated(), IsStaffOrReadOnly()]


@extend_schema_view(
    list=extend_schema(summary="List tags", tags=["Blog - Taxonomy"]),
    retrieve=extend_schema(summary="Get tag", tags=["Blog - Taxonomy"]),
    create=extend_schema(summary="Create tag", tags=["Blog - Taxonomy"]),
    update=extend_schema(summary="Replace tag", tags=["Blog - Taxonomy"]),
    partial_update=extend_schema(summary="Update tag", tags=["Blog - Taxonomy"]),
    destroy=extend_schema(summary="Delete tag", tags=["Blog - Taxonomy"]),
)
class TagViewSet(CategoryViewSet):
    queryset = Tag.objects.all()
    serializer_class = TagSerializer
