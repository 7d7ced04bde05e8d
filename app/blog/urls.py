"""
API URL configuration for the blog (mounted at /api/v1/blog/).
"""

from rest_framework.routers import DefaultRouter

from blog.views import CategoryViewSet, CommentViewSet, PostViewSet, TagViewSet

router = DefaultRouter()
router.register("posts", PostViewSet, basename="post")
router.register("comments", CommentViewSet, basename="comment")
router.register("categories", CategoryViewSet, basename="category")
router.register("tags", TagViewSet, basename="tag")

urlpatterns = router.urls
