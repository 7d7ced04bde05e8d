"""
Tests for blog admin actions.
"""

import pytest
from django.contrib.admin.sites import AdminSite
from django.contrib.messages.storage.fallback import FallbackStorage
from django.test import RequestFactory

from blog.admin import CommentAdmin, PostAdmin
from blog.models import Comment, Post
from blog.tests.factories import CommentFactory, PostFactory


@pytest.fixture
def admin_request(staff_user):
    request = RequestFactory().post("/admin/")
    request.user = staff_user
    request.session = {}
    request._messages = FallbackStorage(request)
    return request


@pytest.mark.django_db
class TestPostAdminActions:
    def test_publish_selected(self, admin_request, mocker):
        handler = mocker.patch("blog.services.post_published.send")
        drafts = PostFactory.create_batch(2)
        already = PostFactory(published=True)
        model_admin = PostAdmin(Post, AdminSite())

        model_admin.publish_selected(
            admin_request, Post.objects.filter(pk__in=[p.pk for p in [*drafts, already]])
        )

        assert Post.objects.published().count() == 3
        assert handler.call_count == 2

    def test_archive_selected(self, admin_request, published_post):
        model_admin = PostAdmin(Post, AdminSite())

        model_admin.archive_selected(admin_request, Post.objects.all())

        published_post.refresh_from_db()
        assert published_post.status == Post.Status.ARCHIVED

    def test_changelist_includes_soft_deleted(self, admin_request, published_post):
        published_post.soft_delete()
        model_admin = PostAdmin(Post, AdminSite())

        assert published_post in model_admin.get_queryset(admin_request)


@pytest.mark.django_db
class TestCommentAdminActions:
    def test_reject_and_approve(self, admin_request, published_post):
        comment = CommentFactory(post=published_post)
        model_admin = CommentAdmin(Comment, AdminSite())

        model_admin.reject_comments(admin_request, Comment.objects.all())
        comment.refresh_from_db()
        assert comment.is_approved is False

        model_admin.approve_comments(admin_request, Comment.objects.all())
        comment.refresh_from_db()
        assert comment.is_approved is True
