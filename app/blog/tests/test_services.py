"""
Tests for PostService and CommentService.
"""

from datetime import timedelta

import pytest
from django.utils import timezone
from freezegun import freeze_time

from blog.models import Comment, Post
from blog.services import CommentService, PostService
from blog.signals import comment_posted, post_published
from blog.tests.factories import CommentFactory, PostFactory


@pytest.fixture
def published_signal():
    received = []

    def handler(sender, post, **kwargs):
        received.append(post)

    post_published.connect(handler, dispatch_uid="test.published")
    yield received
    post_published.disconnect(dispatch_uid="test.published")


@pytest.fixture
def comment_signal():
    received = []

    def handler(sender, comment, **kwargs):
        received.append(comment)

    comment_posted.connect(handler, dispatch_uid="test.comment")
    yield received
    comment_posted.disconnect(dispatch_uid="test.comment")


@pytest.mark.django_db
class TestPublish:
    @freeze_time("2026-03-01 12:00:00")
    def test_publish_sets_status_and_timestamp(self, draft_post, published_signal):
        result = PostService.publish(draft_post)

        assert result.success
        draft_post.refresh_from_db()
        assert draft_post.status == Post.Status.PUBLISHED
        assert draft_post.published_at == timezone.now()
        assert published_signal == [draft_post]

    def test_publish_keeps_existing_published_at(self, draft_post):
        earlier = timezone.now() - timedelta(days=3)
        draft_post.published_at = earlier
        draft_post.save()

        PostService.publish(draft_post)

        draft_post.refresh_from_db()
        assert draft_post.published_at == earlier

    def test_publish_twice_fails(self, published_post, published_signal):
        result = PostService.publish(published_post)

        assert not result
        assert result.error_code == "ALREADY_PUBLISHED"
        assert published_signal == []


@pytest.mark.django_db
class TestUnpublish:
    def test_unpublish_returns_to_draft(self, published_post):
        result = PostService.unpublish(published_post)

        assert result.success
        published_post.refresh_from_db()
        assert published_post.status == Post.Status.DRAFT
        assert published_post.published_at is not None

    def test_unpublish_draft_fails(self, draft_post):
        result = PostService.unpublish(draft_post)

        assert result.error_code == "NOT_PUBLISHED"

    def test_archive(self, published_post):
        assert PostService.archive(published_post)
        assert not PostService.archive(published_post)


@pytest.mark.django_db
class TestRecordStatusChange:
    def test_sends_signal_when_entering_published(self, published_post, published_signal):
        assert PostService.record_status_change(published_post, Post.Status.DRAFT)
        assert published_signal == [published_post]

    def test_sends_signal_on_create_as_published(self, published_post, published_signal):
        assert PostService.record_status_change(published_post, None)

    def test_no_signal_when_already_published(self, published_post, published_signal):
        assert not PostService.record_status_change(
            published_post, Post.Status.PUBLISHED
        )
        assert published_signal == []

    def test_no_signal_for_drafts(self, draft_post, published_signal):
        assert not PostService.record_status_change(draft_post, None)
        assert published_signal == []


@pytest.mark.django_db
class TestIncrementViews:
    def test_increments_in_database_and_instance(self, published_post):
        PostService.increment_views(published_post)
        PostService.increment_views(published_post)

        assert published_post.view_count == 2
        published_post.refresh_from_db()
        assert published_post.view_count == 2

    def test_uses_database_value_not_stale_instance(self, published_post):
        stale = Post.objects.get(pk=published_post.pk)
        PostService.increment_views(published_post)

        PostService.increment_views(stale)

        published_post.refresh_from_db()
        assert published_post.view_count == 2


@pytest.mark.django_db
class TestPurgeDeleted:
    def test_purges_only_old_deleted_posts(self):
        old = PostFactory()
        recent = PostFactory()
        alive = PostFactory()

        with freeze_time(timezone.now() - timedelta(days=40)):
            old.soft_delete()
        recent.soft_delete()

        count = PostService.purge_deleted(days=30)

        assert count == 1
        assert not Post.all_objects.filter(pk=old.pk).exists()
        assert Post.all_objects.filter(pk=recent.pk).exists()
        assert Post.objects.filter(pk=alive.pk).exists()

    def test_purge_removes_comments(self):
        comment = CommentFactory()
        with freeze_time(timezone.now() - timedelta(days=40)):
            comment.post.soft_delete()

        PostService.purge_deleted(days=30)

        assert not Comment.objects.filter(pk=comment.pk).exists()

    def test_dry_run_deletes_nothing(self):
        post = PostFactory()
        with freeze_time(timezone.now() - timedelta(days=40)):
            post.soft_delete()

        assert PostService.purge_deleted(days=30, dry_run=True) == 1
        assert Post.all_objects.filter(pk=post.pk).exists()


@pytest.mark.django_db
class TestAddComment:
    def test_creates_comment_and_sends_signal(
        self, published_post, other_user, comment_signal
    ):
        result = CommentService.add_comment(published_post, other_user, "  Nice post  ")

        assert result.success
        assert result.data.body == "Nice post"
        assert result.data.is_approved is True
        assert comment_signal == [result.data]

    def test_rejects_draft_post(self, draft_post, other_user, comment_signal):
        result = CommentService.add_comment(draft_post, other_user, "Hello")

        assert result.error_code == "POST_NOT_PUBLISHED"
        assert not Comment.objects.exists()
        assert comment_signal == []

    def test_rejects_blank_body(self, published_post, other_user):
        result = CommentService.add_comment(published_post, other_user, "   ")

        assert result.error_code == "VALIDATION_ERROR"
        assert "body" in result.errors

    def test_set_approval(self, published_post):
        comment = CommentFactory(post=published_post)

        CommentService.set_approval(comment, approved=False)

        comment.refresh_from_db()
        assert comment.is_approved is False
