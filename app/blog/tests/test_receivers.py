"""
Tests for blog signal receivers and the versioned list cache.
"""

import pytest
from django.test import RequestFactory

from blog.cache import (
    anonymous_list_cache_key,
    build_list_cache_key,
    bump_posts_version,
    get_posts_version,
)
from blog.services import CommentService
from blog.tests.factories import CategoryFactory, CommentFactory, PostFactory, TagFactory


class TestListCacheKeys:
    def test_version_starts_at_one(self):
        assert get_posts_version() == 1

    def test_bump_increments(self):
        get_posts_version()

        assert bump_posts_version() == 2
        assert get_posts_version() == 2

    def test_bump_without_existing_key(self):
        assert bump_posts_version() == 2

    def test_key_changes_with_version_and_path(self):
        request = RequestFactory().get("/api/v1/blog/posts/?page=2")

        first = build_list_cache_key(request)
        bump_posts_version()
        second = build_list_cache_key(request)

        assert first != second
        assert ":v1:" in first
        assert ":v2:" in second

    def test_key_includes_language(self):
        from django.utils import translation

        request = RequestFactory().get("/")
        with translation.override("es"):
            key = build_list_cache_key(request)

        assert ":es:" in key

    def test_anonymous_key_is_none_for_authenticated(self):
        request = RequestFactory().get("/")
        request.user = type("U", (), {"is_authenticated": True})()

        assert anonymous_list_cache_key(request) is None


@pytest.mark.django_db
class TestCacheInvalidation:
    @pytest.mark.parametrize(
        "factory",
        [PostFactory, CategoryFactory, TagFactory, CommentFactory],
        ids=["post", "category", "tag", "comment"],
    )
    def test_saving_content_bumps_version(self, factory):
        before = get_posts_version()

        factory()

        assert get_posts_version() > before

    def test_deleting_bumps_version(self, published_post):
        before = get_posts_version()

        published_post.hard_delete()

        assert get_posts_version() > before

    def test_tag_assignment_bumps_version(self, published_post, tag):
        before = get_posts_version()

        published_post.tags.add(tag)

        assert get_posts_version() > before


@pytest.mark.django_db
class TestCommentNotificationReceiver:
    def test_queues_notification_on_commit(
        self, published_post, other_user, mocker, django_capture_on_commit_callbacks
    ):
        delay = mocker.patch("blog.tasks.send_comment_notification.delay")

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            result = CommentService.add_comment(published_post, other_user, "Hello!")

        assert len(callbacks) >= 1
        delay.assert_called_once_with(result.data.pk)

    def test_own_comment_sends_nothing(
        self, published_post, user, mocker, django_capture_on_commit_callbacks
    ):
        delay = mocker.patch("blog.tasks.send_comment_notification.delay")

        with django_capture_on_commit_callbacks(execute=True):
            CommentService.add_comment(published_post, user, "Replying to myself")

        delay.assert_not_called()

    def test_author_receives_email_end_to_end(
        self, published_post, other_user, mailoutbox, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            CommentService.add_comment(published_post, other_user, "Lovely write-up")

        assert len(mailoutbox) == 1
        message = mailoutbox[0]
        assert message.to == [published_post.author.email]
        assert "Hello Django" in message.subject
        assert "Lovely write-up" in message.body
