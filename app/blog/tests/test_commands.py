"""
Tests for the purge_deleted_posts management command.
"""

from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import CommandError, call_command
from django.utils import timezone
from freezegun import freeze_time

from blog.models import Post
from blog.tests.factories import PostFactory


@pytest.fixture
def old_deleted_post(db):
    post = PostFactory()
    with freeze_time(timezone.now() - timedelta(days=45)):
        post.soft_delete()
    return post


@pytest.mark.django_db
class TestPurgeDeletedPostsCommand:
    def test_purges(self, old_deleted_post):
        out = StringIO()

        call_command("purge_deleted_posts", "--days", "30", stdout=out)

        assert "Purged 1 post(s)" in out.getvalue()
        assert not Post.all_objects.filter(pk=old_deleted_post.pk).exists()

    def test_dry_run(self, old_deleted_post):
        out = StringIO()

        call_command("purge_deleted_posts", "--days", "30", "--dry-run", stdout=out)

        assert "Would purge 1 post(s)" in out.getvalue()
        assert Post.all_objects.filter(pk=old_deleted_post.pk).exists()

    def test_negative_days_rejected(self):
        with pytest.raises(CommandError):
            call_command("purge_deleted_posts", "--days", "-1")
