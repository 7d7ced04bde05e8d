"""
Tests for the import_external_posts task.
"""

import pytest
import requests

from integrations.tasks import import_external_posts


@pytest.mark.django_db
class TestImportExternalPostsTask:
    def test_imports_for_author(self, upstream, user):
        result = import_external_posts(user.email.upper(), limit=3)

        assert result == {"status": "ok", "created": 3, "skipped": 0}

    def test_unknown_author(self, db):
        result = import_external_posts("ghost@example.com")

        assert result["status"] == "error"

    def test_upstream_error(self, upstream, user):
        upstream.error = requests.ConnectionError("down")

        result = import_external_posts(user.email)

        assert result["status"] == "error"
