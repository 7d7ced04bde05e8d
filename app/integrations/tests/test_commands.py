"""
Tests for the import_external_posts management command.
"""

from io import StringIO

import pytest
import requests
from django.core.management import CommandError, call_command


@pytest.mark.django_db
class TestImportExternalPostsCommand:
    def test_imports(self, upstream, user):
        out = StringIO()

        call_command("import_external_posts", "--author", user.email, "--limit", "3", stdout=out)

        assert "Created 3 draft(s), skipped 0" in out.getvalue()

    def test_unknown_author(self, upstream):
        with pytest.raises(CommandError, match="No user"):
            call_command("import_external_posts", "--author", "ghost@example.com")

    def test_limit_out_of_range(self, user):
        with pytest.raises(CommandError, match="--limit"):
            call_command("import_external_posts", "--author", user.email, "--limit", "0")

    def test_upstream_failure(self, upstream, user):
        upstream.error = requests.ConnectionError("down")

        with pytest.raises(CommandError, match="Import failed"):
            call_command("import_external_posts", "--author", user.email)
