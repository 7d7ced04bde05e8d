"""
Import posts from the external posts API as drafts.

Usage:
    python manage.py import_external_posts --author editor@example.com
    python manage.py import_external_posts --author editor@example.com --limit 50
"""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from integrations.client import MAX_LIMIT
from integrations.services import ExternalPostImportService


class Command(BaseCommand):
    help = "Import external posts as drafts owned by --author"

    def add_arguments(self, parser):
        parser.add_argument(
            "--author",
            required=True,
            help="E-mail of the user who will own the imported drafts",
        )
        parser.add_argument(
            "--limit",
            type=int,
            default=10,
            help=f"Number of posts to fetch (1-{MAX_LIMIT}, default: 10)",
        )

    def handle(self, *args, **options):
        limit = options["limit"]
        if not 1 <= limit <= MAX_LIMIT:
            raise CommandError(f"--limit must be between 1 and {MAX_LIMIT}")

        User = get_user_model()
        try:
            author = User.objects.get(email__iexact=options["author"])
        except User.DoesNotExist:
            raise CommandError(f"No user with email {options['author']}")

        result = ExternalPostImportService.import_posts(author, limit=limit)
        if not result:
            raise CommandError(f"Import failed: {result.error}")

        self.stdout.write(
            self.style.SUCCESS(
                f"Created {result.data['created']} draft(s), "
                f"skipped {result.data['skipped']} already imported"
            )
        )
