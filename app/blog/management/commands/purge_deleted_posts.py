"""
Hard-delete posts that were soft-deleted more than N days ago.

Usage:
    python manage.py purge_deleted_posts
    python manage.py purge_deleted_posts --days 7 --dry-run
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from blog.services import PostService


class Command(BaseCommand):
    help = "Permanently remove posts soft-deleted more than --days ago"

    def add_arguments(self, parser):
        parser.add_argument(
            "--days",
            type=int,
            default=None,
            help=f"Age threshold in days (default: POST_PURGE_AFTER_DAYS={settings.POST_PURGE_AFTER_DAYS})",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report how many posts would be removed without deleting them",
        )

    def handle(self, *args, **options):
        days = options["days"]
        if days is None:
            days = settings.POST_PURGE_AFTER_DAYS
        if days < 0:
            raise CommandError("--days must be zero or positive")

        count = PostService.purge_deleted(days, dry_run=options["dry_run"])

        if options["dry_run"]:
            self.stdout.write(f"Would purge {count} post(s) deleted over {days} day(s) ago")
        else:
            self.stdout.write(
                self.style.SUCCESS(f"Purged {count} post(s) deleted over {days} day(s) ago")
            )
