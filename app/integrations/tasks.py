"""
Celery tasks for integrations.

Usage:
    from integrations.tasks import import_external_posts
    import_external_posts.delay("editor@example.com", limit=20)
"""

from __future__ import annotations

import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task
def import_external_posts(author_email: str, limit: int = 10) -> dict:
    """
    Import external posts as drafts for the given author.

    Returns:
        {"status": "ok", "created": n, "skipped": m} or
        {"status": "error", "error": ...}
    """
    from accounts.models import User
    from integrations.services import ExternalPostImportService

    try:
        author = User.objects.get(email__iexact=author_email)
    except User.DoesNotExist:
        logger.warning("Import author not found", extra={"email": author_email})
        return {"status": "error", "error": f"No user with email {author_email}"}

    result = ExternalPostImportService.import_posts(author, limit=limit)
    if not result:
        logger.error(
            "External post import failed",
            extra={"error": result.error, "error_code": result.error_code},
        )
        return {"status": "error", "error": result.error}

    return {"status": "ok", **result.data}
