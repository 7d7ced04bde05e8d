"""
Import of external posts as local drafts.

Related files:
    - client.py: ExternalPostsClient
    - tasks.py / management/commands/import_external_posts.py: callers
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.utils.text import Truncator

from blog.models import Post
from core.circuit_breaker import CircuitOpenError
from core.exceptions import ExternalServiceError
from core.services import BaseService, ServiceResult
from integrations.client import ExternalPost, ExternalPostsClient

if TYPE_CHECKING:
    from accounts.models import User


class ExternalPostImportService(BaseService):
    """
    Create draft posts from the external posts API.

    Posts are matched on external_id (soft-deleted ones included), so
    running the import twice creates nothing new.

    Usage:
        result = ExternalPostImportService.import_posts(author, limit=10)
        if result:
            print(result.data)  # {"created": 3, "skipped": 7}
    """

    @classmethod
    def import_posts(
        cls,
        author: User,
        limit: int = 10,
        client: ExternalPostsClient | None = None,
    ) -> ServiceResult[dict[str, int]]:
        logger = cls.get_logger()
        client = client or ExternalPostsClient()

        try:
            external_posts = client.list_posts(limit=limit)
        except CircuitOpenError as e:
            return ServiceResult.failure(str(e), "SERVICE_UNAVAILABLE")
        except ExternalServiceError as e:
            return ServiceResult.failure(e.message, e.error_code)

        existing = set(
            Post.all_objects.filter(
                external_id__in=[p.external_id for p in external_posts]
            ).values_list("external_id", flat=True)
        )

        created = 0
        with cls.atomic():
            for external_post in external_posts:
                if external_post.external_id in existing:
                    continue
                cls._create_draft(author, external_post)
                existing.add(external_post.external_id)
                created += 1

        counts = {"created": created, "skipped": len(external_posts) - created}
        logger.info(
            "Imported external posts",
            extra={
                "author_id": author.pk,
                "created_count": counts["created"],
                "skipped_count": counts["skipped"],
            },
        )
        return ServiceResult.success(counts)

    @staticmethod
    def _create_draft(author: User, external_post: ExternalPost) -> Post:
        title = external_post.title or f"External post {external_post.external_id}"
        return Post.objects.create(
            author=author,
            title=Truncator(title).chars(200),
            content=external_post.body,
            excerpt=Truncator(external_post.body).chars(300),
            status=Post.Status.DRAFT,
            external_id=external_post.external_id,
        )
