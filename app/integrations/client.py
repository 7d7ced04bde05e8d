"""
Client for the external posts REST API.

The upstream is JSONPlaceholder compatible:
    GET {base}/posts?_limit=N   -> [{"id", "userId", "title", "body"}, ...]
    GET {base}/posts/{id}       -> {"id", "userId", "title", "body"}

Responses are cached for EXTERNAL_API_CACHE_SECONDS and every call goes
through the "external-posts" circuit breaker, so a failing upstream is
not hammered by web and Celery workers alike.

Usage:
    from integrations.client import ExternalPostsClient

    client = ExternalPostsClient()
    posts = client.list_posts(limit=5)
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

import requests
from django.conf import settings
from django.core.cache import cache

from core.circuit_breaker import CircuitBreaker
from core.exceptions import ExternalServiceError, NotFoundError

logger = logging.getLogger(__name__)

CACHE_PREFIX = "integrations:external-posts"
MAX_LIMIT = 100


@dataclass(frozen=True)
class ExternalPost:
    external_id: str
    title: str
    body: str
    user_id: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> ExternalPost:
        try:
            return cls(
                external_id=str(data["id"]),
                title=str(data.get("title") or "").strip(),
                body=str(data.get("body") or "").strip(),
                user_id=data.get("userId"),
            )
        except (KeyError, TypeError) as e:
            raise ExternalServiceError(
                "Unexpected response from external posts API",
                details={"reason": str(e)},
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def get_circuit() -> CircuitBreaker:
    return CircuitBreaker(
        "external-posts",
        failure_threshold=settings.EXTERNAL_API_CIRCUIT_FAILURE_THRESHOLD,
        recovery_timeout=settings.EXTERNAL_API_CIRCUIT_RECOVERY_TIMEOUT,
        failure_exceptions=(ExternalServiceError,),
    )


class ExternalPostsClient:
    """
    Thin requests.Session wrapper.

    Raises:
        ExternalServiceError: Network failure, non-2xx status or bad JSON
        NotFoundError: get_post() for an ID the upstream does not know
        CircuitOpenError: The circuit is open
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or settings.EXTERNAL_POSTS_API_URL).rstrip("/")
        self.timeout = timeout or settings.EXTERNAL_API_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")
        self.circuit = get_circuit()

    def list_posts(self, limit: int = 10) -> list[ExternalPost]:
        limit = max(1, min(int(limit), MAX_LIMIT))
        cache_key = f"{CACHE_PREFIX}:list:{limit}"

        cached = cache.get(cache_key)
        if cached is not None:
            return [ExternalPost(**item) for item in cached]

        data = self._get("/posts", params={"_limit": limit})
        if not isinstance(data, list):
            raise ExternalServiceError("Expected a list of posts from external API")

        posts = [ExternalPost.from_api(item) for item in data[:limit]]
        cache.set(
            cache_key,
            [post.to_dict() for post in posts],
            settings.EXTERNAL_API_CACHE_SECONDS,
        )
        return posts

    def get_post(self, external_id: str | int) -> ExternalPost:
        cache_key = f"{CACHE_PREFIX}:post:{external_id}"

        cached = cache.get(cache_key)
        if cached is not None:
            return ExternalPost(**cached)

        data = self._get(f"/posts/{external_id}")
        if not isinstance(data, dict):
            raise ExternalServiceError("Expected a post object from external API")

        post = ExternalPost.from_api(data)
        cache.set(cache_key, post.to_dict(), settings.EXTERNAL_API_CACHE_SECONDS)
        return post

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"

        with self.circuit.call():
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
            except requests.RequestException as e:
                logger.warning(
                    "External posts API request failed",
                    extra={"url": url, "error": str(e)},
                )
                raise ExternalServiceError(
                    "External posts API is unreachable",
                    details={"reason": type(e).__name__},
                )

            # A 404 is an answer from a healthy upstream; it must not count
            # as a circuit failure
            if response.status_code == 404:
                raise NotFoundError(
                    "External post not found",
                    error_code="EXTERNAL_POST_NOT_FOUND",
                    details={"path": path},
                )

            if not response.ok:
                logger.warning(
                    "External posts API returned an error status",
                    extra={"url": url, "status_code": response.status_code},
                )
                raise ExternalServiceError(
                    "External posts API returned an error",
                    details={"status_code": response.status_code},
                )

            try:
                return response.json()
            except ValueError:
                raise ExternalServiceError("External posts API returned invalid JSON")
