"""
Request context middleware.

Tags every request with a request ID and records how long it took.

Behavior:
    - Reuses the incoming X-Request-ID header, or generates a UUID4
    - Stores the ID on request.request_id for views and log calls
    - Logs method, path, status and duration on the core.middleware logger
    - Adds X-Request-ID and X-Response-Time-Ms to the response

Usage in config/settings.py:
    MIDDLEWARE = [
        "core.middleware.RequestContextMiddleware",
        "django.middleware.security.SecurityMiddleware",
        ...
    ]

Exceptions raised by views propagate unchanged; Django's exception handling
runs inside get_response, so the response seen here is already the error page.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time-Ms"

# Client-supplied IDs are echoed back and logged, so keep them short and plain
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9\-_.]{1,128}$")


class RequestContextMiddleware:
    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request.request_id = self._get_request_id(request)
        started = time.perf_counter()

        response = self.get_response(request)

        duration_ms = (time.perf_counter() - started) * 1000
        response[REQUEST_ID_HEADER] = request.request_id
        response[RESPONSE_TIME_HEADER] = f"{duration_ms:.2f}"

        logger.info(
            f"{request.method} {request.path} {response.status_code} "
            f"{duration_ms:.2f}ms",
            extra={
                "request_id": request.request_id,
                "method": request.method,
                "path": request.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response

    @staticmethod
    def _get_request_id(request: HttpRequest) -> str:
        incoming = request.headers.get(REQUEST_ID_HEADER, "")
        if incoming and _VALID_REQUEST_ID.match(incoming):
            return incoming
        return str(uuid.uuid4())
