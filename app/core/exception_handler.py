"""
DRF exception handler that understands application errors.

Configured in settings:
    REST_FRAMEWORK = {
        "EXCEPTION_HANDLER": "core.exception_handler.api_exception_handler",
    }

BaseApplicationError subclasses raised from views or services become
responses shaped by BaseApplicationError.to_dict(). Everything else is
handled by DRF's default handler.
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.circuit_breaker import CircuitOpenError
from core.exceptions import BaseApplicationError, RateLimitError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """Convert application errors to API responses."""
    if isinstance(exc, BaseApplicationError):
        view = context.get("view")
        logger.warning(
            f"Application error in {view.__class__.__name__ if view else 'unknown'}: {exc}",
            extra={"error_code": exc.error_code},
        )
        response = Response(exc.to_dict(), status=exc.status_code)
        if isinstance(exc, RateLimitError) and "retry_after" in exc.details:
            response["Retry-After"] = str(exc.details["retry_after"])
        return response

    if isinstance(exc, CircuitOpenError):
        logger.warning(f"Circuit open: {exc}")
        return Response(
            {"error": str(exc), "error_code": "SERVICE_UNAVAILABLE"},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return exception_handler(exc, context)
