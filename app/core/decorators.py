"""
Custom decorators for function-based views.

This module provides generic infrastructure decorators for:
- Rate limiting (cache-based fixed window)
- Response caching
- Request/response logging

Usage:
    from core.decorators import rate_limit, cache_response, log_request

    @rate_limit(key="inbound_webhook", limit=60, period=60)
    def incoming_webhook(request):
        ...

    @cache_response(timeout=300, key_func=build_list_cache_key)
    def post_list(request):
        ...

    @log_request()
    def health_check(request):
        ...

Note:
    - These wrap plain Django views. DRF views use throttle classes instead.
    - Counters and cached responses live in the default Django cache, so
      they are shared between workers when the cache is Redis.
"""

from __future__ import annotations

import functools
import logging
from typing import Callable

from django.core.cache import cache
from django.http import JsonResponse

from core.exceptions import RateLimitError
from core.helpers import get_client_ip

logger = logging.getLogger(__name__)


def rate_limit(key: str, limit: int, period: int):
    """
    Rate limit decorator backed by the Django cache.

    Limits the number of calls within a fixed window of `period` seconds.
    Uses the authenticated user's ID or client IP as identifier.

    Args:
        key: Unique key prefix for this rate limit
        limit: Maximum number of requests per window
        period: Window length in seconds

    HTTP 429 Response:
        {"error": "...", "error_code": "RATE_LIMIT_EXCEEDED",
         "details": {"retry_after": <period>}}
        with a Retry-After header.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(request, *args, **kwargs):
            user = getattr(request, "user", None)
            if user is not None and user.is_authenticated:
                identifier = f"user:{user.pk}"
            else:
                identifier = f"ip:{get_client_ip(request)}"

            cache_key = f"rate_limit:{key}:{identifier}"

            # add() only sets the key when missing, so the window starts on
            # the first request and is not extended by later ones
            if cache.add(cache_key, 1, timeout=period):
                current = 1
            else:
                try:
                    current = cache.incr(cache_key)
                except ValueError:
                    # Key expired between add() and incr()
                    cache.set(cache_key, 1, timeout=period)
                    current = 1

            if current > limit:
                logger.warning(
                    f"Rate limit exceeded for {identifier}: {key}",
                    extra={"rate_limit_key": key, "limit": limit},
                )
                error = RateLimitError(
                    "Rate limit exceeded. Try again later.",
                    details={"retry_after": period},
                )
                response = JsonResponse(error.to_dict(), status=error.status_code)
                response["Retry-After"] = str(period)
                return response

            return func(request, *args, **kwargs)

        return wrapper

    return decorator


def cache_response(timeout: int = 300, key_func: Callable | None = None):
    """
    Cache view response.

    Only 200 responses are cached. Template responses are rendered before
    being stored.

    Args:
        timeout: Cache timeout in seconds
        key_func: Optional function to generate cache key from request.
            Defaults to the full path including the query string. When it
            returns None the request bypasses the cache.

    Example:
        @cache_response(timeout=300, key_func=lambda r: f"view:{r.path}:{r.user.id}")
        def user_specific_view(request):
            ...
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(request, *args, **kwargs):
            if key_func:
                cache_key = key_func(request)
            else:
                cache_key = f"response_cache:{request.get_full_path()}"

            if cache_key is None:
                return func(request, *args, **kwargs)

            cached_response = cache.get(cache_key)
            if cached_response is not None:
                logger.debug(f"Cache hit: {cache_key}")
                return cached_response

            response = func(request, *args, **kwargs)

            if getattr(response, "status_code", None) == 200:
                if hasattr(response, "render") and callable(response.render):
                    response.add_post_render_callback(
                        lambda r: cache.set(cache_key, r, timeout=timeout)
                    )
                else:
                    cache.set(cache_key, response, timeout=timeout)

            return response

        return wrapper

    return decorator


def log_request(logger_name: str | None = None):
    """
    Log request/response for debugging.

    Logs request method, path, user, and response status at DEBUG level.

    Args:
        logger_name: Optional logger name (defaults to view module)
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(request, *args, **kwargs):
            log = logging.getLogger(logger_name or func.__module__)

            user_str = (
                str(request.user) if hasattr(request, "user") else "anonymous"
            )
            log.debug(
                f"Request: {request.method} {request.path}",
                extra={
                    "user": user_str,
                    "method": request.method,
                    "path": request.path,
                },
            )

            response = func(request, *args, **kwargs)

            status_code = getattr(response, "status_code", "unknown")
            log.debug(
                f"Response: {status_code} for {request.method} {request.path}",
                extra={
                    "status_code": status_code,
                    "method": request.method,
                    "path": request.path,
                },
            )

            return response

        return wrapper

    return decorator
