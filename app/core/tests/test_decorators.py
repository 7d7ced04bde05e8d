"""
Tests for core.decorators.

Covers:
- rate_limit: counting per user / per IP, 429 body and Retry-After
- cache_response: caching of 200 responses only, custom keys, bypass
- log_request: debug logging around the wrapped view
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest
from django.contrib.auth.models import AnonymousUser
from django.core.cache import cache
from django.http import HttpResponse
from django.test import RequestFactory

from core.decorators import cache_response, log_request, rate_limit


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def rf():
    return RequestFactory()


def make_request(rf, path="/", user=None, ip="10.0.0.1"):
    request = rf.get(path, REMOTE_ADDR=ip)
    request.user = user or AnonymousUser()
    return request


class TestRateLimit:
    """Fixed-window rate limiting."""

    def test_allows_requests_up_to_limit(self, rf):
        @rate_limit(key="test", limit=2, period=60)
        def view(request):
            return HttpResponse("ok")

        assert view(make_request(rf)).status_code == 200
        assert view(make_request(rf)).status_code == 200

    def test_returns_429_over_limit(self, rf):
        @rate_limit(key="test", limit=1, period=30)
        def view(request):
            return HttpResponse("ok")

        view(make_request(rf))
        response = view(make_request(rf))

        assert response.status_code == 429
        assert response["Retry-After"] == "30"
        body = json.loads(response.content)
        assert body["error_code"] == "RATE_LIMIT_EXCEEDED"
        assert body["details"] == {"retry_after": 30}

    def test_counts_ips_separately(self, rf):
        @rate_limit(key="test", limit=1, period=60)
        def view(request):
            return HttpResponse("ok")

        view(make_request(rf, ip="10.0.0.1"))

        assert view(make_request(rf, ip="10.0.0.2")).status_code == 200

    def test_uses_user_id_for_authenticated_users(self, rf):
        @rate_limit(key="test", limit=1, period=60)
        def view(request):
            return HttpResponse("ok")

        user = MagicMock(is_authenticated=True, pk=7)
        view(make_request(rf, user=user, ip="10.0.0.1"))

        # Same user from another IP is still limited
        response = view(make_request(rf, user=user, ip="10.0.0.9"))
        assert response.status_code == 429


class TestCacheResponse:
    """Response caching."""

    def test_second_call_served_from_cache(self, rf):
        calls = []

        @cache_response(timeout=60)
        def view(request):
            calls.append(1)
            return HttpResponse("fresh")

        view(make_request(rf, "/posts/"))
        response = view(make_request(rf, "/posts/"))

        assert len(calls) == 1
        assert response.content == b"fresh"

    def test_query_string_is_part_of_default_key(self, rf):
        calls = []

        @cache_response(timeout=60)
        def view(request):
            calls.append(1)
            return HttpResponse("ok")

        view(make_request(rf, "/posts/?page=1"))
        view(make_request(rf, "/posts/?page=2"))

        assert len(calls) == 2

    def test_non_200_responses_are_not_cached(self, rf):
        calls = []

        @cache_response(timeout=60)
        def view(request):
            calls.append(1)
            return HttpResponse("missing", status=404)

        view(make_request(rf))
        view(make_request(rf))

        assert len(calls) == 2

    def test_key_func_returning_none_bypasses_cache(self, rf):
        calls = []

        @cache_response(timeout=60, key_func=lambda request: None)
        def view(request):
            calls.append(1)
            return HttpResponse("ok")

        view(make_request(rf))
        view(make_request(rf))

        assert len(calls) == 2

    def test_custom_key_func(self, rf):
        @cache_response(timeout=60, key_func=lambda request: "custom-key")
        def view(request):
            return HttpResponse("ok")

        view(make_request(rf))

        assert cache.get("custom-key") is not None


class TestLogRequest:
    def test_logs_request_and_response(self, rf, caplog):
        @log_request(logger_name="core.tests")
        def view(request):
            return HttpResponse("ok", status=201)

        with caplog.at_level(logging.DEBUG, logger="core.tests"):
            response = view(make_request(rf, "/health/"))

        assert response.status_code == 201
        messages = [record.getMessage() for record in caplog.records]
        assert "Request: GET /health/" in messages
        assert "Response: 201 for GET /health/" in messages
