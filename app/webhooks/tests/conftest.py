"""
Fixtures for webhook tests.
"""

import json

import pytest
from django.core.cache import cache

from webhooks.signing import sign_payload


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def signed_post(client, settings):
    """POST a JSON event to the inbound receiver, signed with the configured secret."""

    def _post(event, secret=None, signature=None):
        body = event if isinstance(event, bytes) else json.dumps(event).encode()
        headers = {}
        if signature is None:
            signature = sign_payload(secret or settings.INBOUND_WEBHOOK_SECRET, body)
        if signature:
            headers["HTTP_X_WEBHOOK_SIGNATURE"] = signature
        return client.post(
            "/api/v1/webhooks/incoming/",
            data=body,
            content_type="application/json",
            **headers,
        )

    return _post
