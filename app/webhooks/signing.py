"""
HMAC-SHA256 signatures for webhook payloads.

Header format: ``X-Webhook-Signature: sha256=<hex digest of raw body>``
"""

from __future__ import annotations

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Webhook-Signature"
SIGNATURE_PREFIX = "sha256="


def sign_payload(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(secret: str, body: bytes, signature: str) -> bool:
    """
    Verify a signature header against the raw request body.

    Returns:
        True if signature is valid. Always False when no secret is configured.
    """
    if not secret:
        logger.warning("Webhook secret not configured, rejecting request")
        return False

    expected = sign_payload(secret, body)
    return hmac.compare_digest(expected, signature or "")
