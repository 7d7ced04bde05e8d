"""
Tests for webhook HMAC signing.
"""

import hashlib
import hmac

from webhooks.signing import sign_payload, verify_signature


class TestSignPayload:
    def test_format(self):
        body = b'{"id": "evt_1"}'
        expected = hmac.new(b"secret", body, hashlib.sha256).hexdigest()

        assert sign_payload("secret", body) == f"sha256={expected}"


class TestVerifySignature:
    def test_valid(self):
        body = b"payload"
        assert verify_signature("secret", body, sign_payload("secret", body))

    def test_wrong_secret(self):
        body = b"payload"
        assert not verify_signature("secret", body, sign_payload("other", body))

    def test_tampered_body(self):
        signature = sign_payload("secret", b"payload")
        assert not verify_signature("secret", b"payload!", signature)

    def test_missing_prefix(self):
        digest = sign_payload("secret", b"payload").removeprefix("sha256=")
        assert not verify_signature("secret", b"payload", digest)

    def test_empty_secret_always_fails(self):
        assert not verify_signature("", b"payload", sign_payload("", b"payload"))
