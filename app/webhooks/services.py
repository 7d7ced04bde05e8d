"""
Webhook service layer.

WebhookService sends signed events to subscribed endpoints.
InboundWebhookService applies events received from third parties.

Outbound envelope (also accepted inbound):
    {"id": "<uuid>", "type": "post.published", "data": {...}}

Related files:
    - receivers.py: Blog signals -> dispatch_event
    - tasks.py: deliver_webhook, retry_failed_webhook_deliveries,
      process_inbound_webhook
    - signing.py: HMAC signatures
"""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Any, Callable

import requests
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from core.exceptions import NotFoundError, ValidationError
from core.services import BaseService, ServiceResult
from webhooks.models import InboundWebhookEvent, WebhookDelivery, WebhookEndpoint
from webhooks.signing import SIGNATURE_HEADER, sign_payload

RETRY_BASE_DELAY_SECONDS = 30
RETRY_MAX_DELAY_SECONDS = 3600


def backoff_delay(attempt: int) -> int:
    """Exponential backoff: 30s, 60s, 120s, ... capped at one hour."""
    return min(RETRY_BASE_DELAY_SECONDS * 2 ** max(attempt - 1, 0), RETRY_MAX_DELAY_SECONDS)


class WebhookService(BaseService):
    """
    Outbound webhook delivery.

    Usage:
        WebhookService.dispatch_event("post.published", {"slug": post.slug})
    """

    @classmethod
    def dispatch_event(
        cls, event_type: str, payload: dict[str, Any]
    ) -> list[WebhookDelivery]:
        """
        Create a delivery per subscribed endpoint and queue it on commit.

        Returns:
            The created deliveries (possibly empty)
        """
        from webhooks.tasks import deliver_webhook

        # Round-trip so dates and UUIDs are stored as plain JSON
        payload = json.loads(json.dumps(payload, cls=DjangoJSONEncoder))

        deliveries = [
            WebhookDelivery.objects.create(
                endpoint=endpoint, event_type=event_type, payload=payload
            )
            for endpoint in WebhookEndpoint.objects.filter(is_active=True)
            if endpoint.subscribes_to(event_type)
        ]

        for delivery in deliveries:
            transaction.on_commit(
                lambda delivery_id=str(delivery.pk): deliver_webhook.delay(delivery_id)
            )

        if deliveries:
            cls.get_logger().info(
                f"Dispatched {event_type} to {len(deliveries)} endpoint(s)",
                extra={"event_type": event_type, "count": len(deliveries)},
            )
        return deliveries

    @staticmethod
    def build_body(delivery: WebhookDelivery) -> bytes:
        envelope = {
            "id": str(delivery.pk),
            "type": delivery.event_type,
            "created": delivery.created_at,
            "data": delivery.payload,
        }
        return json.dumps(envelope, cls=DjangoJSONEncoder).encode("utf-8")

    @classmethod
    def claim(cls, delivery_id: str) -> WebhookDelivery | None:
        """
        Lock a delivery for one attempt.

        Returns None when the delivery already succeeded or its next attempt
        is not due yet (a backoff is pending or another worker is sending).
        A claimed delivery gets a short lease in next_attempt_at so that
        overlapping claims back off.

        Raises:
            WebhookDelivery.DoesNotExist: Unknown delivery_id
        """
        now = timezone.now()
        with transaction.atomic():
            delivery = WebhookDelivery.objects.select_for_update().get(pk=delivery_id)
            if delivery.status == WebhookDelivery.Status.SUCCEEDED:
                return None
            if delivery.next_attempt_at and delivery.next_attempt_at > now:
                return None
            delivery.next_attempt_at = now + timedelta(
                seconds=settings.WEBHOOK_TIMEOUT_SECONDS * 2
            )
            delivery.save(update_fields=["next_attempt_at", "updated_at"])
        return delivery

    @classmethod
    def deliver(cls, delivery: WebhookDelivery) -> ServiceResult[WebhookDelivery]:
        """
        Make one HTTP attempt for a delivery and record the outcome.

        A 2xx response marks the delivery succeeded. Any other status or a
        network error marks it failed with last_error set, and schedules
        next_attempt_at while attempts remain.
        """
        logger = cls.get_logger()
        endpoint = delivery.endpoint
        body = cls.build_body(delivery)
        headers = {
            "Content-Type": "application/json",
            "X-Webhook-Event": delivery.event_type,
            "X-Webhook-Delivery": str(delivery.pk),
            SIGNATURE_HEADER: sign_payload(endpoint.secret, body),
        }

        WebhookDelivery.objects.filter(pk=delivery.pk).update(
            attempt_count=F("attempt_count") + 1
        )
        delivery.refresh_from_db(fields=["attempt_count"])
        update_fields = [
            "status",
            "response_status_code",
            "response_body",
            "last_error",
            "delivered_at",
            "next_attempt_at",
            "updated_at",
        ]

        try:
            response = requests.post(
                endpoint.url,
                data=body,
                headers=headers,
                timeout=settings.WEBHOOK_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            delivery.status = WebhookDelivery.Status.FAILED
            delivery.response_status_code = None
            delivery.response_body = ""
            delivery.last_error = f"{type(e).__name__}: {e}"
            delivery.next_attempt_at = cls._next_attempt_at(delivery)
            delivery.save(update_fields=update_fields)
            logger.warning(
                "Webhook delivery failed",
                extra={
                    "delivery_id": str(delivery.pk),
                    "attempt": delivery.attempt_count,
                    "error": str(e),
                },
            )
            return ServiceResult.failure(delivery.last_error, "DELIVERY_FAILED")

        delivery.response_status_code = response.status_code
        delivery.response_body = response.text[: WebhookDelivery.RESPONSE_BODY_LIMIT]

        if 200 <= response.status_code < 300:
            delivery.status = WebhookDelivery.Status.SUCCEEDED
            delivery.last_error = ""
            delivery.delivered_at = timezone.now()
            delivery.next_attempt_at = None
            delivery.save(update_fields=update_fields)
            logger.info(
                "Webhook delivered",
                extra={
                    "delivery_id": str(delivery.pk),
                    "status_code": response.status_code,
                },
            )
            return ServiceResult.success(delivery)

        delivery.status = WebhookDelivery.Status.FAILED
        delivery.last_error = f"HTTP {response.status_code}"
        delivery.next_attempt_at = cls._next_attempt_at(delivery)
        delivery.save(update_fields=update_fields)
        logger.warning(
            "Webhook endpoint returned an error status",
            extra={
                "delivery_id": str(delivery.pk),
                "status_code": response.status_code,
                "attempt": delivery.attempt_count,
            },
        )
        return ServiceResult.failure(delivery.last_error, "DELIVERY_FAILED")

    @staticmethod
    def _next_attempt_at(delivery: WebhookDelivery):
        if delivery.attempt_count >= settings.WEBHOOK_MAX_ATTEMPTS:
            return None
        return timezone.now() + timedelta(seconds=backoff_delay(delivery.attempt_count))

    @classmethod
    def retryable_deliveries(cls):
        """Failed deliveries with attempts left whose backoff has elapsed."""
        return WebhookDelivery.objects.filter(
            Q(next_attempt_at__isnull=True) | Q(next_attempt_at__lte=timezone.now()),
            status=WebhookDelivery.Status.FAILED,
            attempt_count__lt=settings.WEBHOOK_MAX_ATTEMPTS,
            endpoint__is_active=True,
        )


class InboundWebhookService(BaseService):
    """
    Apply inbound events.

    Supported types:
        ping: No-op, used by senders to check connectivity
        post.unpublish: data.slug -> PostService.unpublish
        comment.flagged: data.comment_id -> hide the comment
    """

    @classmethod
    def handlers(cls) -> dict[str, Callable[[dict], ServiceResult]]:
        return {
            "ping": cls._handle_ping,
            "post.unpublish": cls._handle_post_unpublish,
            "comment.flagged": cls._handle_comment_flagged,
        }

    @classmethod
    def process(cls, event: InboundWebhookEvent) -> ServiceResult[InboundWebhookEvent]:
        """
        Route an event to its handler and record the outcome.

        Already processed events are returned untouched.
        """
        logger = cls.get_logger()

        if event.status == InboundWebhookEvent.Status.PROCESSED:
            return ServiceResult.success(event)

        handler = cls.handlers().get(event.event_type)
        if handler is None:
            event.status = InboundWebhookEvent.Status.IGNORED
            event.processed_at = timezone.now()
            event.save(update_fields=["status", "processed_at", "updated_at"])
            logger.info(
                f"Ignoring unhandled webhook type: {event.event_type}",
                extra={"event_id": event.event_id},
            )
            return ServiceResult.success(event)

        data = event.payload.get("data") or {}
        if not isinstance(data, dict):
            result = ServiceResult.failure("data must be an object", "VALIDATION_ERROR")
        else:
            try:
                result = handler(data)
            except (NotFoundError, ValidationError) as e:
                result = ServiceResult.failure(e.message, e.error_code)

        if not result:
            event.status = InboundWebhookEvent.Status.FAILED
            event.error_message = result.error or ""
            event.save(update_fields=["status", "error_message", "updated_at"])
            logger.warning(
                "Inbound webhook failed",
                extra={
                    "event_id": event.event_id,
                    "event_type": event.event_type,
                    "error": result.error,
                },
            )
            return ServiceResult.failure(result.error, result.error_code)

        event.status = InboundWebhookEvent.Status.PROCESSED
        event.processed_at = timezone.now()
        event.error_message = ""
        event.save(
            update_fields=["status", "processed_at", "error_message", "updated_at"]
        )
        logger.info(
            "Inbound webhook processed",
            extra={"event_id": event.event_id, "event_type": event.event_type},
        )
        return ServiceResult.success(event)

    @staticmethod
    def _handle_ping(data: dict) -> ServiceResult:
        return ServiceResult.success(None)

    @staticmethod
    def _handle_post_unpublish(data: dict) -> ServiceResult:
        from blog.models import Post
        from blog.services import PostService

        slug = data.get("slug")
        if not slug:
            raise ValidationError("data.slug is required")
        try:
            post = Post.objects.get(slug=slug)
        except Post.DoesNotExist:
            raise NotFoundError(f"Post '{slug}' not found")
        return PostService.unpublish(post)

    @staticmethod
    def _handle_comment_flagged(data: dict) -> ServiceResult:
        from blog.models import Comment
        from blog.services import CommentService

        comment_id = data.get("comment_id")
        if comment_id is None:
            raise ValidationError("data.comment_id is required")
        try:
            comment = Comment.objects.get(pk=comment_id)
        except (Comment.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(f"Comment {comment_id} not found")
        return ServiceResult.success(
            CommentService.set_approval(comment, approved=False)
        )
