"""
Celery tasks for webhooks.

Tasks:
- deliver_webhook: One outbound delivery, retried with exponential backoff
- retry_failed_webhook_deliveries: Requeue failed deliveries (celery-beat, 15 min)
- process_inbound_webhook: Apply a stored inbound event

Usage:
    from webhooks.tasks import deliver_webhook
    deliver_webhook.delay(str(delivery.pk))
"""

from __future__ import annotations

import logging

from celery import shared_task
from django.conf import settings

from webhooks.models import InboundWebhookEvent, WebhookDelivery
from webhooks.services import InboundWebhookService, WebhookService, backoff_delay

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=None, acks_late=True)
def deliver_webhook(self, delivery_id: str) -> dict:
    """
    Send one delivery and retry on failure.

    A delivery that already succeeded, or whose next attempt is not due,
    is skipped. Retries stop once attempt_count reaches
    WEBHOOK_MAX_ATTEMPTS; the delivery then stays failed for inspection
    in the admin.

    Returns:
        Dict with status: succeeded, failed, skipped or not_found
    """
    try:
        delivery = WebhookService.claim(delivery_id)
    except WebhookDelivery.DoesNotExist:
        logger.error("WebhookDelivery not found", extra={"delivery_id": delivery_id})
        return {"status": "not_found", "delivery_id": delivery_id}

    if delivery is None:
        return {"status": "skipped", "delivery_id": delivery_id}

    result = WebhookService.deliver(delivery)
    if result:
        return {"status": "succeeded", "delivery_id": delivery_id}

    if delivery.attempt_count < settings.WEBHOOK_MAX_ATTEMPTS:
        raise self.retry(countdown=backoff_delay(delivery.attempt_count))

    logger.error(
        "Webhook delivery exhausted retries",
        extra={"delivery_id": delivery_id, "attempts": delivery.attempt_count},
    )
    return {"status": "failed", "delivery_id": delivery_id}


@shared_task
def retry_failed_webhook_deliveries() -> dict:
    """Requeue due failed deliveries that still have attempts left."""
    delivery_ids = [
        str(pk) for pk in WebhookService.retryable_deliveries().values_list("pk", flat=True)
    ]
    for delivery_id in delivery_ids:
        deliver_webhook.delay(delivery_id)

    if delivery_ids:
        logger.info(
            f"Requeued {len(delivery_ids)} failed webhook deliveries",
            extra={"count": len(delivery_ids)},
        )
    return {"requeued": len(delivery_ids)}


@shared_task(bind=True, acks_late=True)
def process_inbound_webhook(self, event_id: str) -> dict:
    """
    Process a stored inbound event.

    Args:
        event_id: UUID (primary key) of the InboundWebhookEvent
    """
    try:
        event = InboundWebhookEvent.objects.get(pk=event_id)
    except InboundWebhookEvent.DoesNotExist:
        logger.error("InboundWebhookEvent not found", extra={"event_pk": event_id})
        return {"status": "not_found", "event": event_id}

    InboundWebhookService.process(event)
    return {"status": event.status, "event": event_id}
