"""
Webhook views.

incoming_webhook: Signed receiver for third-party events. It:
1. Verifies X-Webhook-Signature against INBOUND_WEBHOOK_SECRET
2. Creates/retrieves the InboundWebhookEvent record (idempotent)
3. Queues the event for async processing
4. Returns immediately

WebhookEndpointViewSet: Lets users register endpoints for outbound
events and inspect recent deliveries.

URL Structure (prefix /api/v1/webhooks/):
    incoming/                      POST (signed)
    endpoints/                     GET, POST
    endpoints/{id}/                GET, PUT, PATCH, DELETE
    endpoints/{id}/deliveries/     GET
"""

from __future__ import annotations

import json
import logging

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from core.decorators import rate_limit
from webhooks.models import InboundWebhookEvent, WebhookEndpoint
from webhooks.serializers import WebhookDeliverySerializer, WebhookEndpointSerializer
from webhooks.signing import SIGNATURE_HEADER, verify_signature

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
@rate_limit(key="inbound_webhook", limit=settings.INBOUND_WEBHOOK_RATE_LIMIT, period=60)
def incoming_webhook(request: HttpRequest) -> HttpResponse:
    """
    Receive and queue a signed inbound event.

    Expected body:
        {"id": "evt_123", "type": "post.unpublish", "data": {"slug": "..."}}

    Returns:
        HttpResponse with status:
        - 200: Event accepted (new or duplicate)
        - 400: Missing signature or malformed payload
        - 401: Signature does not match
        - 429: Rate limit exceeded
    """
    payload = request.body
    signature = request.headers.get(SIGNATURE_HEADER, "")

    if not signature:
        logger.warning("Webhook received without signature header")
        return HttpResponse("Missing signature", status=400)

    if not verify_signature(settings.INBOUND_WEBHOOK_SECRET, payload, signature):
        logger.warning("Webhook signature verification failed")
        return HttpResponse("Invalid signature", status=401)

    try:
        event_data = json.loads(payload)
    except (TypeError, ValueError):
        logger.warning("Webhook body is not valid JSON")
        return HttpResponse("Invalid payload", status=400)

    if not isinstance(event_data, dict):
        return HttpResponse("Invalid payload", status=400)

    event_id = event_data.get("id")
    event_type = event_data.get("type")

    if not event_id or not event_type:
        logger.warning("Webhook missing required fields")
        return HttpResponse("Invalid event", status=400)

    logger.info(
        f"Received webhook: {event_type}",
        extra={"event_id": event_id, "event_type": event_type},
    )

    event, created = InboundWebhookEvent.objects.get_or_create(
        event_id=str(event_id),
        defaults={
            "event_type": event_type,
            "source": request.headers.get("X-Webhook-Source", ""),
            "payload": event_data,
        },
    )

    if not created and event.status == InboundWebhookEvent.Status.PROCESSED:
        logger.info(
            "Webhook already processed, returning success",
            extra={"event_id": event_id},
        )
        return HttpResponse("Already processed", status=200)

    from webhooks.tasks import process_inbound_webhook

    process_inbound_webhook.delay(str(event.pk))
    logger.info(
        "Webhook queued for processing",
        extra={"event_id": event_id, "event_pk": str(event.pk)},
    )
    return HttpResponse("Accepted", status=200)


@extend_schema_view(
    list=extend_schema(summary="List my webhook endpoints", tags=["Webhooks"]),
    create=extend_schema(summary="Register a webhook endpoint", tags=["Webhooks"]),
    retrieve=extend_schema(summary="Get a webhook endpoint", tags=["Webhooks"]),
    update=extend_schema(summary="Update a webhook endpoint", tags=["Webhooks"]),
    partial_update=extend_schema(
        summary="Partially update a webhook endpoint", tags=["Webhooks"]
    ),
    destroy=extend_schema(summary="Delete a webhook endpoint", tags=["Webhooks"]),
)
class WebhookEndpointViewSet(viewsets.ModelViewSet):
    """Endpoints registered by the caller. Other users' endpoints are 404."""

    serializer_class = WebhookEndpointSerializer
    permission_classes = [IsAuthenticated]
    throttle_scope = "webhooks"

    def get_queryset(self):
        return WebhookEndpoint.objects.filter(owner=self.request.user)

    def perform_create(self, serializer):
        serializer.save(owner=self.request.user)

    @extend_schema(
        summary="Recent deliveries",
        responses={200: WebhookDeliverySerializer(many=True)},
        tags=["Webhooks"],
    )
    @action(detail=True, methods=["get"])
    def deliveries(self, request, pk=None):
        endpoint = self.get_object()
        queryset = endpoint.deliveries.all()
        page = self.paginate_queryset(queryset)
        serializer = WebhookDeliverySerializer(page, many=True)
        return self.get_paginated_response(serializer.data)
