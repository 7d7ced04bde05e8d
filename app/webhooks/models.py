"""
Webhook models.

WebhookEndpoint: A subscriber URL that receives signed event payloads
WebhookDelivery: One attempt series of sending an event to an endpoint
InboundWebhookEvent: A signed event received from a third party, stored
    once per event_id so retries by the sender are idempotent
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.helpers import generate_token
from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel


def default_secret() -> str:
    return generate_token(32)


class WebhookEndpoint(BaseModel):
    """
    Subscriber for outbound events.

    An empty events list subscribes the endpoint to every event type.
    """

    name = models.CharField(_("name"), max_length=100)
    url = models.URLField(_("URL"), max_length=500)
    secret = models.CharField(
        _("secret"),
        max_length=128,
        default=default_secret,
        help_text="Shared secret used to sign payloads (HMAC-SHA256)",
    )
    events = models.JSONField(
        _("events"),
        default=list,
        blank=True,
        help_text="Event types to deliver, e.g. ['post.published']. Empty means all.",
    )
    is_active = models.BooleanField(_("active"), default=True, db_index=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="webhook_endpoints",
    )

    class Meta:
        verbose_name = _("webhook endpoint")
        verbose_name_plural = _("webhook endpoints")
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.url})"

    def subscribes_to(self, event_type: str) -> bool:
        return not self.events or event_type in self.events


class WebhookDelivery(UUIDPrimaryKeyMixin, BaseModel):
    """
    Outbound delivery of one event to one endpoint.

    attempt_count grows with every HTTP attempt. next_attempt_at is the
    earliest time another attempt may start: the backoff after a failure,
    or a short lease while a worker is sending. The retry task only picks
    up failed deliveries that are due and below WEBHOOK_MAX_ATTEMPTS.
    """

    RESPONSE_BODY_LIMIT = 2000

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        SUCCEEDED = "succeeded", _("Succeeded")
        FAILED = "failed", _("Failed")

    endpoint = models.ForeignKey(
        WebhookEndpoint,
        on_delete=models.CASCADE,
        related_name="deliveries",
    )
    event_type = models.CharField(max_length=100, db_index=True)
    payload = models.JSONField(help_text="Event payload as sent to the endpoint")
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    attempt_count = models.PositiveIntegerField(default=0)
    response_status_code = models.PositiveIntegerField(null=True, blank=True)
    response_body = models.TextField(blank=True, default="")
    last_error = models.TextField(blank=True, default="")
    delivered_at = models.DateTimeField(null=True, blank=True)
    next_attempt_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _("webhook delivery")
        verbose_name_plural = _("webhook deliveries")
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["status", "attempt_count"],
                name="webhooks_delivery_retry_idx",
            ),
        ]

    def __str__(self):
        return f"{self.event_type} -> {self.endpoint_id} ({self.status})"


class InboundWebhookEvent(UUIDPrimaryKeyMixin, BaseModel):
    """
    Tracks inbound webhook events for idempotent processing.

    Processing Flow:
        1. Webhook arrives, signature verified
        2. get_or_create on event_id
        3. Already PROCESSED -> 200 without reprocessing
        4. Otherwise queue process_inbound_webhook
        5. Handler marks PROCESSED, IGNORED or FAILED
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        PROCESSED = "processed", _("Processed")
        FAILED = "failed", _("Failed")
        IGNORED = "ignored", _("Ignored")

    event_id = models.CharField(
        max_length=255,
        unique=True,
        help_text="Sender's event ID - unique constraint for idempotency",
    )
    source = models.CharField(max_length=100, blank=True, default="")
    event_type = models.CharField(max_length=100, db_index=True)
    payload = models.JSONField(help_text="Full webhook payload (JSON)")
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    processed_at = models.DateTimeField(null=True, blank=True)
    error_message = models.TextField(blank=True, default="")

    class Meta:
        verbose_name = _("inbound webhook event")
        verbose_name_plural = _("inbound webhook events")
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.event_type} ({self.event_id})"
