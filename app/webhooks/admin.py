"""
Django admin configuration for webhook models.
"""

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _
from django.utils.translation import ngettext

from webhooks.models import InboundWebhookEvent, WebhookDelivery, WebhookEndpoint


@admin.register(WebhookEndpoint)
class WebhookEndpointAdmin(admin.ModelAdmin):
    list_display = ["name", "url", "is_active", "owner", "created_at"]
    list_filter = ["is_active"]
    search_fields = ["name", "url", "owner__email"]
    raw_id_fields = ["owner"]


@admin.register(WebhookDelivery)
class WebhookDeliveryAdmin(admin.ModelAdmin):
    """Delivery log. Failed deliveries can be requeued by hand."""

    list_display = [
        "event_type",
        "endpoint",
        "status",
        "attempt_count",
        "response_status_code",
        "created_at",
    ]
    list_filter = ["status", "event_type"]
    search_fields = ["endpoint__url", "event_type"]
    readonly_fields = [
        "id",
        "endpoint",
        "event_type",
        "payload",
        "status",
        "attempt_count",
        "response_status_code",
        "response_body",
        "last_error",
        "delivered_at",
        "next_attempt_at",
        "created_at",
        "updated_at",
    ]
    actions = ["requeue_deliveries"]

    @admin.action(description=_("Requeue selected deliveries"))
    def requeue_deliveries(self, request, queryset):
        from webhooks.tasks import deliver_webhook

        delivery_ids = [
            str(pk)
            for pk in queryset.exclude(
                status=WebhookDelivery.Status.SUCCEEDED
            ).values_list("pk", flat=True)
        ]
        WebhookDelivery.objects.filter(pk__in=delivery_ids).update(next_attempt_at=None)
        for delivery_id in delivery_ids:
            deliver_webhook.delay(delivery_id)
        self.message_user(
            request,
            ngettext(
                "%d delivery was requeued.", "%d deliveries were requeued.", len(delivery_ids)
            )
            % len(delivery_ids),
            messages.SUCCESS,
        )


@admin.register(InboundWebhookEvent)
class InboundWebhookEventAdmin(admin.ModelAdmin):
    list_display = ["event_id", "event_type", "source", "status", "processed_at", "created_at"]
    list_filter = ["status", "event_type", "source"]
    search_fields = ["event_id"]
    readonly_fields = [
        "id",
        "event_id",
        "source",
        "event_type",
        "payload",
        "status",
        "processed_at",
        "error_message",
        "created_at",
        "updated_at",
    ]
