"""
Serializers for webhook endpoint management.
"""

from rest_framework import serializers

from webhooks.models import WebhookDelivery, WebhookEndpoint

KNOWN_EVENTS = ("post.published", "comment.created")


class WebhookEndpointSerializer(serializers.ModelSerializer):
    """
    Endpoint owned by the caller.

    The secret is generated server-side and returned so the subscriber
    can verify X-Webhook-Signature.
    """

    class Meta:
        model = WebhookEndpoint
        fields = ["id", "name", "url", "secret", "events", "is_active", "created_at"]
        read_only_fields = ["id", "secret", "created_at"]

    def validate_events(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError("Expected a list of event types.")
        unknown = sorted(set(value) - set(KNOWN_EVENTS))
        if unknown:
            raise serializers.ValidationError(
                f"Unknown event type(s): {', '.join(unknown)}"
            )
        return value


class WebhookDeliverySerializer(serializers.ModelSerializer):
    class Meta:
        model = WebhookDelivery
        fields = [
            "id",
            "event_type",
            "status",
            "attempt_count",
            "response_status_code",
            "last_error",
            "delivered_at",
            "next_attempt_at",
            "created_at",
        ]
        read_only_fields = fields
