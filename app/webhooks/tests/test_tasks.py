"""
Tests for webhook Celery tasks.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from webhooks.models import InboundWebhookEvent, WebhookDelivery
from webhooks.tasks import (
    backoff_delay,
    deliver_webhook,
    process_inbound_webhook,
    retry_failed_webhook_deliveries,
)
from webhooks.tests.factories import InboundWebhookEventFactory, WebhookDeliveryFactory


class TestBackoffDelay:
    @pytest.mark.parametrize(
        "attempt,expected",
        [(1, 30), (2, 60), (3, 120), (4, 240), (20, 3600)],
    )
    def test_doubles_and_caps(self, attempt, expected):
        assert backoff_delay(attempt) == expected


@pytest.mark.django_db
class TestDeliverWebhook:
    def test_success(self, mocker):
        mocker.patch(
            "webhooks.services.requests.post",
            return_value=mocker.Mock(status_code=200, text="ok"),
        )
        delivery = WebhookDeliveryFactory()

        result = deliver_webhook(str(delivery.pk))

        assert result == {"status": "succeeded", "delivery_id": str(delivery.pk)}

    def test_failure_schedules_retry_with_backoff(self, mocker, settings):
        settings.WEBHOOK_MAX_ATTEMPTS = 5
        mocker.patch(
            "webhooks.services.requests.post",
            return_value=mocker.Mock(status_code=500, text=""),
        )
        retry = mocker.patch.object(
            deliver_webhook, "retry", side_effect=RuntimeError("retry")
        )
        delivery = WebhookDeliveryFactory(attempt_count=1)

        with pytest.raises(RuntimeError):
            deliver_webhook(str(delivery.pk))

        retry.assert_called_once_with(countdown=60)

    def test_gives_up_after_max_attempts(self, mocker, settings):
        settings.WEBHOOK_MAX_ATTEMPTS = 3
        mocker.patch(
            "webhooks.services.requests.post",
            return_value=mocker.Mock(status_code=500, text=""),
        )
        retry = mocker.patch.object(deliver_webhook, "retry")
        delivery = WebhookDeliveryFactory(attempt_count=2)

        result = deliver_webhook(str(delivery.pk))

        assert result["status"] == "failed"
        retry.assert_not_called()
        delivery.refresh_from_db()
        assert delivery.attempt_count == 3

    def test_succeeded_delivery_is_skipped(self, mocker):
        post = mocker.patch("webhooks.services.requests.post")
        delivery = WebhookDeliveryFactory(status=WebhookDelivery.Status.SUCCEEDED)

        assert deliver_webhook(str(delivery.pk))["status"] == "skipped"
        post.assert_not_called()

    def test_delivery_waiting_on_backoff_is_skipped(self, mocker):
        post = mocker.patch("webhooks.services.requests.post")
        delivery = WebhookDeliveryFactory(
            status=WebhookDelivery.Status.FAILED,
            attempt_count=1,
            next_attempt_at=timezone.now() + timedelta(seconds=30),
        )

        assert deliver_webhook(str(delivery.pk))["status"] == "skipped"
        post.assert_not_called()

    def test_not_found(self, db):
        missing = "00000000-0000-0000-0000-000000000000"
        assert deliver_webhook(missing)["status"] == "not_found"


@pytest.mark.django_db
class TestRetryFailedDeliveries:
    def test_requeues_retryable(self, mocker, settings):
        settings.WEBHOOK_MAX_ATTEMPTS = 5
        delay = mocker.patch("webhooks.tasks.deliver_webhook.delay")
        failed = WebhookDeliveryFactory(status=WebhookDelivery.Status.FAILED, attempt_count=1)
        WebhookDeliveryFactory(status=WebhookDelivery.Status.FAILED, attempt_count=5)
        WebhookDeliveryFactory(status=WebhookDelivery.Status.PENDING)

        result = retry_failed_webhook_deliveries()

        assert result == {"requeued": 1}
        delay.assert_called_once_with(str(failed.pk))

    def test_beat_leaves_scheduled_retry_alone(self, mocker, settings):
        settings.WEBHOOK_MAX_ATTEMPTS = 5
        mocker.patch(
            "webhooks.services.requests.post",
            return_value=mocker.Mock(status_code=500, text=""),
        )
        mocker.patch.object(deliver_webhook, "retry", side_effect=RuntimeError("retry"))
        delay = mocker.patch("webhooks.tasks.deliver_webhook.delay")
        delivery = WebhookDeliveryFactory()

        with pytest.raises(RuntimeError):
            deliver_webhook(str(delivery.pk))
        result = retry_failed_webhook_deliveries()

        assert result == {"requeued": 0}
        delay.assert_not_called()

    def test_beat_picks_up_overdue_retry(self, mocker, settings):
        settings.WEBHOOK_MAX_ATTEMPTS = 5
        delay = mocker.patch("webhooks.tasks.deliver_webhook.delay")
        overdue = WebhookDeliveryFactory(
            status=WebhookDelivery.Status.FAILED,
            attempt_count=2,
            next_attempt_at=timezone.now() - timedelta(minutes=5),
        )

        assert retry_failed_webhook_deliveries() == {"requeued": 1}
        delay.assert_called_once_with(str(overdue.pk))


@pytest.mark.django_db
class TestProcessInboundWebhook:
    def test_processes_event(self):
        event = InboundWebhookEventFactory(event_type="ping")

        result = process_inbound_webhook(str(event.pk))

        assert result["status"] == InboundWebhookEvent.Status.PROCESSED

    def test_not_found(self, db):
        missing = "00000000-0000-0000-0000-000000000000"
        assert process_inbound_webhook(missing)["status"] == "not_found"
