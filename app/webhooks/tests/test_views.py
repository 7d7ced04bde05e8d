"""
Tests for the inbound webhook receiver and endpoint management API.
"""

import pytest

from blog.models import Post
from blog.tests.factories import PostFactory
from webhooks.models import InboundWebhookEvent, WebhookEndpoint
from webhooks.tests.factories import (
    InboundWebhookEventFactory,
    WebhookDeliveryFactory,
    WebhookEndpointFactory,
)

PING = {"id": "evt_ping_1", "type": "ping", "data": {}}


@pytest.mark.django_db
class TestIncomingWebhook:
    def test_accepts_and_processes(self, signed_post):
        response = signed_post(PING)

        assert response.status_code == 200
        assert response.content == b"Accepted"
        event = InboundWebhookEvent.objects.get(event_id="evt_ping_1")
        # Celery runs eagerly in tests
        assert event.status == InboundWebhookEvent.Status.PROCESSED

    def test_queues_processing_task(self, signed_post, mocker):
        delay = mocker.patch("webhooks.tasks.process_inbound_webhook.delay")

        signed_post(PING)

        event = InboundWebhookEvent.objects.get(event_id="evt_ping_1")
        delay.assert_called_once_with(str(event.pk))
        assert event.status == InboundWebhookEvent.Status.PENDING

    def test_unpublish_event_end_to_end(self, signed_post):
        post = PostFactory(published=True)

        signed_post(
            {"id": "evt_2", "type": "post.unpublish", "data": {"slug": post.slug}}
        )

        post.refresh_from_db()
        assert post.status == Post.Status.DRAFT

    def test_non_object_data_marks_event_failed(self, signed_post):
        response = signed_post({"id": "evt_bad", "type": "post.unpublish", "data": "oops"})

        assert response.status_code == 200
        event = InboundWebhookEvent.objects.get(event_id="evt_bad")
        assert event.status == InboundWebhookEvent.Status.FAILED

    def test_missing_signature(self, signed_post):
        response = signed_post(PING, signature="")

        assert response.status_code == 400
        assert response.content == b"Missing signature"
        assert not InboundWebhookEvent.objects.exists()

    def test_invalid_signature(self, signed_post):
        response = signed_post(PING, secret="wrong-secret")

        assert response.status_code == 401
        assert response.content == b"Invalid signature"

    def test_unconfigured_secret_rejects(self, signed_post, settings):
        settings.INBOUND_WEBHOOK_SECRET = ""

        response = signed_post(PING, secret="anything")

        assert response.status_code == 401

    def test_invalid_json(self, signed_post):
        response = signed_post(b"not json")

        assert response.status_code == 400

    @pytest.mark.parametrize(
        "event",
        [
            {"type": "ping"},
            {"id": "evt_3"},
            ["ping"],
        ],
    )
    def test_missing_fields(self, signed_post, event):
        response = signed_post(event)

        assert response.status_code == 400

    def test_duplicate_processed_event(self, signed_post, mocker):
        InboundWebhookEventFactory(
            event_id="evt_ping_1", status=InboundWebhookEvent.Status.PROCESSED
        )
        delay = mocker.patch("webhooks.tasks.process_inbound_webhook.delay")

        response = signed_post(PING)

        assert response.status_code == 200
        assert response.content == b"Already processed"
        delay.assert_not_called()

    def test_failed_event_is_requeued(self, signed_post, mocker):
        event = InboundWebhookEventFactory(
            event_id="evt_ping_1", status=InboundWebhookEvent.Status.FAILED
        )
        delay = mocker.patch("webhooks.tasks.process_inbound_webhook.delay")

        response = signed_post(PING)

        assert response.content == b"Accepted"
        delay.assert_called_once_with(str(event.pk))
        assert InboundWebhookEvent.objects.count() == 1

    def test_get_not_allowed(self, client):
        assert client.get("/api/v1/webhooks/incoming/").status_code == 405

    def test_rate_limited(self, signed_post, settings, mocker):
        mocker.patch("webhooks.tasks.process_inbound_webhook.delay")
        limit = settings.INBOUND_WEBHOOK_RATE_LIMIT

        for n in range(limit):
            signed_post({"id": f"evt_{n}", "type": "ping"})
        response = signed_post({"id": "evt_over", "type": "ping"})

        assert response.status_code == 429


@pytest.mark.django_db
class TestWebhookEndpointAPI:
    url = "/api/v1/webhooks/endpoints/"

    def test_requires_authentication(self, api_client):
        assert api_client.get(self.url).status_code == 401

    def test_create_generates_secret(self, authenticated_client, user):
        response = authenticated_client.post(
            self.url,
            {
                "name": "Zapier",
                "url": "https://hooks.example.com/zap/",
                "events": ["post.published"],
            },
            format="json",
        )

        assert response.status_code == 201
        endpoint = WebhookEndpoint.objects.get()
        assert endpoint.owner == user
        assert len(response.data["secret"]) == 64

    def test_rejects_unknown_events(self, authenticated_client):
        response = authenticated_client.post(
            self.url,
            {"name": "X", "url": "https://hooks.example.com/", "events": ["post.exploded"]},
            format="json",
        )

        assert response.status_code == 400
        assert "events" in response.data

    def test_lists_only_own_endpoints(self, authenticated_client, user, other_user):
        mine = WebhookEndpointFactory(owner=user)
        WebhookEndpointFactory(owner=other_user)

        response = authenticated_client.get(self.url)

        assert [item["id"] for item in response.data["results"]] == [mine.pk]

    def test_other_users_endpoint_is_404(self, authenticated_client, other_user):
        endpoint = WebhookEndpointFactory(owner=other_user)

        response = authenticated_client.delete(f"{self.url}{endpoint.pk}/")

        assert response.status_code == 404

    def test_deliveries(self, authenticated_client, user):
        endpoint = WebhookEndpointFactory(owner=user)
        delivery = WebhookDeliveryFactory(endpoint=endpoint)

        response = authenticated_client.get(f"{self.url}{endpoint.pk}/deliveries/")

        assert response.status_code == 200
        assert response.data["results"][0]["id"] == str(delivery.pk)
