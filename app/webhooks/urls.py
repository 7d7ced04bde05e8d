"""
URL configuration for webhooks.

Included at /api/v1/webhooks/ in config/urls.py.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from webhooks.views import WebhookEndpointViewSet, incoming_webhook

app_name = "webhooks"

router = DefaultRouter()
router.register("endpoints", WebhookEndpointViewSet, basename="endpoint")

urlpatterns = [
    path("incoming/", incoming_webhook, name="incoming"),
    path("", include(router.urls)),
]
