"""
URL configuration for integrations.

Included at /api/v1/integrations/ in config/urls.py.
"""

from django.urls import path

from integrations.views import ExternalPostImportView, ExternalPostListView

app_name = "integrations"

urlpatterns = [
    path("external-posts/", ExternalPostListView.as_view(), name="external_posts"),
    path(
        "external-posts/import/",
        ExternalPostImportView.as_view(),
        name="external_posts_import",
    ),
]
