"""
URL configuration for the blog platform.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - Blog home (HTML, blog.page_urls)
    /posts/<slug>/                 - Post detail with comments (HTML)
    /posts/new/, /posts/<slug>/edit/ - Post form (HTML, login required)
    /accounts/login/, /accounts/logout/ - Session login/logout (HTML)
    /i18n/setlang/                 - Language switcher
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /docs/                         - ReDoc API documentation
    /api/v1/auth/                  - Authentication endpoints
        login/, logout/, user/     - dj-rest-auth (JWT)
        password/reset/, password/change/, token/refresh/ - dj-rest-auth
        register/                  - Registration (custom)
        token/                     - DRF API token obtain/revoke (custom)
        profile/                   - User profile (custom)
    /api/v1/blog/                  - Posts, comments, categories, tags
    /api/v1/webhooks/              - Inbound receiver and endpoint management
    /api/v1/integrations/          - External posts proxy and import

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path
from django.utils.translation import gettext_lazy as _
from django.views.generic import TemplateView
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication (dj-rest-auth)
    path("auth/", include("dj_rest_auth.urls")),
    # Registration, API token, profile
    path("auth/", include("accounts.urls")),
    # Blog
    path("blog/", include("blog.urls")),
    # Webhooks
    path("webhooks/", include("webhooks.urls")),
    # Third-party integrations
    path("integrations/", include("integrations.urls")),
]

urlpatterns = [
    # Documentation
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # Session auth for the HTML pages
    path("accounts/login/", auth_views.LoginView.as_view(), name="login"),
    path("accounts/logout/", auth_views.LogoutView.as_view(), name="logout"),
    # Language switcher (set_language)
    path("i18n/", include("django.conf.urls.i18n")),
    # Password reset confirm URL (required by dj-rest-auth for email generation)
    # This URL is included in password reset emails and should point to your frontend
    path(
        "password/reset/confirm/<uidb64>/<token>/",
        TemplateView.as_view(template_name="registration/password_reset_confirm.html"),
        name="password_reset_confirm",
    ),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
    # HTML pages
    path("", include("blog.page_urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = _("Blog administration")
admin.site.site_title = _("Blog admin")
admin.site.index_title = _("Content and integrations")
