"""
URL configuration for accounts app.

URL structure:
    /api/v1/auth/register/  - Registration (POST)
    /api/v1/auth/token/     - DRF API token (POST obtain, DELETE revoke)
    /api/v1/auth/profile/   - Profile (GET/PATCH)

Note:
    dj-rest-auth URLs are included next to these in config/urls.py:
    - /api/v1/auth/login/
    - /api/v1/auth/logout/
    - /api/v1/auth/user/
    - /api/v1/auth/password/reset/
    - /api/v1/auth/password/reset/confirm/
    - /api/v1/auth/password/change/
    - /api/v1/auth/token/refresh/
    - /api/v1/auth/token/verify/
"""

from django.urls import path

from accounts.views import APITokenView, ProfileView, RegisterView

app_name = "accounts"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("token/", APITokenView.as_view(), name="api-token"),
    path("profile/", ProfileView.as_view(), name="profile"),
]
