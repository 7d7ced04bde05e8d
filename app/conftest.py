"""
Root pytest configuration for the Django project.

Settings come from config.settings_test (see pyproject.toml), which seeds
the environment before config.settings is imported. This module provides
test markers and the fixtures shared by every app; app-specific fixtures
live in each app's tests/conftest.py.
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full user journey workflows)
    - test_views.py, test_services.py, test_tasks.py, etc. → integration
    - test_models.py, test_signing.py, test_helpers.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_views.py",
        "test_pages.py",
        "test_services.py",
        "test_tasks.py",
        "test_middleware.py",
        "test_admin.py",
        "test_email.py",
        "test_client.py",
        "test_commands.py",
        "test_circuit_breaker.py",
        "test_receivers.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_managers.py",
        "test_signals.py",
        "test_signing.py",
        "test_decorators.py",
        "test_exceptions.py",
        "test_helpers.py",
    ]

    for item in items:
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def _media_root(settings, tmp_path):
    """Keep uploaded files out of the source tree."""
    settings.MEDIA_ROOT = str(tmp_path / "media")


@pytest.fixture
def user(db):
    """A verified author with an auto-created profile."""
    from accounts.tests.factories import UserFactory

    user = UserFactory(email_verified=True)
    user.profile.display_name = "Test Author"
    user.profile.save()
    return user


@pytest.fixture
def other_user(db):
    from accounts.tests.factories import UserFactory

    return UserFactory(email_verified=True)


@pytest.fixture
def staff_user(db):
    """Create a staff user (is_staff=True)."""
    from accounts.tests.factories import UserFactory

    return UserFactory(is_staff=True, email_verified=True)


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """API client authenticated as `user` with a JWT access token."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory for API clients authenticated as an arbitrary user.

    Usage:
        def test_example(authenticated_client_factory, other_user):
            client = authenticated_client_factory(other_user)
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client


@pytest.fixture
def staff_client(authenticated_client_factory, staff_user):
    return authenticated_client_factory(staff_user)
