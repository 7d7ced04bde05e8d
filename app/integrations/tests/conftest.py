"""
Fixtures for integrations tests.

The upstream API is never contacted: requests.Session.get is patched and
answers with JSONPlaceholder-shaped data.
"""

import pytest
import requests
from django.core.cache import cache


def make_post(n):
    return {"userId": 1, "id": n, "title": f"external title {n}", "body": f"body {n}"}


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def upstream(mocker):
    """
    Patch Session.get. Set .json_data / .status_code / .error on the
    returned controller to shape the next responses.
    """

    class Upstream:
        status_code = 200
        error = None
        json_data = [make_post(n) for n in range(1, 4)]

    controller = Upstream()

    def fake_get(self, url, params=None, timeout=None):
        if controller.error is not None:
            raise controller.error
        response = mocker.Mock(status_code=controller.status_code)
        response.ok = 200 <= controller.status_code < 300
        response.json.return_value = controller.json_data
        return response

    controller.get = mocker.patch.object(
        requests.Session, "get", autospec=True, side_effect=fake_get
    )
    return controller
