"""
Fixtures for blog tests.

Shared user and client fixtures (user, other_user, staff_user,
api_client, authenticated_client, ...) come from app/conftest.py.
"""

import io

import pytest
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from blog.tests.factories import CategoryFactory, PostFactory, TagFactory


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def category(db):
    return CategoryFactory(name="Tutorials")


@pytest.fixture
def tag(db):
    return TagFactory(name="django")


@pytest.fixture
def published_post(user, category):
    return PostFactory(
        author=user,
        title="Hello Django",
        content="Models, views and templates.",
        category=category,
        published=True,
    )


@pytest.fixture
def draft_post(user):
    return PostFactory(author=user, title="Work in progress")


@pytest.fixture
def others_draft(other_user):
    return PostFactory(author=other_user, title="Secret draft")


@pytest.fixture
def sample_png_file() -> SimpleUploadedFile:
    """A valid PNG image upload."""
    image = Image.new("RGB", (20, 20), color="blue")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return SimpleUploadedFile(
        name="cover.png", content=buffer.getvalue(), content_type="image/png"
    )
