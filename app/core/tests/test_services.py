"""
Tests for ServiceResult and BaseService.
"""

import pytest

from core.exceptions import NotFoundError
from core.services import BaseService, ServiceResult


class TestServiceResult:
    def test_success_is_truthy(self):
        result = ServiceResult.success({"id": 1})

        assert result
        assert result.to_response() == {"success": True, "data": {"id": 1}}

    def test_failure_is_falsy(self):
        result = ServiceResult.failure(
            "Post is already published.",
            error_code="ALREADY_PUBLISHED",
        )

        assert not result
        assert result.to_response() == {
            "success": False,
            "error": "Post is already published.",
            "error_code": "ALREADY_PUBLISHED",
        }

    def test_failure_with_field_errors(self):
        result = ServiceResult.failure(
            "Required fields missing", errors={"body": ["This field is required."]}
        )

        assert result.to_response()["errors"] == {"body": ["This field is required."]}

    def test_from_exception_defaults_code_to_class_name(self):
        result = ServiceResult.from_exception(KeyError("slug"))

        assert result.error_code == "KEYERROR"

    def test_map(self):
        assert ServiceResult.success(2).map(lambda x: x * 10).data == 20

        failure = ServiceResult.failure("nope")
        assert failure.map(lambda x: x * 10) is failure


class TestBaseService:
    def test_validate_required(self):
        assert BaseService.validate_required(body="text", title="t") is None

        result = BaseService.validate_required(body="  ", title=None)

        assert result.error_code == "VALIDATION_ERROR"
        assert set(result.errors) == {"body", "title"}

    def test_handle_exception_keeps_application_error_code(self):
        result = BaseService.handle_exception(NotFoundError("gone"), "lookup")

        assert not result
        assert result.error_code == "NOT_FOUND"

    def test_logger_name(self):
        class PostLikeService(BaseService):
            pass

        assert PostLikeService.get_logger().name.endswith("PostLikeService")

    @pytest.mark.django_db
    def test_atomic_rolls_back(self):
        from blog.models import Category

        with pytest.raises(RuntimeError):
            with BaseService.atomic():
                Category.objects.create(name="Temporary")
                raise RuntimeError("boom")

        assert not Category.objects.filter(name="Temporary").exists()
