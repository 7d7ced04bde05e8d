"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the blog platform apps:

- Generic, reusable base classes (no blog-specific logic)
- Clear extension points for domain apps (accounts, blog, webhooks, integrations)
- Infrastructure concerns separated from business logic

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key
    - SoftDeleteMixin: Soft delete support (is_deleted, deleted_at)
    - SlugMixin: Auto-generated unique URL slugs

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Managers (import from core.managers):
    - SoftDeleteManager: Filter deleted records by default
    - SoftDeleteQuerySet: QuerySet with soft delete operations

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError, NotFoundError, PermissionDeniedError,
      ConflictError, RateLimitError, ExternalServiceError

API plumbing:
    - core.exception_handler.api_exception_handler: DRF EXCEPTION_HANDLER
    - core.pagination.StandardResultsSetPagination: Default page-number pagination
    - core.permissions.IsOwnerOrReadOnly: Object-level ownership permission
    - core.middleware.RequestContextMiddleware: Request ID + timing logs

Note:
    Django models, model mixins and managers are NOT imported here to avoid
    AppRegistryNotReady errors. Import them directly from their modules.
"""

# Services (no Django model dependencies)
from .services import BaseService, ServiceResult

# Exceptions (no Django dependencies)
from .exceptions import (
    BaseApplicationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ValidationError,
)

# Decorators (no Django model dependencies)
from .decorators import rate_limit, cache_response, log_request

# Helpers (no Django model dependencies)
from .helpers import (
    generate_token,
    hash_string,
    get_client_ip,
)

__all__ = [
    # Services
    "BaseService",
    "ServiceResult",
    # Exceptions
    "BaseApplicationError",
    "ValidationError",
    "NotFoundError",
    "PermissionDeniedError",
    "ConflictError",
    "RateLimitError",
    "ExternalServiceError",
    # Decorators
    "rate_limit",
    "cache_response",
    "log_request",
    # Helpers
    "generate_token",
    "hash_string",
    "get_client_ip",
]
