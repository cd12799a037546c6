"""Service layer for the error codes feature."""

from __future__ import annotations

from error_registry.core.pagination import QueryCapabilities
from error_registry.core.services import ListService
from error_registry.features.errors.models import ErrorCode

ERROR_CODE_CAPABILITIES = QueryCapabilities(
    allowed_fields=frozenset({"id", "code", "status", "context", "createdAt", "updatedAt"}),
    searchable_fields=frozenset({"code", "context"}),
    allowed_relations=frozenset({"categories", "translations"}),
    field_map={"createdAt": "created_at", "updatedAt": "updated_at"},
    default_mode="offset",
)


class ErrorCodeService(ListService[ErrorCode]):
    """List and fetch error codes."""

    model = ErrorCode
    capabilities = ERROR_CODE_CAPABILITIES


def get_error_code_service() -> ErrorCodeService:
    """FastAPI dependency for the error code service."""
    return ErrorCodeService()


__all__ = ["ERROR_CODE_CAPABILITIES", "ErrorCodeService", "get_error_code_service"]
