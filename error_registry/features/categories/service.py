"""Service layer for the categories feature."""

from __future__ import annotations

from error_registry.core.pagination import QueryCapabilities
from error_registry.core.services import ListService
from error_registry.features.categories.models import ErrorCategory

CATEGORY_CAPABILITIES = QueryCapabilities(
    allowed_fields=frozenset({"id", "name", "description", "createdAt", "updatedAt"}),
    searchable_fields=frozenset({"name", "description"}),
    allowed_relations=frozenset({"errorCodes"}),
    field_map={"createdAt": "created_at", "updatedAt": "updated_at"},
    relation_map={"errorCodes": "error_codes"},
    default_mode="keyset",
)


class CategoryService(ListService[ErrorCategory]):
    """List and fetch error categories."""

    model = ErrorCategory
    capabilities = CATEGORY_CAPABILITIES


def get_category_service() -> CategoryService:
    """FastAPI dependency for the category service."""
    return CategoryService()


__all__ = ["CATEGORY_CAPABILITIES", "CategoryService", "get_category_service"]
