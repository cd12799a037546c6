"""Service layer for the translations feature."""

from __future__ import annotations

from error_registry.core.pagination import QueryCapabilities
from error_registry.core.services import ListService
from error_registry.features.translations.models import ErrorTranslation

TRANSLATION_CAPABILITIES = QueryCapabilities(
    allowed_fields=frozenset({"id", "language", "message", "errorCode", "updatedAt"}),
    searchable_fields=frozenset({"message", "errorCode"}),
    allowed_relations=frozenset({"error"}),
    field_map={"errorCode": "error_code", "updatedAt": "updated_at"},
    default_mode="keyset",
)


class TranslationService(ListService[ErrorTranslation]):
    """List and fetch error translations."""

    model = ErrorTranslation
    capabilities = TRANSLATION_CAPABILITIES


def get_translation_service() -> TranslationService:
    """FastAPI dependency for the translation service."""
    return TranslationService()


__all__ = ["TRANSLATION_CAPABILITIES", "TranslationService", "get_translation_service"]
