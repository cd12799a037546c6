"""Import every mapped class so relationships resolve and metadata is complete."""

from error_registry.features.categories.models import ErrorCategory
from error_registry.features.errors.models import ErrorCode, error_code_categories
from error_registry.features.translations.models import ErrorTranslation

__all__ = ["ErrorCategory", "ErrorCode", "ErrorTranslation", "error_code_categories"]
