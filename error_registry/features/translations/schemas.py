"""Pydantic schemas for the translations feature."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from error_registry.core.schemas.base import ORMResponse


class TranslationError(ORMResponse):
    """Error code as embedded in a translation (``include=error``)."""

    id: int
    code: str
    status: str
    context: str | None = None


class TranslationResponse(ORMResponse):
    """Representation returned from the API."""

    id: int
    language: str = Field(description="BCP 47 language tag")
    message: str = Field(description="Translated message")
    error_code: str = Field(description="Code of the translated error")
    updated_at: datetime

    error: TranslationError | None = Field(
        default=None,
        description="Present with include=error",
    )


__all__ = ["TranslationError", "TranslationResponse"]
