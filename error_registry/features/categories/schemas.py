"""Pydantic schemas for the categories feature."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from error_registry.core.schemas.base import ORMResponse


class CategoryErrorCode(ORMResponse):
    """Error code as embedded in a category (``include=errorCodes``)."""

    id: int
    code: str
    status: str


class CategoryResponse(ORMResponse):
    """Representation returned from the API."""

    id: int
    name: str = Field(description="Unique category name")
    description: str | None = Field(default=None, description="Optional description")
    created_at: datetime
    updated_at: datetime

    error_codes: list[CategoryErrorCode] | None = Field(
        default=None,
        description="Present with include=errorCodes",
    )


__all__ = ["CategoryErrorCode", "CategoryResponse"]
