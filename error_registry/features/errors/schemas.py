"""Pydantic schemas for the error codes feature."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from error_registry.core.schemas.base import ORMResponse

ErrorStatus = Literal["draft", "published"]


class ErrorCodeCategory(ORMResponse):
    """Category as embedded in an error code (``include=categories``)."""

    id: int
    name: str
    description: str | None = None


class ErrorCodeTranslation(ORMResponse):
    """Translation as embedded in an error code (``include=translations``)."""

    id: int
    language: str
    message: str


class ErrorCodeResponse(ORMResponse):
    """Representation returned from the API."""

    id: int
    code: str = Field(description="Unique error code identifier")
    status: ErrorStatus = Field(description="Lifecycle status")
    context: str | None = Field(default=None, description="Where and why the error is raised")
    created_at: datetime
    updated_at: datetime

    categories: list[ErrorCodeCategory] | None = Field(
        default=None,
        description="Present with include=categories",
    )
    translations: list[ErrorCodeTranslation] | None = Field(
        default=None,
        description="Present with include=translations",
    )


__all__ = [
    "ErrorCodeCategory",
    "ErrorCodeResponse",
    "ErrorCodeTranslation",
    "ErrorStatus",
]
