"""Base schema classes for API responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import DeclarativeBase


class CustomBase(BaseModel):
    """Base model with common configuration for all schemas.

    Fields are declared in snake_case and exposed to clients in camelCase
    (``created_at`` is serialized as ``createdAt``).

    Example:
        class CategoryResponse(CustomBase):
            id: int
            name: str
            created_at: datetime
    """

    model_config = ConfigDict(
        # Allow creation from ORM models (SQLAlchemy)
        from_attributes=True,
        # camelCase on the wire
        alias_generator=to_camel,
        # Populate models by field name (not alias)
        populate_by_name=True,
        # Ignore extra fields for security (silently drop unexpected data)
        extra="ignore",
        # Strip leading/trailing whitespace from strings
        str_strip_whitespace=True,
    )


class ORMResponse(CustomBase):
    """Response schema built from a mapped instance.

    Relationships that were not eager-loaded are skipped instead of
    triggering a lazy load, so they fall back to the field default
    (``None``) and are omitted from the response. Only relations the
    client asked for with ``include`` appear.
    """

    @model_validator(mode="before")
    @classmethod
    def _loaded_attributes_only(cls, data: Any) -> Any:
        if not isinstance(data, DeclarativeBase):
            return data
        unloaded = sa_inspect(data).unloaded
        return {
            name: getattr(data, name)
            for name in cls.model_fields
            if name not in unloaded and hasattr(data, name)
        }


__all__ = ["CustomBase", "ORMResponse"]
