"""SQLAlchemy models for the categories feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from error_registry.core.database import TimestampedBase
from error_registry.features.errors.models import error_code_categories

if TYPE_CHECKING:
    from error_registry.features.errors.models import ErrorCode


class ErrorCategory(TimestampedBase):
    """Grouping of error codes such as "Authentication" or "Billing"."""

    __tablename__ = "error_categories"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Unique category name",
    )
    description: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Optional description of the category",
    )

    error_codes: Mapped[list[ErrorCode]] = relationship(
        "ErrorCode",
        secondary=error_code_categories,
        back_populates="categories",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """Return category summary for debugging."""
        return f"<ErrorCategory(id={self.id}, name={self.name!r})>"
