"""SQLAlchemy models for the error codes feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Column, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from error_registry.core.database import Base, TimestampedBase

if TYPE_CHECKING:
    from error_registry.features.categories.models import ErrorCategory
    from error_registry.features.translations.models import ErrorTranslation

ERROR_STATUSES = ("draft", "published")

# Many-to-many association table for error codes <-> categories
error_code_categories = Table(
    "error_code_categories",
    Base.metadata,
    Column(
        "error_code_id",
        ForeignKey("error_codes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        ForeignKey("error_categories.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class ErrorCode(TimestampedBase):
    """A registered error code such as ``AUTH_TOKEN_EXPIRED``.

    Codes start as drafts and are published once their translations are
    complete. A code can belong to several categories and carries one
    translated message per language.
    """

    __tablename__ = "error_codes"
    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'published')",
            name="status_valid",
        ),
    )

    code: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Unique error code identifier (e.g., 'AUTH_TOKEN_EXPIRED')",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default="draft",
        server_default="draft",
        nullable=False,
        comment="Lifecycle status: draft or published",
    )
    context: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Where and why the error is raised",
    )

    categories: Mapped[list[ErrorCategory]] = relationship(
        "ErrorCategory",
        secondary=error_code_categories,
        back_populates="error_codes",
        lazy="raise",
    )
    translations: Mapped[list[ErrorTranslation]] = relationship(
        "ErrorTranslation",
        back_populates="error",
        cascade="all, delete-orphan",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """Return error code summary for debugging."""
        return f"<ErrorCode(id={self.id}, code={self.code!r}, status={self.status!r})>"
