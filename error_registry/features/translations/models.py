"""SQLAlchemy models for the translations feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from error_registry.core.database import TimestampedBase

if TYPE_CHECKING:
    from error_registry.features.errors.models import ErrorCode


class ErrorTranslation(TimestampedBase):
    """Message for one error code in one language.

    Translations reference their error code by ``code`` rather than by id,
    so a translation file can be imported without resolving ids first.
    """

    __tablename__ = "error_translations"
    __table_args__ = (
        UniqueConstraint("error_code", "language", name="uq_error_translations_code_language"),
    )

    language: Mapped[str] = mapped_column(
        String(10),
        index=True,
        nullable=False,
        comment="BCP 47 language tag (e.g., 'en', 'pt-BR')",
    )
    message: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Translated, user-facing message",
    )
    error_code: Mapped[str] = mapped_column(
        String(100),
        ForeignKey("error_codes.code", ondelete="CASCADE"),
        index=True,
        nullable=False,
        comment="Code of the translated error",
    )

    error: Mapped[ErrorCode] = relationship(
        "ErrorCode",
        back_populates="translations",
        lazy="raise",
    )

    def __repr__(self) -> str:
        """Return translation summary for debugging."""
        return (
            f"<ErrorTranslation(id={self.id}, error_code={self.error_code!r}, "
            f"language={self.language!r})>"
        )
