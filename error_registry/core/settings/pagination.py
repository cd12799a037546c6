"""Pagination settings for list endpoints.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=50, PAGINATION_STRICT_FILTERS=false
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size when the request does not specify one.
        max_limit: Largest page size a client may request.
        strict_filters: Reject filters on fields outside the allow-list
            (False drops them instead).
    """

    default_limit: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Default page size when limit not specified",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum allowed page size (hard limit)",
    )
    strict_filters: bool = Field(
        default=True,
        description="Reject unknown filter fields with 400 instead of ignoring them",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_limits(self) -> PaginationSettings:
        if self.default_limit > self.max_limit:
            msg = "default_limit must not exceed max_limit"
            raise ValueError(msg)
        return self
