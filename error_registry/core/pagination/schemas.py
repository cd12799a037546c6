"""Response envelope for paginated list endpoints.

Example response (offset mode):
    {
        "data": [...],
        "meta": {
            "itemsPerPage": 20,
            "totalItems": 45,
            "currentPage": 2,
            "totalPages": 3,
            "hasNextPage": true,
            "hasPreviousPage": true
        },
        "links": {
            "first": "/api/v1/errors?page=1&limit=20&sort=id&order=ASC",
            "prev": "/api/v1/errors?page=1&limit=20&sort=id&order=ASC",
            "next": "/api/v1/errors?page=3&limit=20&sort=id&order=ASC",
            "last": "/api/v1/errors?page=3&limit=20&sort=id&order=ASC"
        }
    }

Keyset responses carry no totals and only ``next``/``prev`` links.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import BaseModel, Field

from error_registry.core.schemas.base import CustomBase


class PaginationMeta(CustomBase):
    """Page metadata. Totals are only present in offset mode."""

    items_per_page: int = Field(ge=1, description="Requested page size")
    has_next_page: bool = Field(description="Whether a following page exists")
    has_previous_page: bool = Field(description="Whether a preceding page exists")
    total_items: int | None = Field(default=None, ge=0, description="Matching rows (offset mode)")
    current_page: int | None = Field(default=None, ge=1, description="Page number (offset mode)")
    total_pages: int | None = Field(default=None, ge=0, description="Page count (offset mode)")


class PaginationLinks(CustomBase):
    """Navigation links. Absent links mean there is nowhere to go."""

    first: str | None = Field(default=None, description="First page")
    prev: str | None = Field(default=None, description="Previous page")
    next: str | None = Field(default=None, description="Next page")
    last: str | None = Field(default=None, description="Last page (offset mode)")


@dataclass(slots=True, frozen=True)
class PageResult[T]:
    """Page of ORM rows as produced by a pagination engine.

    Attributes:
        items: Rows in response order
        meta: Page metadata
        links: Navigation links
    """

    items: Sequence[T]
    meta: PaginationMeta
    links: PaginationLinks


class PaginatedResponse[T](BaseModel):
    """Paginated response wrapper.

    Example:
        @router.get("/categories", response_model=PaginatedResponse[CategoryResponse])
        async def list_categories(...) -> PaginatedResponse[CategoryResponse]:
            result = await service.list(session, request, base_url=url)
            return PaginatedResponse[CategoryResponse].from_result(result, CategoryResponse)
    """

    data: list[T] = Field(default_factory=list, description="Page items")
    meta: PaginationMeta
    links: PaginationLinks = Field(default_factory=PaginationLinks)

    @classmethod
    def from_result(cls, result: PageResult[object], schema: type[T]) -> PaginatedResponse[T]:
        """Build a response by validating each row into ``schema``."""
        validate = schema.model_validate  # type: ignore[attr-defined]
        return cls(
            data=[validate(item) for item in result.items],
            meta=result.meta,
            links=result.links,
        )


__all__ = ["PageResult", "PaginatedResponse", "PaginationLinks", "PaginationMeta"]
