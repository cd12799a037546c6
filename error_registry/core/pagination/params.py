"""List request model shared by every paginated endpoint."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from error_registry.core.pagination.capabilities import PaginationMode
from error_registry.core.pagination.exceptions import InvalidPaginationParameterError

SortOrder = Literal["ASC", "DESC"]
Direction = Literal["next", "prev"]

RESERVED_PARAMS = frozenset(
    {
        "limit",
        "page",
        "cursor",
        "startId",
        "startValue",
        "sort",
        "order",
        "direction",
        "search",
        "include",
    }
)


class PaginationRequest(BaseModel):
    """Validated list request.

    Reserved query parameters map to fields; every other query parameter is
    treated as a filter expression keyed by API field name.

    Attributes:
        limit: Page size
        page: 1-based page number (offset mode)
        cursor: Opaque keyset cursor
        start_id: Legacy keyset start identifier (``startId``)
        start_value: Legacy keyset start sort value (``startValue``)
        sort: API name of the sort field
        order: Sort order
        direction: Keyset traversal direction
        search: Free-text search term
        include: Comma-separated relation names
        filters: Field name to raw filter expression
    """

    limit: int = Field(default=20, ge=1, description="Page size")
    page: int | None = Field(default=None, ge=1, description="Page number (offset mode)")
    cursor: str | None = Field(default=None, description="Keyset cursor")
    start_id: str | None = Field(default=None, alias="startId")
    start_value: str | None = Field(default=None, alias="startValue")
    sort: str = Field(default="id", min_length=1, description="Sort field")
    order: SortOrder = Field(default="ASC", description="Sort order")
    direction: Direction = Field(default="next", description="Keyset direction")
    search: str | None = Field(default=None, description="Search term")
    include: str | None = Field(default=None, description="Relations to include")
    filters: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    @field_validator("order", mode="before")
    @classmethod
    def _normalize_order(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("direction", mode="before")
    @classmethod
    def _normalize_direction(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @field_validator("search", "include", "start_value", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_query_params(
        cls,
        params: Mapping[str, str],
        *,
        default_limit: int = 20,
        max_limit: int = 100,
        reserved_extra: Iterable[str] = (),
    ) -> PaginationRequest:
        """Build a request from a flat query-string mapping.

        Args:
            params: Query parameters (last value wins for repeated keys)
            default_limit: Page size when ``limit`` is absent
            max_limit: Largest accepted page size
            reserved_extra: Additional keys that are neither pagination
                parameters nor filters (ignored)

        Raises:
            InvalidPaginationParameterError: If a reserved parameter is malformed
        """
        ignored = set(reserved_extra)
        reserved: dict[str, Any] = {"limit": default_limit}
        filters: dict[str, str] = {}
        for key, value in params.items():
            if key in RESERVED_PARAMS:
                reserved[key] = value
            elif key not in ignored:
                filters[key] = value

        try:
            request = cls.model_validate({**reserved, "filters": filters})
        except ValidationError as e:
            error = e.errors()[0]
            parameter = str(error["loc"][0]) if error["loc"] else "query"
            raise InvalidPaginationParameterError(parameter, error["msg"]) from e

        if request.limit > max_limit:
            raise InvalidPaginationParameterError(
                "limit", f"must be between 1 and {max_limit}"
            )
        if request.page is not None and (request.cursor is not None or request.start_id):
            raise InvalidPaginationParameterError(
                "page", "cannot be combined with cursor or startId"
            )
        return request

    @property
    def has_cursor(self) -> bool:
        """Whether the request positions itself with a cursor or legacy start id."""
        return self.cursor is not None or bool(self.start_id)

    def resolve_mode(self, default: PaginationMode) -> PaginationMode:
        """Pick offset or keyset mode for this request."""
        if self.has_cursor:
            return "keyset"
        if self.page is not None:
            return "offset"
        return default

    def link_params(self) -> dict[str, Any]:
        """Parameters every navigation link must carry to reproduce the query."""
        return {
            "limit": self.limit,
            "sort": self.sort,
            "order": self.order,
            "search": self.search,
            "include": self.include,
            **self.filters,
        }


__all__ = ["RESERVED_PARAMS", "Direction", "PaginationRequest", "SortOrder"]
