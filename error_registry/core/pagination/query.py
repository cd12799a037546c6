"""Translate a validated list request into a base SQLAlchemy statement.

Everything a client controls (sort field, filters, search, includes) is
checked against the entity's capabilities here, before a statement is
built. The paginators only add ordering, seek conditions and limits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute, selectinload

from error_registry.core.database.exceptions import RepositoryError
from error_registry.core.database.filters import SearchFilter, WhereAll
from error_registry.core.pagination.filters import build_filter_clause
from error_registry.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from error_registry.core.pagination.capabilities import QueryCapabilities
    from error_registry.core.pagination.params import PaginationRequest

lazy_logger = get_lazy_logger(__name__)


@dataclass(frozen=True, slots=True)
class ListQuery:
    """Filtered, searched base statement plus the columns paginators order by.

    Attributes:
        model: Mapped class being listed
        statement: ``SELECT model`` with filter and search conditions applied
        options: Relationship loader options for requested includes
        sort_field: API name of the sort field
        sort_attr: Model attribute backing the sort field
        sort_column: Sort column
        id_field: API name of the tie-break field
        id_attr: Model attribute backing the tie-break field
        id_column: Tie-break column
    """

    model: type[Any]
    statement: Select[Any]
    options: tuple[Any, ...]
    sort_field: str
    sort_attr: str
    sort_column: InstrumentedAttribute[Any]
    id_field: str
    id_attr: str
    id_column: InstrumentedAttribute[Any]

    @property
    def entity(self) -> str:
        return self.model.__name__

    @property
    def sorts_by_id(self) -> bool:
        """Whether the sort column is the tie-break column itself."""
        return self.sort_attr == self.id_attr

    @property
    def sort_nullable(self) -> bool:
        """Whether the sort column can hold NULL (NULLs then order as the largest value)."""
        return any(column.nullable for column in self.sort_column.property.columns)

    @property
    def order_columns(self) -> list[InstrumentedAttribute[Any]]:
        """Sort column followed by the tie-break column (once if they coincide)."""
        if self.sorts_by_id:
            return [self.sort_column]
        return [self.sort_column, self.id_column]


def _column(model: type[Any], attr: str) -> InstrumentedAttribute[Any]:
    column = getattr(model, attr, None)
    if not isinstance(column, InstrumentedAttribute):
        raise RepositoryError(
            "Capability refers to an unknown model attribute",
            details={"model": model.__name__, "attribute": attr},
        )
    return column


def build_list_query(
    model: type[Any],
    capabilities: QueryCapabilities,
    request: PaginationRequest,
    *,
    strict_filters: bool = True,
) -> ListQuery:
    """Validate ``request`` against ``capabilities`` and build the base statement.

    Filters are ANDed together; the search term is matched (case-insensitive
    substring) against every searchable field and ORed.

    Args:
        model: Mapped class to list
        capabilities: Allow-lists for ``model``
        request: Parsed list request
        strict_filters: Reject filters on unknown fields instead of dropping them

    Returns:
        ListQuery ready for a paginator

    Raises:
        InvalidFieldError: Sort or filter field not allowed
        InvalidFilterError: Filter expression malformed for its column
        InvalidRelationError: Include not allowed
        RepositoryError: Capabilities name an attribute the model doesn't have
    """
    sort_field = capabilities.validate_sort(request.sort)
    filters, dropped = capabilities.validate_filters(request.filters, strict=strict_filters)
    includes = capabilities.parse_includes(request.include)

    if dropped:
        lazy_logger.debug(
            lambda: f"list.{model.__name__}: ignoring filters on unknown fields {dropped}"
        )

    conditions = [
        build_filter_clause(name, _column(model, capabilities.attribute_for(name)), raw)
        for name, raw in filters.items()
    ]
    search_columns = [
        _column(model, capabilities.attribute_for(name))
        for name in sorted(capabilities.searchable_fields)
    ]

    statement = select(model)
    statement = WhereAll(conditions).apply(statement)
    statement = SearchFilter(search_columns, request.search).apply(statement)

    options = tuple(
        selectinload(_column(model, capabilities.relationship_for(relation)))
        for relation in includes
    )

    sort_attr = capabilities.attribute_for(sort_field)
    id_attr = capabilities.attribute_for(capabilities.id_field)
    return ListQuery(
        model=model,
        statement=statement,
        options=options,
        sort_field=sort_field,
        sort_attr=sort_attr,
        sort_column=_column(model, sort_attr),
        id_field=capabilities.id_field,
        id_attr=id_attr,
        id_column=_column(model, id_attr),
    )


__all__ = ["ListQuery", "build_list_query"]
