"""Query filtering utilities for SQLAlchemy.

These filters work directly with SQLAlchemy statements without hiding the
query. They're utility helpers, not an abstraction layer.

Usage:
    from sqlalchemy import select
    from error_registry.core.database.filters import SearchFilter, OrderBy, LimitOffset

    stmt = select(ErrorCode)
    stmt = SearchFilter([ErrorCode.code, ErrorCode.context], "auth").apply(stmt)
    stmt = OrderBy(ErrorCode.created_at, "desc").apply(stmt)
    stmt = LimitOffset(limit=20, offset=0).apply(stmt)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import Select, and_, func, or_

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute
    from sqlalchemy.sql.elements import ColumnElement


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which modifies a SQLAlchemy statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement.

        Args:
            statement: SQLAlchemy select statement

        Returns:
            Modified select statement
        """
        ...


class WhereAll(StatementFilter):
    """AND together a list of prebuilt conditions.

    Example:
        stmt = WhereAll([ErrorCode.status == "published", ErrorCode.id > 10]).apply(stmt)
    """

    def __init__(self, conditions: Sequence[ColumnElement[bool]]):
        self.conditions = list(conditions)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply conditions to statement."""
        if not self.conditions:
            return statement
        return statement.where(and_(*self.conditions))


class SearchFilter(StatementFilter):
    """Multi-field text search using LIKE/ILIKE.

    Example:
        # Case-insensitive search across multiple fields
        stmt = SearchFilter(
            fields=[ErrorCategory.name, ErrorCategory.description],
            value="auth",
        ).apply(stmt)

        # Generates: WHERE (LOWER(name) LIKE '%auth%' OR LOWER(description) LIKE '%auth%')
    """

    def __init__(
        self,
        fields: InstrumentedAttribute[Any] | Sequence[InstrumentedAttribute[Any]],
        value: str | None,
        *,
        case_insensitive: bool = True,
        operator: Literal["and", "or"] = "or",
    ):
        """Initialize search filter.

        Args:
            fields: Single field or list of fields to search
            value: Search term
            case_insensitive: Use ILIKE (True) or LIKE (False)
            operator: Join multiple fields with AND or OR
        """
        self.fields = [fields] if not isinstance(fields, Sequence) else list(fields)
        self.value = value
        self.case_insensitive = case_insensitive
        self.operator = operator

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply search filter to statement."""
        if not self.value or not self.fields:
            return statement

        search_term = f"%{self.value}%"
        conditions = []

        for field in self.fields:
            if self.case_insensitive:
                condition = func.lower(field).like(search_term.lower())
            else:
                condition = field.like(search_term)
            conditions.append(condition)

        if self.operator == "or":
            return statement.where(or_(*conditions))
        return statement.where(and_(*conditions))


class OrderBy(StatementFilter):
    """Column ordering/sorting.

    Example:
        # Descending order
        stmt = OrderBy(ErrorCode.created_at, "desc").apply(stmt)

        # Multiple orderings
        stmt = OrderBy([ErrorCode.status, ErrorCode.id], ["desc", "asc"]).apply(stmt)

        # NULLs above every value: ASC NULLS LAST / DESC NULLS FIRST
        stmt = OrderBy(ErrorCode.context, "asc", nulls_largest=True).apply(stmt)
    """

    def __init__(
        self,
        fields: InstrumentedAttribute[Any] | Sequence[InstrumentedAttribute[Any]],
        sort_order: Literal["asc", "desc"] | Sequence[Literal["asc", "desc"]] = "asc",
        *,
        nulls_largest: bool = False,
    ):
        """Initialize ordering filter.

        Args:
            fields: Single field or list of fields to order by
            sort_order: Sort direction(s) - 'asc' or 'desc'
            nulls_largest: Place NULLs as if they were greater than any value,
                independent of the database's default NULL ordering
        """
        self.fields = [fields] if not isinstance(fields, Sequence) else list(fields)
        self.nulls_largest = nulls_largest

        if isinstance(sort_order, str):
            self.sort_orders = [sort_order] * len(self.fields)
        else:
            self.sort_orders = list(sort_order)
            if len(self.sort_orders) != len(self.fields):
                msg = "sort_order length must match fields length"
                raise ValueError(msg)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply ordering to statement."""
        for field, order in zip(self.fields, self.sort_orders, strict=True):
            if order == "desc":
                clause = field.desc()
                if self.nulls_largest:
                    clause = clause.nulls_first()
            else:
                clause = field.asc()
                if self.nulls_largest:
                    clause = clause.nulls_last()
            statement = statement.order_by(clause)
        return statement


class LimitOffset(StatementFilter):
    """Pagination using LIMIT and OFFSET.

    Example:
        # Page 1 (first 20 items)
        stmt = LimitOffset(limit=20, offset=0).apply(stmt)

        # Page 2
        stmt = LimitOffset(limit=20, offset=20).apply(stmt)
    """

    def __init__(self, limit: int, offset: int = 0):
        """Initialize pagination filter.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip
        """
        self.limit = limit
        self.offset = offset

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply pagination to statement."""
        return statement.limit(self.limit).offset(self.offset)


__all__ = [
    "LimitOffset",
    "OrderBy",
    "SearchFilter",
    "StatementFilter",
    "WhereAll",
]
