"""Filter expression parsing for list endpoints.

Filter values arrive as ``op:value`` strings in the query string::

    ?status=eq:published
    ?createdAt=gt:2025-01-01T00:00:00
    ?code=like:AUTH
    ?id=between:10,20
    ?language=in:en,fr,de
    ?context=null:

A value without ``:``, or with an operator keyword we don't know, is an
equality match on the whole raw string. Values are coerced to the column's
Python type before binding, so ``id=gt:10`` compares integers, not strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import String, cast

from error_registry.core.pagination.exceptions import InvalidFilterError

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute
    from sqlalchemy.sql.elements import ColumnElement

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def coerce_value(column: InstrumentedAttribute[Any], value: Any) -> Any:
    """Convert a raw query/cursor value to the column's Python type.

    Raises:
        ValueError: If the value cannot be represented in the column type
    """
    if value is None:
        return None

    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value

    if python_type is bool:
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ValueError(f"expected a boolean, got {value!r}")

    if isinstance(value, python_type) and not isinstance(value, bool):
        return value

    if python_type is datetime:
        return datetime.fromisoformat(str(value))
    if python_type is date:
        return date.fromisoformat(str(value))
    if python_type in (int, float, Decimal, UUID, str):
        try:
            return python_type(value)
        except (ArithmeticError, TypeError) as e:
            raise ValueError(str(e)) from e

    return value


# ──────────────────────────────────────────────────────────────
# Comparison operators
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Eq:
    """Equality match."""

    value: str

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column == coerce_value(column, self.value)


@dataclass(frozen=True, slots=True)
class Lt:
    """Strictly less than."""

    value: str

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column < coerce_value(column, self.value)


@dataclass(frozen=True, slots=True)
class Gt:
    """Strictly greater than."""

    value: str

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column > coerce_value(column, self.value)


@dataclass(frozen=True, slots=True)
class Like:
    """Case-insensitive substring match.

    Wildcards in the value are matched literally. Non-text columns are cast
    to text first.
    """

    value: str

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        target = column if _is_text(column) else cast(column, String)
        return target.icontains(self.value, autoescape=True)


@dataclass(frozen=True, slots=True)
class Between:
    """Inclusive range ``low <= column <= high``."""

    low: str
    high: str

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column.between(coerce_value(column, self.low), coerce_value(column, self.high))


@dataclass(frozen=True, slots=True)
class In:
    """Membership in a comma-separated list."""

    values: tuple[str, ...]

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column.in_([coerce_value(column, v) for v in self.values])


@dataclass(frozen=True, slots=True)
class IsNull:
    """``IS NULL`` (or ``IS NOT NULL`` when negated with ``null:false``)."""

    negated: bool = False

    def to_clause(self, column: InstrumentedAttribute[Any]) -> ColumnElement[bool]:
        return column.is_not(None) if self.negated else column.is_(None)


ComparisonOperator = Eq | Lt | Gt | Like | Between | In | IsNull


def _is_text(column: InstrumentedAttribute[Any]) -> bool:
    try:
        return column.type.python_type is str
    except NotImplementedError:
        return False


def _parse_between(field: str, value: str) -> Between:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 2 or not all(parts):
        raise InvalidFilterError(field, "between expects exactly two comma-separated values")
    return Between(parts[0], parts[1])


def _parse_in(field: str, value: str) -> In:
    values = tuple(part.strip() for part in value.split(",") if part.strip())
    if not values:
        raise InvalidFilterError(field, "in expects at least one value")
    return In(values)


def _parse_null(field: str, value: str) -> IsNull:
    normalized = value.strip().lower()
    if not normalized or normalized in _TRUE_VALUES:
        return IsNull()
    if normalized in _FALSE_VALUES:
        return IsNull(negated=True)
    raise InvalidFilterError(field, "null expects no value, true or false")


def parse_filter(raw: str, *, field: str = "filter") -> ComparisonOperator:
    """Parse an ``op:value`` filter expression.

    Args:
        raw: Raw query-string value
        field: Field name, used in error messages

    Returns:
        The comparison operator the expression denotes

    Raises:
        InvalidFilterError: If a known operator has a malformed argument

    Example:
        >>> parse_filter("gt:10")
        Gt(value='10')
        >>> parse_filter("published")
        Eq(value='published')
        >>> parse_filter("foo:bar")
        Eq(value='foo:bar')
    """
    operator, sep, value = raw.partition(":")
    if not sep:
        return Eq(raw)

    match operator:
        case "eq":
            return Eq(value)
        case "lt":
            return Lt(value)
        case "gt":
            return Gt(value)
        case "like":
            return Like(value)
        case "between":
            return _parse_between(field, value)
        case "in":
            return _parse_in(field, value)
        case "null":
            return _parse_null(field, value)
        case _:
            return Eq(raw)


def build_filter_clause(
    field: str,
    column: InstrumentedAttribute[Any],
    raw: str,
) -> ColumnElement[bool]:
    """Parse ``raw`` and render it against ``column``.

    Raises:
        InvalidFilterError: If the expression is malformed or its value
            cannot be coerced to the column type
    """
    operator = parse_filter(raw, field=field)
    try:
        return operator.to_clause(column)
    except ValueError as e:
        raise InvalidFilterError(field, str(e)) from e


__all__ = [
    "Between",
    "ComparisonOperator",
    "Eq",
    "Gt",
    "In",
    "IsNull",
    "Like",
    "Lt",
    "build_filter_clause",
    "coerce_value",
    "parse_filter",
]
