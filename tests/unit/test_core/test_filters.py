"""Unit tests for filter expression parsing."""

from __future__ import annotations

from datetime import datetime

import pytest

from error_registry.core.pagination.exceptions import InvalidFilterError
from error_registry.core.pagination.filters import (
    Between,
    Eq,
    Gt,
    In,
    IsNull,
    Like,
    Lt,
    build_filter_clause,
    coerce_value,
    parse_filter,
)
from error_registry.features.models import ErrorCode

# ──────────────────────────────────────────────────────────────
# Parsing
# ──────────────────────────────────────────────────────────────


class TestParseFilter:
    """Tests for parse_filter."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("eq:published", Eq("published")),
            ("lt:10", Lt("10")),
            ("gt:2025-01-01T00:00:00", Gt("2025-01-01T00:00:00")),
            ("like:AUTH", Like("AUTH")),
            ("between:10,20", Between("10", "20")),
            ("between: 1 , 5 ", Between("1", "5")),
            ("in:en,fr,de", In(("en", "fr", "de"))),
            ("null:", IsNull()),
            ("null:true", IsNull()),
            ("null:false", IsNull(negated=True)),
        ],
    )
    def test_known_operators(self, raw: str, expected: object):
        """Each operator keyword should map to its comparison."""
        assert parse_filter(raw) == expected

    def test_plain_value_is_equality(self):
        """A value without an operator prefix is an equality match."""
        assert parse_filter("published") == Eq("published")

    def test_unknown_operator_keeps_whole_value(self):
        """An unknown prefix is part of the value, not an operator."""
        assert parse_filter("foo:bar") == Eq("foo:bar")

    def test_eq_with_colon_in_value(self):
        """Only the first colon separates the operator."""
        assert parse_filter("eq:12:30") == Eq("12:30")

    @pytest.mark.parametrize("raw", ["between:1", "between:1,2,3", "between:,5"])
    def test_between_requires_two_values(self, raw: str):
        """between needs exactly two non-empty values."""
        with pytest.raises(InvalidFilterError) as exc_info:
            parse_filter(raw, field="id")

        assert exc_info.value.detail == (
            "Invalid filter for field 'id': between expects exactly two comma-separated values"
        )

    def test_in_requires_a_value(self):
        """in with nothing after the colon is rejected."""
        with pytest.raises(InvalidFilterError, match="in expects at least one value"):
            parse_filter("in: , ", field="language")

    def test_null_rejects_other_values(self):
        """null accepts only empty, true or false."""
        with pytest.raises(InvalidFilterError, match="null expects no value, true or false"):
            parse_filter("null:maybe", field="context")


# ──────────────────────────────────────────────────────────────
# Coercion and clause rendering
# ──────────────────────────────────────────────────────────────


class TestCoerceValue:
    """Tests for coerce_value."""

    def test_integer_column(self):
        """Strings should become ints for integer columns."""
        assert coerce_value(ErrorCode.id, "10") == 10

    def test_datetime_column(self):
        """ISO strings should become datetimes for datetime columns."""
        assert coerce_value(ErrorCode.created_at, "2025-01-01T00:00:00") == datetime(2025, 1, 1)

    def test_text_column_unchanged(self):
        """Text columns keep the raw string."""
        assert coerce_value(ErrorCode.code, "ERR_001") == "ERR_001"

    def test_none_passes_through(self):
        """None is never coerced."""
        assert coerce_value(ErrorCode.id, None) is None

    def test_invalid_integer_raises_value_error(self):
        """Values that cannot be represented raise ValueError."""
        with pytest.raises(ValueError):
            coerce_value(ErrorCode.id, "abc")


class TestBuildFilterClause:
    """Tests for build_filter_clause."""

    def test_gt_binds_coerced_value(self):
        """Comparison clauses should bind the column-typed value."""
        clause = build_filter_clause("id", ErrorCode.id, "gt:10")

        assert clause.right.value == 10

    def test_plain_equality(self):
        """A bare value renders an equality comparison."""
        clause = build_filter_clause("status", ErrorCode.status, "published")

        assert clause.right.value == "published"

    def test_in_binds_all_values(self):
        """in renders a membership test over every coerced value."""
        clause = build_filter_clause("id", ErrorCode.id, "in:1,2,3")

        assert clause.right.value == [1, 2, 3]

    def test_null_renders_is_null(self):
        """null renders IS NULL, null:false renders IS NOT NULL."""
        assert "IS NULL" in str(build_filter_clause("context", ErrorCode.context, "null:"))
        assert "IS NOT NULL" in str(build_filter_clause("context", ErrorCode.context, "null:false"))

    def test_like_is_case_insensitive(self):
        """like renders a lower-cased LIKE match."""
        sql = str(build_filter_clause("code", ErrorCode.code, "like:auth"))

        assert "lower(" in sql
        assert "LIKE" in sql

    def test_uncoercible_value_becomes_invalid_filter(self):
        """Type errors surface as InvalidFilterError, never as a 500."""
        with pytest.raises(InvalidFilterError) as exc_info:
            build_filter_clause("id", ErrorCode.id, "gt:abc")

        assert exc_info.value.field == "id"
        assert exc_info.value.status_code == 400

    def test_bad_datetime_becomes_invalid_filter(self):
        """Malformed dates are rejected the same way."""
        with pytest.raises(InvalidFilterError):
            build_filter_clause("createdAt", ErrorCode.created_at, "between:yesterday,today")
