"""Unit tests for the pagination engines that do not need a database."""

from __future__ import annotations

import operator
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from error_registry.core.pagination import (
    CursorCodec,
    CursorData,
    InvalidCursorError,
    InvalidFieldError,
    InvalidPaginationParameterError,
    KeysetPaginator,
    OffsetPaginator,
    PaginationRequest,
    StorageError,
    build_list_query,
    paginate,
)
from error_registry.core.pagination.keyset import SEEK_PLANS
from error_registry.features.categories.models import ErrorCategory
from error_registry.features.categories.service import CATEGORY_CAPABILITIES


def _request(**params: str) -> PaginationRequest:
    return PaginationRequest.from_query_params(params)


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


# ──────────────────────────────────────────────────────────────
# Dispatch and validation
# ──────────────────────────────────────────────────────────────


class TestPaginate:
    """Tests for the paginate entry point."""

    @pytest.mark.asyncio
    async def test_invalid_sort_never_touches_database(self, session: AsyncMock):
        """Allow-list violations are raised before any statement runs."""
        with pytest.raises(InvalidFieldError):
            await paginate(session, ErrorCategory, CATEGORY_CAPABILITIES, _request(sort="secret"))

        session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_cursor_never_touches_database(self, session: AsyncMock):
        with pytest.raises(InvalidCursorError):
            await paginate(
                session, ErrorCategory, CATEGORY_CAPABILITIES, _request(cursor="%%%")
            )

        session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_offset_storage_failure(self, session: AsyncMock):
        """Driver errors are wrapped into StorageError."""
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("boom"))

        with pytest.raises(StorageError) as exc_info:
            await paginate(session, ErrorCategory, CATEGORY_CAPABILITIES, _request(page="1"))

        assert exc_info.value.detail == "Failed to load ErrorCategory list"
        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_keyset_storage_failure(self, session: AsyncMock):
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("boom"))

        with pytest.raises(StorageError):
            await paginate(session, ErrorCategory, CATEGORY_CAPABILITIES, _request())


# ──────────────────────────────────────────────────────────────
# Keyset positioning
# ──────────────────────────────────────────────────────────────


class TestSeekPlans:
    """Direction and order determine the seek comparison and fetch order."""

    @pytest.mark.parametrize(
        ("direction", "order", "compare", "fetch_order"),
        [
            ("next", "ASC", operator.gt, "asc"),
            ("next", "DESC", operator.lt, "desc"),
            ("prev", "ASC", operator.lt, "desc"),
            ("prev", "DESC", operator.gt, "asc"),
        ],
    )
    def test_plan(self, direction: str, order: str, compare: object, fetch_order: str):
        plan = SEEK_PLANS[(direction, order)]

        assert plan.compare is compare
        assert plan.fetch_order == fetch_order


class TestKeysetPosition:
    """Tests for cursor and legacy start position handling."""

    @pytest.mark.asyncio
    async def test_cursor_for_other_sort_is_rejected(self, session: AsyncMock):
        """A cursor only resumes the ordering it was issued for."""
        cursor = CursorCodec.encode(CursorData(id=3, value="Billing", sort="name"))
        request = _request(cursor=cursor, sort="description")
        query = build_list_query(ErrorCategory, CATEGORY_CAPABILITIES, request)

        with pytest.raises(InvalidCursorError) as exc_info:
            await KeysetPaginator().paginate(session, query, request)

        assert exc_info.value.detail == (
            "Invalid cursor format: cursor was issued for sort=name order=ASC"
        )
        session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_cursor_for_other_order_is_rejected(self, session: AsyncMock):
        cursor = CursorCodec.encode(CursorData(id=3, value="Billing", sort="name"))
        request = _request(cursor=cursor, sort="name", order="DESC")
        query = build_list_query(ErrorCategory, CATEGORY_CAPABILITIES, request)

        with pytest.raises(InvalidCursorError):
            await KeysetPaginator().paginate(session, query, request)

    @pytest.mark.asyncio
    async def test_cursor_with_wrong_value_types(self, session: AsyncMock):
        """A position that cannot be coerced to the columns is a bad cursor."""
        cursor = CursorCodec.encode(CursorData(id="seven", value="x", sort="createdAt"))
        request = _request(cursor=cursor, sort="createdAt")
        query = build_list_query(ErrorCategory, CATEGORY_CAPABILITIES, request)

        with pytest.raises(InvalidCursorError) as exc_info:
            await KeysetPaginator().paginate(session, query, request)

        assert exc_info.value.reason == "position does not match field types"

    @pytest.mark.asyncio
    async def test_start_id_requires_start_value(self, session: AsyncMock):
        """Legacy positioning on a non-id sort needs the sort value too."""
        request = _request(startId="5", sort="name")
        query = build_list_query(ErrorCategory, CATEGORY_CAPABILITIES, request)

        with pytest.raises(InvalidPaginationParameterError) as exc_info:
            await KeysetPaginator().paginate(session, query, request)

        assert exc_info.value.detail == (
            "Invalid startValue parameter: is required when sorting by 'name'"
        )

    def test_seek_clause_with_tie_break(self):
        """Non-unique sorts compare the id when sort values are equal."""
        request = _request(sort="name")
        query = build_list_query(ErrorCategory, CATEGORY_CAPABILITIES, request)

        clause = KeysetPaginator._seek_clause(
            query,
            CursorData(id=7, value="Billing", sort="name"),
            SEEK_PLANS[("next", "ASC")],
        )

        sql = str(clause)
        assert "error_categories.name > " in sql
        assert "error_categories.name = " in sql
        assert "error_categories.id > " in sql

    def test_seek_clause_sorted_by_id(self):
        request = _request()
        query = build_list_query(ErrorCategory, CATEGORY_CAPABILITIES, request)

        clause = KeysetPaginator._seek_clause(
            query,
            CursorData(id="7", value="7"),
            SEEK_PLANS[("prev", "ASC")],
        )

        assert str(clause) == "error_categories.id < :id_1"
        assert clause.right.value == 7

    @pytest.mark.asyncio
    async def test_malformed_start_id(self, session: AsyncMock):
        """A legacy startId that is not an id is a parameter error, not a cursor error."""
        request = _request(startId="abc")
        query = build_list_query(ErrorCategory, CATEGORY_CAPABILITIES, request)

        with pytest.raises(InvalidPaginationParameterError) as exc_info:
            await KeysetPaginator().paginate(session, query, request)

        assert exc_info.value.parameter == "startId"
        assert exc_info.value.detail == (
            "Invalid startId parameter: 'abc' does not match the field type"
        )
        session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_start_value(self, session: AsyncMock):
        request = _request(startId="5", startValue="yesterday", sort="createdAt")
        query = build_list_query(ErrorCategory, CATEGORY_CAPABILITIES, request)

        with pytest.raises(InvalidPaginationParameterError) as exc_info:
            await KeysetPaginator().paginate(session, query, request)

        assert exc_info.value.parameter == "startValue"


class TestNullableSeek:
    """NULL sort values order above every value and take part in seeking."""

    @staticmethod
    def _query():
        return build_list_query(
            ErrorCategory, CATEGORY_CAPABILITIES, _request(sort="description")
        )

    def test_sort_nullable(self):
        assert self._query().sort_nullable is True
        assert build_list_query(
            ErrorCategory, CATEGORY_CAPABILITIES, _request(sort="name")
        ).sort_nullable is False

    def test_moving_up_from_value_admits_nulls(self):
        clause = KeysetPaginator._seek_clause(
            self._query(),
            CursorData(id=6, value="d6", sort="description"),
            SEEK_PLANS[("next", "ASC")],
        )

        sql = str(clause)
        assert "error_categories.description > " in sql
        assert "error_categories.description IS NULL" in sql

    def test_moving_down_from_value_excludes_nulls(self):
        clause = KeysetPaginator._seek_clause(
            self._query(),
            CursorData(id=6, value="d6", sort="description"),
            SEEK_PLANS[("prev", "ASC")],
        )

        sql = str(clause)
        assert "error_categories.description < " in sql
        assert "IS NULL" not in sql

    def test_moving_up_from_null_stays_in_null_run(self):
        clause = KeysetPaginator._seek_clause(
            self._query(),
            CursorData(id=3, value=None, sort="description"),
            SEEK_PLANS[("next", "ASC")],
        )

        sql = str(clause)
        assert "error_categories.description IS NULL" in sql
        assert "error_categories.id > " in sql
        assert "IS NOT NULL" not in sql

    def test_moving_down_from_null_admits_values(self):
        clause = KeysetPaginator._seek_clause(
            self._query(),
            CursorData(id=3, value=None, sort="description", order="DESC"),
            SEEK_PLANS[("next", "DESC")],
        )

        sql = str(clause)
        assert "error_categories.description IS NOT NULL" in sql
        assert "error_categories.id < " in sql

    def test_null_value_on_required_column_is_rejected(self):
        query = build_list_query(ErrorCategory, CATEGORY_CAPABILITIES, _request(sort="name"))

        with pytest.raises(InvalidCursorError) as exc_info:
            KeysetPaginator._seek_clause(
                query,
                CursorData(id=3, value=None, sort="name"),
                SEEK_PLANS[("next", "ASC")],
            )

        assert exc_info.value.reason == "position does not match field types"


class TestOffsetLinks:
    """Tests for offset link construction."""

    def test_past_last_page_points_back(self):
        """Past the end, prev points at the last existing page."""
        request = _request(limit="10", page="5")

        links = OffsetPaginator._links(request, 5, 3, "/api/v1/errors")

        assert links.prev == "/api/v1/errors?page=3&limit=10&sort=id&order=ASC"
        assert links.next is None
        assert links.last == "/api/v1/errors?page=3&limit=10&sort=id&order=ASC"

    def test_no_rows(self):
        """With no rows only the first link remains."""
        links = OffsetPaginator._links(_request(), 1, 0, "/api/v1/errors")

        assert links.first == "/api/v1/errors?page=1&limit=20&sort=id&order=ASC"
        assert links.prev is None
        assert links.next is None
        assert links.last is None

    def test_no_base_url(self):
        links = OffsetPaginator._links(_request(), 1, 3, None)

        assert links.first is None
        assert links.next is None
