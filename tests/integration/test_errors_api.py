"""API tests for page-number (offset) pagination on /errors."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.integration

URL = "/api/v1/errors"


def _codes(body: dict) -> list[str]:
    return [item["code"] for item in body["data"]]


# ──────────────────────────────────────────────────────────────
# Page boundaries
# ──────────────────────────────────────────────────────────────


class TestErrorPages:
    """Offset pages, totals and links."""

    @pytest.mark.asyncio
    async def test_first_page(self, client: AsyncClient, error_codes: list[dict]):
        response = await client.get(URL, params={"limit": 10})

        assert response.status_code == 200
        body = response.json()
        assert [item["id"] for item in body["data"]] == list(range(1, 11))
        assert body["meta"] == {
            "itemsPerPage": 10,
            "totalItems": 25,
            "currentPage": 1,
            "totalPages": 3,
            "hasNextPage": True,
            "hasPreviousPage": False,
        }
        assert body["links"] == {
            "first": f"{URL}?page=1&limit=10&sort=id&order=ASC",
            "next": f"{URL}?page=2&limit=10&sort=id&order=ASC",
            "last": f"{URL}?page=3&limit=10&sort=id&order=ASC",
        }

    @pytest.mark.asyncio
    async def test_last_partial_page(self, client: AsyncClient, error_codes: list[dict]):
        body = (await client.get(URL, params={"limit": 10, "page": 3})).json()

        assert _codes(body) == [f"ERR_{i:03d}" for i in range(21, 26)]
        assert body["meta"]["hasNextPage"] is False
        assert body["meta"]["hasPreviousPage"] is True
        assert "next" not in body["links"]
        assert body["links"]["prev"] == f"{URL}?page=2&limit=10&sort=id&order=ASC"

    @pytest.mark.asyncio
    async def test_last_page_when_total_divides_evenly(
        self, client: AsyncClient, error_codes: list[dict]
    ):
        """A full final page is still the last one."""
        body = (await client.get(URL, params={"limit": 5, "page": 5})).json()

        assert _codes(body) == [f"ERR_{i:03d}" for i in range(21, 26)]
        assert body["meta"]["totalItems"] == 25
        assert body["meta"]["totalPages"] == 5
        assert body["meta"]["hasNextPage"] is False
        assert "next" not in body["links"]
        assert body["links"]["last"] == f"{URL}?page=5&limit=5&sort=id&order=ASC"

    @pytest.mark.asyncio
    async def test_page_past_the_end(self, client: AsyncClient, error_codes: list[dict]):
        """An out-of-range page is empty but still reports totals and points back."""
        body = (await client.get(URL, params={"limit": 10, "page": 5})).json()

        assert body["data"] == []
        assert body["meta"]["totalItems"] == 25
        assert body["meta"]["totalPages"] == 3
        assert body["meta"]["currentPage"] == 5
        assert body["meta"]["hasNextPage"] is False
        assert body["meta"]["hasPreviousPage"] is True
        assert body["links"]["prev"] == f"{URL}?page=3&limit=10&sort=id&order=ASC"
        assert body["links"]["last"] == f"{URL}?page=3&limit=10&sort=id&order=ASC"

    @pytest.mark.asyncio
    async def test_default_mode_is_offset(self, client: AsyncClient, error_codes: list[dict]):
        """Without page or cursor the error list uses offset mode with default limit."""
        body = (await client.get(URL)).json()

        assert len(body["data"]) == 20
        assert body["meta"]["currentPage"] == 1
        assert body["meta"]["totalPages"] == 2

    @pytest.mark.asyncio
    async def test_empty_table(self, client: AsyncClient):
        body = (await client.get(URL)).json()

        assert body["data"] == []
        assert body["meta"]["totalItems"] == 0
        assert body["meta"]["totalPages"] == 0
        assert body["meta"]["hasPreviousPage"] is False
        assert body["links"] == {"first": f"{URL}?page=1&limit=20&sort=id&order=ASC"}

    @pytest.mark.asyncio
    async def test_sort_newest_first(self, client: AsyncClient, error_codes: list[dict]):
        body = (
            await client.get(URL, params={"sort": "createdAt", "order": "desc", "limit": 3})
        ).json()

        assert _codes(body) == ["ERR_025", "ERR_024", "ERR_023"]
        assert body["links"]["next"] == f"{URL}?page=2&limit=3&sort=createdAt&order=DESC"

    @pytest.mark.asyncio
    async def test_start_id_switches_to_keyset(self, client: AsyncClient, error_codes: list[dict]):
        """A legacy startId makes even the offset-default list use cursors."""
        body = (await client.get(URL, params={"startId": 20, "limit": 10})).json()

        assert [item["id"] for item in body["data"]] == [21, 22, 23, 24, 25]
        assert "totalItems" not in body["meta"]
        assert body["meta"]["hasNextPage"] is False
        assert body["meta"]["hasPreviousPage"] is True


# ──────────────────────────────────────────────────────────────
# Filters and search
# ──────────────────────────────────────────────────────────────


class TestErrorFilters:
    """Filter operators against the error list."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("params", "expected_total"),
        [
            ({"status": "published"}, 13),
            ({"status": "eq:draft"}, 12),
            ({"id": "between:5,9"}, 5),
            ({"id": "in:3,4"}, 2),
            ({"id": "lt:4"}, 3),
            ({"context": "null:"}, 1),
            ({"context": "null:false"}, 24),
            ({"createdAt": "gt:2025-01-01T12:20:00"}, 5),
            ({"status": "published", "id": "gt:20"}, 3),
            ({"code": "like:err_02"}, 6),
            ({"search": "ERR_01"}, 10),
            ({"search": "service 3"}, 5),
        ],
    )
    async def test_filter_totals(
        self,
        client: AsyncClient,
        error_codes: list[dict],
        params: dict,
        expected_total: int,
    ):
        response = await client.get(URL, params=params)

        assert response.status_code == 200
        assert response.json()["meta"]["totalItems"] == expected_total

    @pytest.mark.asyncio
    async def test_null_filter_returns_row_without_context(
        self, client: AsyncClient, error_codes: list[dict]
    ):
        body = (await client.get(URL, params={"context": "null:"})).json()

        assert _codes(body) == ["ERR_007"]
        assert "context" not in body["data"][0]

    @pytest.mark.asyncio
    async def test_filters_carried_into_links(self, client: AsyncClient, error_codes: list[dict]):
        body = (await client.get(URL, params={"status": "published", "limit": 5})).json()

        assert body["links"]["next"] == (
            f"{URL}?page=2&limit=5&sort=id&order=ASC&status=published"
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("params", "message"),
        [
            ({"id": "gt:abc"}, "Invalid filter for field 'id': "),
            (
                {"id": "between:1"},
                "Invalid filter for field 'id': between expects exactly two comma-separated values",
            ),
            ({"createdAt": "gt:yesterday"}, "Invalid filter for field 'createdAt': "),
            ({"context": "null:maybe"}, "Invalid filter for field 'context': null expects"),
        ],
    )
    async def test_malformed_filters(
        self, client: AsyncClient, error_codes: list[dict], params: dict, message: str
    ):
        response = await client.get(URL, params=params)

        assert response.status_code == 400
        assert response.json()["message"].startswith(message)


# ──────────────────────────────────────────────────────────────
# Includes and single resources
# ──────────────────────────────────────────────────────────────


class TestErrorIncludes:
    """Relation includes on list and detail endpoints."""

    @pytest.mark.asyncio
    async def test_relations_absent_by_default(self, client: AsyncClient, error_codes: list[dict]):
        body = (await client.get(URL, params={"limit": 1})).json()

        item = body["data"][0]
        assert "categories" not in item
        assert "translations" not in item
        assert set(item) == {"id", "code", "status", "context", "createdAt", "updatedAt"}

    @pytest.mark.asyncio
    async def test_include_relations(self, client: AsyncClient, error_codes: list[dict]):
        body = (
            await client.get(
                URL,
                params={"id": "eq:10", "include": "categories,translations"},
            )
        ).json()

        item = body["data"][0]
        assert sorted(c["name"] for c in item["categories"]) == ["Authentication", "Billing"]
        assert sorted(t["language"] for t in item["translations"]) == ["en", "fr"]

    @pytest.mark.asyncio
    async def test_include_in_links(self, client: AsyncClient, error_codes: list[dict]):
        body = (await client.get(URL, params={"include": "translations", "limit": 10})).json()

        assert "include=translations" in body["links"]["next"]

    @pytest.mark.asyncio
    async def test_get_by_id(self, client: AsyncClient, error_codes: list[dict]):
        response = await client.get(f"{URL}/3")

        assert response.status_code == 200
        body = response.json()
        assert body["code"] == "ERR_003"
        assert body["status"] == "published"
        assert "translations" not in body

    @pytest.mark.asyncio
    async def test_get_by_id_with_include(self, client: AsyncClient, error_codes: list[dict]):
        response = await client.get(f"{URL}/5", params={"include": "translations"})

        assert response.status_code == 200
        messages = {t["language"]: t["message"] for t in response.json()["translations"]}
        assert messages == {"en": "Error number 5", "fr": "Erreur numéro 5"}

    @pytest.mark.asyncio
    async def test_get_missing(self, client: AsyncClient, error_codes: list[dict]):
        response = await client.get(f"{URL}/999")

        assert response.status_code == 404
        body = response.json()
        assert body["statusCode"] == 404
        assert body["error"] == "Not Found"
        assert body["message"] == "ErrorCode not found with id=999"

    @pytest.mark.asyncio
    async def test_get_with_invalid_include(self, client: AsyncClient, error_codes: list[dict]):
        response = await client.get(f"{URL}/1", params={"include": "owner"})

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Invalid relations included: owner. Allowed relations are: categories, translations"
        )

    @pytest.mark.asyncio
    async def test_get_with_non_numeric_id(self, client: AsyncClient):
        response = await client.get(f"{URL}/abc")

        assert response.status_code == 400
        body = response.json()
        assert body["statusCode"] == 400
        assert body["message"].startswith("Invalid error_id parameter:")

    @pytest.mark.asyncio
    async def test_category_include_error_codes(
        self, client: AsyncClient, error_codes: list[dict]
    ):
        """The many-to-many relation is loaded from the category side too."""
        body = (
            await client.get(
                "/api/v1/categories",
                params={"name": "Billing", "include": "errorCodes"},
            )
        ).json()

        (billing,) = body["data"]
        assert sorted(e["code"] for e in billing["errorCodes"]) == ["ERR_010", "ERR_020"]
