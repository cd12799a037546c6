"""Cursor encoding and decoding for keyset pagination.

Cursors are opaque strings that encode a position in an ordered result set.
A cursor carries the id and sort value of the row it was built from, plus
the ordering it was issued for, so a token minted under ``sort=name`` cannot
be replayed against ``sort=createdAt``.

The cursor format is:
1. Canonical JSON object (sorted keys, compact separators)
2. Base64 URL-safe encoded for use in URLs

Example cursor payload:
    {"id":42,"order":"DESC","sort":"createdAt","value":"2025-01-15T10:30:00"}

Encoded: eyJpZCI6NDIsIm9yZGVyIjoiREVTQyIsInNvcnQiOiJjcmVhdGVkQXQiLCJ2YWx1ZSI6IjIwMjUtMDEtMTVUMTA6MzA6MDAifQ==
"""

from __future__ import annotations

import base64
import binascii
import json
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError

from error_registry.core.pagination.exceptions import InvalidCursorError

_URLSAFE_BASE64 = re.compile(r"^[A-Za-z0-9_-]+={0,2}$")


class CursorData(BaseModel):
    """Position embedded in a keyset cursor.

    Attributes:
        id: Identifier of the row the cursor was built from
        value: Value of the sort field on that row
        sort: API name of the sort field the cursor was issued for
        order: Sort order the cursor was issued for
    """

    id: Any = Field(description="Tie-break identifier of the boundary row")
    value: Any = Field(default=None, description="Sort field value of the boundary row")
    sort: str = Field(default="id", description="Sort field the cursor belongs to")
    order: Literal["ASC", "DESC"] = Field(default="ASC", description="Sort order")

    model_config = {"frozen": True}


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, UUID | Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not cursor serializable")


class CursorCodec:
    """Encode and decode pagination cursors.

    Usage:
        # Encoding
        token = CursorCodec.encode({"id": 42, "value": "Billing"})

        # Decoding
        payload = CursorCodec.decode(token)
        print(payload["value"])  # "Billing"
    """

    @staticmethod
    def encode(value: Any) -> str:
        """Encode a JSON-serializable value to an opaque string.

        ``None`` encodes to the empty string so that "no cursor" can be
        passed around without special casing.

        Args:
            value: Value to encode (dicts, lists, scalars, datetimes, UUIDs)

        Returns:
            URL-safe base64 encoded string
        """
        if value is None:
            return ""
        if isinstance(value, BaseModel):
            value = value.model_dump()
        json_str = json.dumps(
            value,
            separators=(",", ":"),
            sort_keys=True,
            default=_json_default,
        )
        return base64.urlsafe_b64encode(json_str.encode("utf-8")).decode("ascii")

    @staticmethod
    def decode(token: str) -> Any:
        """Decode a cursor string back to its value.

        Args:
            token: URL-safe base64 encoded cursor string

        Returns:
            The decoded JSON value

        Raises:
            InvalidCursorError: If the token is empty, not base64, not UTF-8 or not JSON
        """
        if not token:
            raise InvalidCursorError("empty cursor")
        if not _URLSAFE_BASE64.match(token):
            raise InvalidCursorError("not valid base64")

        try:
            raw = base64.urlsafe_b64decode(token.encode("ascii"))
        except (binascii.Error, ValueError) as e:
            raise InvalidCursorError("not valid base64") from e

        try:
            json_str = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidCursorError("not valid UTF-8") from e

        try:
            return json.loads(json_str)
        except json.JSONDecodeError as e:
            raise InvalidCursorError("not valid JSON") from e

    @staticmethod
    def decode_cursor_data(token: str) -> CursorData:
        """Decode a token and validate it as a keyset position.

        Raises:
            InvalidCursorError: If the token is not a valid position payload
        """
        payload = CursorCodec.decode(token)
        if not isinstance(payload, dict) or payload.get("id") is None:
            raise InvalidCursorError("missing position")
        try:
            return CursorData.model_validate(payload)
        except ValidationError as e:
            raise InvalidCursorError("malformed position") from e

    @staticmethod
    def create_cursor(
        row: Any,
        *,
        id_attr: str,
        sort_field: str,
        sort_attr: str,
        order: Literal["ASC", "DESC"],
    ) -> str:
        """Create a cursor from a database row.

        Args:
            row: SQLAlchemy model instance
            id_attr: Model attribute holding the tie-break identifier
            sort_field: API name of the active sort field
            sort_attr: Model attribute backing the sort field
            order: Active sort order

        Returns:
            Encoded cursor string

        Example:
            cursor = CursorCodec.create_cursor(
                category,
                id_attr="id",
                sort_field="createdAt",
                sort_attr="created_at",
                order="DESC",
            )
        """
        return CursorCodec.encode(
            CursorData(
                id=getattr(row, id_attr),
                value=getattr(row, sort_attr, None),
                sort=sort_field,
                order=order,
            )
        )


__all__ = ["CursorCodec", "CursorData"]
