"""Navigation link construction."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlencode


def build_link(
    base_url: str | None,
    params: Mapping[str, Any],
    *,
    required: Iterable[str] = (),
) -> str | None:
    """Append ``params`` to ``base_url`` as a query string.

    Parameters whose value is ``None`` are left out. Returns ``None`` when
    there is no base URL or when any ``required`` parameter is missing or
    empty, so callers never emit a link that cannot be followed.

    Example:
        >>> build_link("/api/v1/errors", {"page": 2, "limit": 20, "search": None})
        '/api/v1/errors?page=2&limit=20'
        >>> build_link("/api/v1/errors", {"cursor": ""}, required=["cursor"]) is None
        True
    """
    if not base_url:
        return None

    for key in required:
        value = params.get(key)
        if value is None or value == "":
            return None

    query = {key: value for key, value in params.items() if value is not None}
    if not query:
        return base_url
    return f"{base_url}?{urlencode(query)}"


__all__ = ["build_link"]
