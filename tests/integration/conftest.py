"""Seed data for API-level pagination tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from error_registry.features.models import ErrorCategory, ErrorCode, ErrorTranslation

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

# Three groups so sorting by description produces long runs of equal values
DESCRIPTION_GROUPS = ("Authentication", "Billing", "Networking")


@pytest.fixture
async def categories(db_session: AsyncSession) -> list[dict[str, object]]:
    """25 categories with strictly decreasing createdAt (id 1 is the newest).

    Returns:
        Plain snapshots (id, name, description, created_at) in insertion order.
    """
    rows = [
        ErrorCategory(
            name=f"Category {i:02d}",
            description=DESCRIPTION_GROUPS[i % 3],
            created_at=BASE_TIME - timedelta(minutes=i),
            updated_at=BASE_TIME - timedelta(minutes=i),
        )
        for i in range(1, 26)
    ]
    db_session.add_all(rows)
    await db_session.commit()

    snapshots = [
        {
            "id": row.id,
            "name": row.name,
            "description": row.description,
            "created_at": row.created_at,
        }
        for row in rows
    ]
    db_session.expunge_all()
    return snapshots


@pytest.fixture
async def error_codes(db_session: AsyncSession) -> list[dict[str, object]]:
    """25 error codes, odd ones published, with categories and translations.

    ERR_001..ERR_025 are created one minute apart (ERR_025 is the newest).
    Every code belongs to the "Authentication" category and has an English
    translation; every fifth code also has a French one.
    """
    auth = ErrorCategory(name="Authentication", description="Login and tokens")
    billing = ErrorCategory(name="Billing", description="Payments")

    rows = []
    for i in range(1, 26):
        code = ErrorCode(
            code=f"ERR_{i:03d}",
            status="published" if i % 2 else "draft",
            context=f"Raised by service {i % 4}" if i != 7 else None,
            created_at=BASE_TIME + timedelta(minutes=i),
            updated_at=BASE_TIME + timedelta(minutes=i),
            categories=[auth, billing] if i % 10 == 0 else [auth],
            translations=[
                ErrorTranslation(language="en", message=f"Error number {i}"),
                *(
                    [ErrorTranslation(language="fr", message=f"Erreur numéro {i}")]
                    if i % 5 == 0
                    else []
                ),
            ],
        )
        rows.append(code)

    db_session.add_all(rows)
    await db_session.commit()

    snapshots = [
        {"id": row.id, "code": row.code, "status": row.status, "created_at": row.created_at}
        for row in rows
    ]
    db_session.expunge_all()
    return snapshots
