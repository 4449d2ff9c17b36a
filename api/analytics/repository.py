"""
Analytics persistence (raw SQL).

One append-only table, one row per inbound request.
"""

from __future__ import annotations

from datetime import datetime, timezone

from core import db


async def ensure_schema() -> None:
    await db.execute(
        """
        CREATE TABLE IF NOT EXISTS analytics (
            id BIGSERIAL PRIMARY KEY,
            endpoint TEXT NOT NULL,
            timestamp TIMESTAMPTZ NOT NULL
        )
        """
    )


async def insert_request(*, endpoint: str, timestamp: datetime) -> None:
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)

    await db.execute(
        """
        INSERT INTO analytics (endpoint, timestamp)
        VALUES ($1, $2)
        """,
        endpoint,
        timestamp,
    )
