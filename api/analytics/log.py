"""
Request analytics log implementations.

The app holds one `AnalyticsLog` on `app.state.analytics_log`; the request
middleware only ever calls `append`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from . import repository


class AnalyticsLog(Protocol):
    async def append(self, endpoint: str, timestamp: datetime) -> None: ...


class PostgresAnalyticsLog:
    """
    Writes to the `analytics` table through the shared asyncpg pool.
    """

    async def ensure_schema(self) -> None:
        await repository.ensure_schema()

    async def append(self, endpoint: str, timestamp: datetime) -> None:
        await repository.insert_request(endpoint=endpoint, timestamp=timestamp)


class NullAnalyticsLog:
    async def append(self, endpoint: str, timestamp: datetime) -> None:
        return None
