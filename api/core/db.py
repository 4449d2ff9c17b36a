"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool used by the analytics log. The app
opens it on startup when DATABASE_URL is set and closes it on shutdown
(see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's `sslmode` query parameter.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


async def init_pool(dsn: str) -> None:
    global _pool
    if _pool is not None:
        return None
    dsn = (dsn or "").strip()
    if not dsn:
        raise RuntimeError("Database DSN is empty.")
    _pool = await asyncpg.create_pool(
        dsn=_sanitize_database_url(dsn),
        min_size=1,
        max_size=5,
        command_timeout=30,
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/DDL). No result returned.
    """
    await pool().execute(sql, *args)
