"""
Request logging middleware.

Every inbound request appends `{endpoint, timestamp}` to the analytics log.
The insert runs as a background task: the response never waits for it and
never sees its failure.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request

from .log import AnalyticsLog

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def _append(log: AnalyticsLog, endpoint: str, timestamp: datetime) -> None:
    try:
        await log.append(endpoint, timestamp)
    except Exception:
        logger.exception("analytics_append_failed endpoint=%s", endpoint)


def record_request(log: AnalyticsLog, endpoint: str, pending: set[asyncio.Task]) -> asyncio.Task:
    # `pending` holds strong references; the event loop only keeps weak ones.
    task = asyncio.create_task(_append(log, endpoint, _utc_now()))
    pending.add(task)
    task.add_done_callback(pending.discard)
    return task


async def drain(pending: set[asyncio.Task]) -> None:
    """
    Wait for in-flight inserts. Called on shutdown before the DB pool closes.
    """
    if pending:
        await asyncio.gather(*list(pending), return_exceptions=True)


def install(app: FastAPI) -> None:
    app.state.analytics_pending = set()

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        log: AnalyticsLog | None = getattr(request.app.state, "analytics_log", None)
        if log is not None:
            record_request(log, request.url.path, request.app.state.analytics_pending)
        return await call_next(request)
