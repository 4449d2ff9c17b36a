"""
Concurrent fan-out with all-or-nothing semantics.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from typing import TypeVar

T = TypeVar("T")


async def gather_all_or_nothing(aws: Iterable[Awaitable[T]]) -> list[T]:
    """
    Run `aws` concurrently and return their results in input order.

    The first failure cancels whatever is still running and is re-raised
    once the cancelled tasks have settled. No partial result is returned.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
