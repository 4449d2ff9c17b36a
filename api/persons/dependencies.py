"""
Dependencies for person routes.
"""

from __future__ import annotations

from fastapi import Request

from core.swapi import SwapiClient


def get_swapi_client(request: Request) -> SwapiClient:
    client = getattr(request.app.state, "swapi_client", None)
    if client is None:
        raise RuntimeError("SWAPI client is not initialized. It is created on startup.")
    return client
