"""
Environment-backed settings.

Every value has a default so the gateway starts with no configuration;
only the analytics table needs DATABASE_URL.
"""

from __future__ import annotations

import os

DEFAULT_SWAPI_BASE_URL = "https://swapi.dev/api"
DEFAULT_SWAPI_TIMEOUT_S = 5.0
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def swapi_base_url() -> str:
    return os.environ.get("SWAPI_BASE_URL", DEFAULT_SWAPI_BASE_URL).strip() or DEFAULT_SWAPI_BASE_URL


def swapi_timeout_s() -> float:
    return _env_float("SWAPI_TIMEOUT_S", DEFAULT_SWAPI_TIMEOUT_S)


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return url


def host() -> str:
    return os.environ.get("HOST", DEFAULT_HOST).strip() or DEFAULT_HOST


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)
