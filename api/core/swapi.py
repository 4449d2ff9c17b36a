"""
SWAPI HTTP client helpers.

Used endpoints:
- GET /people/?search=<q>  -> {"count": n, "results": [person, ...]}
- GET /people/<id>/        -> person
- GET <film url>           -> film (absolute URL taken from person["films"])
"""

from __future__ import annotations

import enum
from typing import Any

import httpx


class SwapiErrorKind(str, enum.Enum):
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    DECODE = "decode"


# Upstream failures are explicit and separable from other runtime errors.
class SwapiError(RuntimeError):
    def __init__(self, kind: SwapiErrorKind, message: str, *, url: str, status: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.url = url
        self.status = status

    @property
    def is_not_found(self) -> bool:
        return self.kind is SwapiErrorKind.HTTP_STATUS and self.status == 404


def build_http_client(*, base_url: str, timeout_s: float) -> httpx.AsyncClient:
    base_url = (base_url or "").strip().rstrip("/")
    if not base_url:
        raise ValueError("SWAPI base URL is empty.")
    return httpx.AsyncClient(base_url=base_url, timeout=timeout_s)


class SwapiClient:
    """
    Thin wrapper over one shared `httpx.AsyncClient`.

    The caller owns the underlying client's lifecycle; `aclose()` is a
    convenience for the app lifespan.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch_json(self, url: str, *, params: dict[str, str] | None = None) -> Any:
        """
        GET `url` (relative to the base URL, or absolute) and return its JSON body.
        """
        try:
            resp = await self._http.get(url, params=params)
        except httpx.RequestError as exc:
            raise SwapiError(SwapiErrorKind.NETWORK, f"SWAPI request failed: {exc!r}", url=url) from exc

        if not resp.is_success:
            # Avoid dumping huge bodies; include a small snippet.
            body = resp.text[:300]
            raise SwapiError(
                SwapiErrorKind.HTTP_STATUS,
                f"SWAPI request failed: {resp.status_code} {body}",
                url=url,
                status=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise SwapiError(SwapiErrorKind.DECODE, "SWAPI returned a non-JSON body.", url=url) from exc

    async def search_people(self, query: str) -> list[dict[str, Any]]:
        url = "/people/"
        data = await self.fetch_json(url, params={"search": query})
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise SwapiError(SwapiErrorKind.DECODE, "SWAPI search returned no results list.", url=url)
        return results

    async def get_person(self, person_id: str) -> dict[str, Any]:
        url = f"/people/{person_id}/"
        data = await self.fetch_json(url)
        if not isinstance(data, dict):
            raise SwapiError(SwapiErrorKind.DECODE, "SWAPI person is not an object.", url=url)
        return data

    async def get_film(self, url: str) -> dict[str, Any]:
        data = await self.fetch_json(url)
        if not isinstance(data, dict):
            raise SwapiError(SwapiErrorKind.DECODE, "SWAPI film is not an object.", url=url)
        return data
