"""
Shared fixtures: an in-process fake of SWAPI and an in-memory analytics log.
"""

from __future__ import annotations

import asyncio
import copy
from collections.abc import Generator
from datetime import datetime

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.swapi import SwapiClient
from main import create_app

BASE_URL = "https://swapi.dev/api"

FILMS = {
    "https://swapi.dev/api/films/1/": {
        "title": "A New Hope",
        "episode_id": 4,
        "director": "George Lucas",
        "release_date": "1977-05-25",
        "producer": "Gary Kurtz, Rick McCallum",
    },
    "https://swapi.dev/api/films/2/": {
        "title": "The Empire Strikes Back",
        "episode_id": 5,
        "director": "Irvin Kershner",
        "release_date": "1980-05-17",
    },
    "https://swapi.dev/api/films/3/": {
        "title": "Return of the Jedi",
        "episode_id": 6,
        "director": "Richard Marquand",
        "release_date": "1983-05-25",
    },
}

PEOPLE = {
    "1": {
        "name": "Luke Skywalker",
        "height": "172",
        "mass": "77",
        "hair_color": "blond",
        "birth_year": "19BBY",
        "gender": "male",
        "films": [
            "https://swapi.dev/api/films/1/",
            "https://swapi.dev/api/films/2/",
            "https://swapi.dev/api/films/3/",
        ],
        "url": "https://swapi.dev/api/people/1/",
    },
    "4": {
        "name": "Darth Vader",
        "height": "202",
        "mass": "136",
        "birth_year": "41.9BBY",
        "gender": "male",
        "films": [
            "https://swapi.dev/api/films/2/",
            "https://swapi.dev/api/films/1/",
        ],
        "url": "https://swapi.dev/api/people/4/",
    },
    "5": {
        "name": "Leia Organa",
        "height": "150",
        "mass": "49",
        "birth_year": "19BBY",
        "gender": "female",
        "films": [],
        "url": "https://swapi.dev/api/people/5/",
    },
}


class FakeSwapi:
    """
    httpx.MockTransport handler serving PEOPLE and FILMS.

    `fail` maps a full URL (without query) to a status code, or to an
    exception instance raised as a transport error. `delays` maps a URL
    to seconds slept before answering.
    """

    def __init__(self) -> None:
        self.people = copy.deepcopy(PEOPLE)
        self.films = copy.deepcopy(FILMS)
        self.fail: dict[str, int | Exception] = {}
        self.delays: dict[str, float] = {}
        self.requests: list[httpx.Request] = []

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url).split("?", 1)[0]

        delay = self.delays.get(url)
        if delay:
            await asyncio.sleep(delay)

        failure = self.fail.get(url)
        if isinstance(failure, Exception):
            raise failure
        if isinstance(failure, int):
            return httpx.Response(failure, json={"detail": "failure"})

        path = request.url.path
        if path == "/api/people/":
            term = request.url.params.get("search", "").lower()
            results = [p for p in self.people.values() if term in p["name"].lower()]
            return httpx.Response(200, json={"count": len(results), "next": None, "results": results})

        if path.startswith("/api/people/"):
            person = self.people.get(path.rstrip("/").rsplit("/", 1)[-1])
            if person is None:
                return httpx.Response(404, json={"detail": "Not found"})
            return httpx.Response(200, json=person)

        film = self.films.get(url)
        if film is None:
            return httpx.Response(404, json={"detail": "Not found"})
        return httpx.Response(200, json=film)


class InMemoryAnalyticsLog:
    def __init__(self) -> None:
        self.entries: list[tuple[str, datetime]] = []

    async def append(self, endpoint: str, timestamp: datetime) -> None:
        self.entries.append((endpoint, timestamp))

    @property
    def endpoints(self) -> list[str]:
        return [endpoint for endpoint, _ in self.entries]


def make_swapi_client(fake: FakeSwapi) -> SwapiClient:
    return SwapiClient(httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(fake.handle)))


@pytest.fixture
def fake_swapi() -> FakeSwapi:
    return FakeSwapi()


@pytest.fixture
def analytics_log() -> InMemoryAnalyticsLog:
    return InMemoryAnalyticsLog()


@pytest.fixture
def app(fake_swapi: FakeSwapi, analytics_log: InMemoryAnalyticsLog) -> FastAPI:
    return create_app(swapi_client=make_swapi_client(fake_swapi), analytics_log=analytics_log)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client
