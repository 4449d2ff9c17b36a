"""
Person lookup service (orchestration).

This is where we:
- fetch people from SWAPI (search or by id)
- enrich each person with its films, fetched concurrently
- map upstream failures to HTTP errors
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status
from pydantic import ValidationError

from core.concurrency import gather_all_or_nothing
from core.swapi import SwapiClient, SwapiError, SwapiErrorKind

from . import schemas

SEARCH_QUERY_REQUIRED = "Search query is required"
PERSON_NOT_FOUND = "Person not found"
INTERNAL_SERVER_ERROR = "Internal Server Error"

logger = logging.getLogger(__name__)


def person_id_from_url(url: str) -> str:
    """
    Second-to-last path segment: "https://swapi.dev/api/people/1/" -> "1".

    SWAPI URLs end with a slash, so the last segment is empty.
    """
    return url.split("/")[-2:][0]


def _parse(model: type[schemas.SwapiPerson] | type[schemas.SwapiFilm], data: Any, *, url: str):
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise SwapiError(
            SwapiErrorKind.DECODE,
            f"SWAPI returned an unexpected {model.__name__} shape.",
            url=url,
        ) from exc


async def _fetch_movie(client: SwapiClient, film_url: str) -> schemas.Movie:
    film = _parse(schemas.SwapiFilm, await client.get_film(film_url), url=film_url)
    return schemas.Movie(
        title=film.title,
        episode=film.episode_id,
        director=film.director,
        release_date=film.release_date,
    )


async def transform_person(client: SwapiClient, record: dict[str, Any]) -> schemas.Person:
    """
    Build the enriched person for one raw SWAPI record.

    Films are fetched concurrently; `movies` keeps the order of
    `record["films"]`. Any failed film fetch fails the whole transform.
    """
    url = str(record.get("url") or "") if isinstance(record, dict) else ""
    person = _parse(schemas.SwapiPerson, record, url=url)
    movies = await gather_all_or_nothing(_fetch_movie(client, film_url) for film_url in person.films)
    return schemas.Person(
        id=person_id_from_url(person.url),
        name=person.name,
        birth_year=person.birth_year,
        gender=person.gender,
        height=person.height,
        weight=person.mass,
        movies=movies,
    )


async def search_persons(client: SwapiClient, query: str | None) -> list[schemas.Person]:
    if not query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=SEARCH_QUERY_REQUIRED)

    try:
        results = await client.search_people(query)
        # One bad film anywhere fails the whole search.
        return await gather_all_or_nothing(transform_person(client, record) for record in results)
    except SwapiError as exc:
        logger.exception(
            "person_search_failed query=%r kind=%s url=%s status=%s",
            query,
            exc.kind.value,
            exc.url,
            exc.status,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_SERVER_ERROR,
        ) from exc


async def get_person(client: SwapiClient, person_id: str) -> schemas.Person:
    try:
        record = await client.get_person(person_id)
    except SwapiError as exc:
        if exc.is_not_found:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PERSON_NOT_FOUND) from exc
        logger.exception(
            "person_lookup_failed person_id=%s kind=%s status=%s",
            person_id,
            exc.kind.value,
            exc.status,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_SERVER_ERROR,
        ) from exc

    try:
        return await transform_person(client, record)
    except SwapiError as exc:
        logger.exception(
            "person_enrich_failed person_id=%s kind=%s url=%s status=%s",
            person_id,
            exc.kind.value,
            exc.url,
            exc.status,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_SERVER_ERROR,
        ) from exc
