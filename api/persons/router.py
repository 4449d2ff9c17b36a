"""
Person lookup API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from core.swapi import SwapiClient

from . import schemas, service
from .dependencies import get_swapi_client

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": schemas.ErrorResponse},
    404: {"model": schemas.ErrorResponse},
    500: {"model": schemas.ErrorResponse},
}


@router.get("/persons/", response_model=list[schemas.Person], include_in_schema=False)
@router.get(
    "/persons",
    response_model=list[schemas.Person],
    responses={code: ERROR_RESPONSES[code] for code in (400, 500)},
)
async def search_persons(
    q: str | None = Query(default=None),
    client: SwapiClient = Depends(get_swapi_client),
) -> list[schemas.Person]:
    """
    Search characters by name and enrich every match with its films.
    """
    return await service.search_persons(client, q)


@router.get(
    "/persons/{person_id}",
    response_model=schemas.Person,
    responses={code: ERROR_RESPONSES[code] for code in (404, 500)},
)
async def get_person(
    person_id: str,
    client: SwapiClient = Depends(get_swapi_client),
) -> schemas.Person:
    return await service.get_person(client, person_id)
