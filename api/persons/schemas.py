"""
Pydantic schemas for person lookup: raw SWAPI shapes in, enriched shapes out.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, StrictInt


class SwapiPerson(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str
    name: str
    birth_year: str
    gender: str
    height: str
    mass: str
    films: list[str]


class SwapiFilm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    episode_id: StrictInt
    director: str
    release_date: str


class Movie(BaseModel):
    title: str
    episode: int
    director: str
    release_date: str


class Person(BaseModel):
    id: str
    name: str
    birth_year: str
    gender: str
    height: str
    weight: str
    movies: list[Movie]


class ErrorResponse(BaseModel):
    error: str
