from __future__ import annotations

import re
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

FULL_NAME_PATTERN = re.compile(r"^[a-zA-ZáéíóúÁÉÍÓÚñÑüÜ\s.'-]+$")
EARLIEST_BIRTH_DATE = date(1850, 1, 1)


class PersonBase(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=150)
    birth_date: Optional[date] = None
    bio: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("full_name")
    @classmethod
    def _validate_full_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Full name is required")
        if not FULL_NAME_PATTERN.match(value):
            raise ValueError(
                "Name can only contain letters, spaces, periods, hyphens, and apostrophes"
            )
        return value

    @field_validator("birth_date")
    @classmethod
    def _validate_birth_date(cls, value: Optional[date]) -> Optional[date]:
        if value is None:
            return value
        if value > date.today():
            raise ValueError("Birth date cannot be in the future")
        if value <= EARLIEST_BIRTH_DATE:
            raise ValueError("Birth date seems invalid")
        return value


class PersonCreate(PersonBase):
    pass


class PersonUpdate(PersonBase):
    pass


class PersonRead(BaseModel):
    id: int
    full_name: str
    birth_date: Optional[date] = None
    bio: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PersonSummary(BaseModel):
    id: int
    full_name: str
    birth_date: Optional[date] = None
    movies_as_actor: int
    movies_as_crew: int


class ActingRole(BaseModel):
    movie_id: int
    movie_title: str
    release_year: int
    character_name: str
    cast_order: int


class CrewRole(BaseModel):
    movie_id: int
    movie_title: str
    release_year: int
    role: str


class PersonDetail(BaseModel):
    id: int
    full_name: str
    birth_date: Optional[date] = None
    bio: Optional[str] = None
    age: Optional[int] = None
    movies_as_actor: List[ActingRole]
    movies_as_crew: List[CrewRole]
