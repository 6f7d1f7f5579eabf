from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

PREDEFINED_CREW_ROLES = [
    "Director",
    "Writer",
    "Producer",
    "Executive Producer",
    "Cinematographer",
    "Editor",
    "Composer",
    "Production Designer",
    "Costume Designer",
]


def _require_text(value: str, message: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


class CastCreate(BaseModel):
    person_id: int = Field(..., ge=1)
    character_name: str = Field(..., min_length=1, max_length=150)
    cast_order: Optional[int] = Field(default=None, ge=1, le=100)

    @field_validator("character_name")
    @classmethod
    def _validate_character(cls, value: str) -> str:
        return _require_text(value, "Character name is required")


class CastUpdate(BaseModel):
    character_name: str = Field(..., min_length=1, max_length=150)
    cast_order: int = Field(..., ge=1, le=100)

    @field_validator("character_name")
    @classmethod
    def _validate_character(cls, value: str) -> str:
        return _require_text(value, "Character name is required")


class CrewCreate(BaseModel):
    person_id: int = Field(..., ge=1)
    role: str = Field(..., min_length=1, max_length=50)

    @field_validator("role")
    @classmethod
    def _validate_role(cls, value: str) -> str:
        return _require_text(value, "Role is required")


class CastItem(BaseModel):
    person_id: int
    person_name: str
    character_name: str
    cast_order: int


class CrewItem(BaseModel):
    person_id: int
    person_name: str
    role: str


class MovieCredits(BaseModel):
    movie_id: int
    movie_title: str
    release_year: int
    cast: List[CastItem]
    crew: List[CrewItem]


class PersonOption(BaseModel):
    id: int
    full_name: str


class AvailableCast(BaseModel):
    movie_id: int
    movie_title: str
    next_cast_order: int
    people: List[PersonOption]
