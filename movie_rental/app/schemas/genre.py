from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

GENRE_NAME_PATTERN = re.compile(r"^[a-zA-Z\s-]+$")


class GenreBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Genre name is required")
        if not GENRE_NAME_PATTERN.match(value):
            raise ValueError("Genre name can only contain letters, spaces, and hyphens")
        return value


class GenreCreate(GenreBase):
    pass


class GenreUpdate(GenreBase):
    pass


class GenreRead(BaseModel):
    id: int
    name: str
    movie_count: int = 0

    model_config = ConfigDict(from_attributes=True)
