from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PagedResponse

MIN_RELEASE_YEAR = 1888
MAX_RELEASE_YEAR_AHEAD = 5
MAX_GENRES_PER_MOVIE = 5
MAX_RENTAL_PRICE = Decimal("999.99")
INVALID_TITLE_CHARACTERS = set("<>{}[]|\\^`")


def contains_html(value: Optional[str]) -> bool:
    return bool(value) and "<" in value and ">" in value


class MovieSummary(BaseModel):
    """Row shown in catalog listings."""

    id: int
    title: str
    release_year: int
    duration_minutes: int
    rental_price: Decimal
    genres: List[str] = Field(default_factory=list, validation_alias="genre_names")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class MovieSearchFilters(BaseModel):
    """Normalized search parameters echoed back to the client."""

    search_term: Optional[str] = None
    genre_id: Optional[int] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None
    price_from: Optional[Decimal] = None
    price_to: Optional[Decimal] = None
    sort_by: str
    sort_order: str
    page: int
    page_size: int
    has_active_filters: bool


class MovieSearchResponse(PagedResponse[MovieSummary]):
    filters: MovieSearchFilters


class SelectOption(BaseModel):
    value: str
    text: str


class GenreOption(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class MovieSearchOptions(BaseModel):
    sort_options: List[SelectOption]
    sort_order_options: List[SelectOption]
    page_sizes: List[int]
    genres: List[GenreOption]


class CastMember(BaseModel):
    person_id: int
    actor_name: str
    character_name: str
    cast_order: int


class CrewMember(BaseModel):
    person_id: int
    person_name: str
    role: str


class MovieDetail(BaseModel):
    id: int
    title: str
    original_title: Optional[str] = None
    synopsis: Optional[str] = None
    release_year: int
    duration_minutes: int
    language: Optional[str] = None
    rental_price: Decimal
    created_at: datetime
    genres: List[str]
    cast: List[CastMember]
    crew: List[CrewMember]


class MovieBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    original_title: Optional[str] = Field(default=None, max_length=200)
    synopsis: Optional[str] = Field(default=None, max_length=2000)
    release_year: int
    duration_minutes: int = Field(..., ge=1, le=600)
    language: Optional[str] = Field(default=None, max_length=50)
    rental_price: Decimal = Field(..., gt=0, le=MAX_RENTAL_PRICE, decimal_places=2)
    genre_ids: List[int] = Field(..., min_length=1, max_length=MAX_GENRES_PER_MOVIE)

    @field_validator("title")
    @classmethod
    def _validate_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Title is required")
        if any(char in INVALID_TITLE_CHARACTERS for char in value):
            raise ValueError("Title contains invalid characters")
        if contains_html(value):
            raise ValueError("HTML tags are not allowed")
        return value

    @field_validator("synopsis")
    @classmethod
    def _validate_synopsis(cls, value: Optional[str]) -> Optional[str]:
        if contains_html(value):
            raise ValueError("HTML tags are not allowed")
        return value

    @field_validator("release_year")
    @classmethod
    def _validate_release_year(cls, value: int) -> int:
        latest = date.today().year + MAX_RELEASE_YEAR_AHEAD
        if not MIN_RELEASE_YEAR <= value <= latest:
            raise ValueError(f"Release year must be between {MIN_RELEASE_YEAR} and {latest}")
        return value

    @field_validator("genre_ids")
    @classmethod
    def _dedupe_genres(cls, value: List[int]) -> List[int]:
        return list(dict.fromkeys(value))


class MovieCreate(MovieBase):
    pass


class MovieUpdate(MovieBase):
    pass


class MovieRead(BaseModel):
    id: int
    title: str
    original_title: Optional[str] = None
    synopsis: Optional[str] = None
    release_year: int
    duration_minutes: int
    language: Optional[str] = None
    rental_price: Decimal
    created_at: datetime
    genres: List[GenreOption]

    model_config = ConfigDict(from_attributes=True)
