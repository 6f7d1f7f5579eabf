"""Compose filtered and sorted catalog queries from search parameters."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, selectinload

from .. import models

ALLOWED_PAGE_SIZES: Tuple[int, ...] = (6, 12, 24, 48)
DEFAULT_PAGE_SIZE = 12
# Highest page whose row offset still fits a signed 64-bit SQL integer.
MAX_PAGE = (2**63 - 1) // max(ALLOWED_PAGE_SIZES)


class SortField(str, enum.Enum):
    """Columns the catalog can be ordered by."""

    TITLE = "title"
    YEAR = "year"
    PRICE = "price"
    DURATION = "duration"
    CREATED = "created"


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


SORT_FIELD_LABELS = {
    SortField.TITLE: "Title",
    SortField.YEAR: "Release Year",
    SortField.PRICE: "Rental Price",
    SortField.DURATION: "Duration",
    SortField.CREATED: "Date Added",
}
SORT_DIRECTION_LABELS = {
    SortDirection.ASC: "Ascending",
    SortDirection.DESC: "Descending",
}

_SORT_COLUMNS = {
    SortField.TITLE: models.Movie.title,
    SortField.YEAR: models.Movie.release_year,
    SortField.PRICE: models.Movie.rental_price,
    SortField.DURATION: models.Movie.duration_minutes,
    SortField.CREATED: models.Movie.created_at,
}

# Direction used when the request does not ask for the non-default one.
# Year and created fall back to descending, the rest to ascending.
_DEFAULT_DIRECTIONS = {
    SortField.TITLE: SortDirection.ASC,
    SortField.YEAR: SortDirection.DESC,
    SortField.PRICE: SortDirection.ASC,
    SortField.DURATION: SortDirection.ASC,
    SortField.CREATED: SortDirection.DESC,
}


def _parse_enum(enum_cls, raw: Any):
    if raw is None or isinstance(raw, enum_cls):
        return raw
    normalized = str(raw).strip().lower()
    try:
        return enum_cls(normalized)
    except ValueError:
        return None


def normalize_page(page: Optional[int]) -> int:
    if page is None:
        return 1
    return min(max(1, page), MAX_PAGE)


def normalize_page_size(page_size: Optional[int]) -> int:
    if page_size in ALLOWED_PAGE_SIZES:
        return page_size  # type: ignore[return-value]
    return DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class SearchCriteria:
    """Filter, sort and paging parameters for a catalog search."""

    search_term: Optional[str] = None
    genre_id: Optional[int] = None
    year_from: Optional[int] = None
    year_to: Optional[int] = None
    price_from: Optional[Decimal] = None
    price_to: Optional[Decimal] = None
    sort_by: Optional[SortField] = None
    sort_order: Optional[SortDirection] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def create(
        cls,
        *,
        search_term: Optional[str] = None,
        genre_id: Optional[int] = None,
        year_from: Optional[int] = None,
        year_to: Optional[int] = None,
        price_from: Optional[Decimal] = None,
        price_to: Optional[Decimal] = None,
        sort_by: Any = None,
        sort_order: Any = None,
        page: Optional[int] = 1,
        page_size: Optional[int] = DEFAULT_PAGE_SIZE,
    ) -> "SearchCriteria":
        """Build criteria from raw request values, normalizing paging and sort."""

        # Blank terms are dropped; others are matched as typed.
        term = search_term if search_term and search_term.strip() else None
        return cls(
            search_term=term,
            genre_id=genre_id,
            year_from=year_from,
            year_to=year_to,
            price_from=price_from,
            price_to=price_to,
            sort_by=_parse_enum(SortField, sort_by),
            sort_order=_parse_enum(SortDirection, sort_order),
            page=normalize_page(page),
            page_size=normalize_page_size(page_size),
        )

    @property
    def has_active_filters(self) -> bool:
        return any(
            value is not None
            for value in (
                self.search_term,
                self.genre_id,
                self.year_from,
                self.year_to,
                self.price_from,
                self.price_to,
            )
        )

    @property
    def effective_sort_by(self) -> SortField:
        return self.sort_by or SortField.CREATED

    @property
    def effective_sort_order(self) -> SortDirection:
        return self.sort_order or SortDirection.DESC


@dataclass(frozen=True)
class MovieQuerySpec:
    """An unexecuted movie query: filter expressions plus ordering clauses."""

    filters: Tuple[Any, ...]
    order_by: Tuple[Any, ...]

    def bind(self, db: Session) -> Query:
        return (
            db.query(models.Movie)
            .options(selectinload(models.Movie.genres))
            .filter(*self.filters)
            .order_by(*self.order_by)
        )


def _resolve_ordering(
    sort_by: Optional[SortField], sort_order: Optional[SortDirection]
) -> Tuple[SortField, SortDirection]:
    if sort_by is None:
        return SortField.CREATED, SortDirection.DESC

    default = _DEFAULT_DIRECTIONS[sort_by]
    opposite = SortDirection.ASC if default is SortDirection.DESC else SortDirection.DESC
    if sort_order is opposite:
        return sort_by, opposite
    return sort_by, default


def _build_filters(criteria: SearchCriteria) -> list:
    movie = models.Movie
    filters: list = []

    if criteria.search_term:
        term = criteria.search_term.lower()
        filters.append(
            func.lower(movie.title).contains(term, autoescape=True)
            | func.lower(movie.original_title).contains(term, autoescape=True)
            | func.lower(movie.synopsis).contains(term, autoescape=True)
        )
    if criteria.genre_id is not None:
        filters.append(movie.genres.any(models.Genre.id == criteria.genre_id))
    if criteria.year_from is not None:
        filters.append(movie.release_year >= criteria.year_from)
    if criteria.year_to is not None:
        filters.append(movie.release_year <= criteria.year_to)
    if criteria.price_from is not None:
        filters.append(movie.rental_price >= criteria.price_from)
    if criteria.price_to is not None:
        filters.append(movie.rental_price <= criteria.price_to)

    return filters


def build_movie_query(criteria: SearchCriteria) -> MovieQuerySpec:
    """Translate ``criteria`` into a filtered, ordered but unpaginated query."""

    field, direction = _resolve_ordering(criteria.sort_by, criteria.sort_order)
    column = _SORT_COLUMNS[field]
    if direction is SortDirection.ASC:
        order_by = (column.asc(), models.Movie.id.asc())
    else:
        order_by = (column.desc(), models.Movie.id.desc())
    return MovieQuerySpec(filters=tuple(_build_filters(criteria)), order_by=order_by)
