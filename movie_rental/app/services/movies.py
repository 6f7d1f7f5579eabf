"""Business logic for browsing and maintaining the movie catalog."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from .. import models, schemas
from .activity_log import log_database_operation
from .movie_search import (
    ALLOWED_PAGE_SIZES,
    SORT_DIRECTION_LABELS,
    SORT_FIELD_LABELS,
    SearchCriteria,
    build_movie_query,
)
from .pagination import Page, paginate

LOGGER = logging.getLogger(__name__)


class MovieServiceError(RuntimeError):
    """Raised when a catalog operation cannot be completed."""


class MovieNotFoundError(MovieServiceError):
    """Raised when the requested movie does not exist."""


class DuplicateMovieError(MovieServiceError):
    """Raised when another movie already uses the same title and year."""


class MovieService:
    """Encapsulates catalog search and maintenance for movies."""

    @staticmethod
    def search(db: Session, criteria: SearchCriteria) -> Page[models.Movie]:
        query = build_movie_query(criteria).bind(db)
        page = paginate(query, criteria.page, criteria.page_size)
        LOGGER.debug(
            "Movie search returned %s of %s results (page %s)",
            len(page),
            page.info.total_count,
            criteria.page,
        )
        return page

    @staticmethod
    def search_options(db: Session) -> schemas.MovieSearchOptions:
        genres = db.query(models.Genre).order_by(models.Genre.name.asc()).all()
        return schemas.MovieSearchOptions(
            sort_options=[
                schemas.SelectOption(value=field.value, text=label)
                for field, label in SORT_FIELD_LABELS.items()
            ],
            sort_order_options=[
                schemas.SelectOption(value=direction.value, text=label)
                for direction, label in SORT_DIRECTION_LABELS.items()
            ],
            page_sizes=list(ALLOWED_PAGE_SIZES),
            genres=[schemas.GenreOption.model_validate(genre) for genre in genres],
        )

    @staticmethod
    def get_movie(db: Session, movie_id: int) -> Optional[models.Movie]:
        return (
            db.query(models.Movie)
            .options(selectinload(models.Movie.genres))
            .filter(models.Movie.id == movie_id)
            .first()
        )

    @staticmethod
    def get_details(db: Session, movie_id: int) -> schemas.MovieDetail:
        movie = (
            db.query(models.Movie)
            .options(
                selectinload(models.Movie.genres),
                selectinload(models.Movie.cast).selectinload(models.MovieCast.person),
                selectinload(models.Movie.crew).selectinload(models.MovieCrew.person),
            )
            .filter(models.Movie.id == movie_id)
            .first()
        )
        if movie is None:
            raise MovieNotFoundError("Movie not found")

        return schemas.MovieDetail(
            id=movie.id,
            title=movie.title,
            original_title=movie.original_title,
            synopsis=movie.synopsis,
            release_year=movie.release_year,
            duration_minutes=movie.duration_minutes,
            language=movie.language,
            rental_price=movie.rental_price,
            created_at=movie.created_at,
            genres=movie.genre_names,
            cast=[
                schemas.CastMember(
                    person_id=credit.person_id,
                    actor_name=credit.person.full_name,
                    character_name=credit.character_name,
                    cast_order=credit.cast_order,
                )
                for credit in sorted(movie.cast, key=lambda item: item.cast_order)
            ],
            crew=[
                schemas.CrewMember(
                    person_id=credit.person_id,
                    person_name=credit.person.full_name,
                    role=credit.role,
                )
                for credit in movie.crew
            ],
        )

    @staticmethod
    def create_movie(db: Session, data: schemas.MovieCreate) -> models.Movie:
        MovieService._ensure_unique(db, data.title, data.release_year)
        genres = MovieService._load_genres(db, data.genre_ids)

        payload = data.model_dump(exclude={"genre_ids"})
        movie = models.Movie(**payload)
        movie.genres = genres
        db.add(movie)
        db.commit()
        db.refresh(movie)
        log_database_operation("create", "Movie", movie.id)
        LOGGER.info("Created movie %s (%s)", movie.id, movie.title)
        return movie

    @staticmethod
    def update_movie(
        db: Session, movie: models.Movie, data: schemas.MovieUpdate
    ) -> models.Movie:
        MovieService._ensure_unique(db, data.title, data.release_year, exclude_id=movie.id)
        genres = MovieService._load_genres(db, data.genre_ids)

        for field, value in data.model_dump(exclude={"genre_ids"}).items():
            setattr(movie, field, value)
        movie.genres = genres
        db.add(movie)
        db.commit()
        db.refresh(movie)
        log_database_operation("update", "Movie", movie.id)
        LOGGER.info("Updated movie %s (%s)", movie.id, movie.title)
        return movie

    @staticmethod
    def delete_movie(db: Session, movie: models.Movie) -> None:
        movie_id = movie.id
        db.delete(movie)
        db.commit()
        log_database_operation("delete", "Movie", movie_id)
        LOGGER.info("Deleted movie %s", movie_id)

    @staticmethod
    def _ensure_unique(
        db: Session, title: str, release_year: int, *, exclude_id: Optional[int] = None
    ) -> None:
        query = db.query(models.Movie.id).filter(
            func.lower(models.Movie.title) == title.strip().lower(),
            models.Movie.release_year == release_year,
        )
        if exclude_id is not None:
            query = query.filter(models.Movie.id != exclude_id)
        if query.first() is not None:
            raise DuplicateMovieError(
                f"A movie with title '{title}' from {release_year} already exists"
            )

    @staticmethod
    def _load_genres(db: Session, genre_ids: Iterable[int]) -> list[models.Genre]:
        ids = list(genre_ids)
        genres = db.query(models.Genre).filter(models.Genre.id.in_(ids)).all()
        missing = set(ids) - {genre.id for genre in genres}
        if missing:
            raise MovieServiceError(
                "Unknown genre ids: " + ", ".join(str(value) for value in sorted(missing))
            )
        return genres
