"""Business logic for the genre catalog."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from .activity_log import log_database_operation

LOGGER = logging.getLogger(__name__)


class GenreServiceError(RuntimeError):
    """Raised when operations on the genre catalog fail."""


class GenreInUseError(GenreServiceError):
    """Raised when deleting a genre still assigned to movies."""


class GenreService:
    """Encapsulates catalog operations for genres."""

    @staticmethod
    def _movie_count(db: Session, genre_id: int) -> int:
        return (
            db.query(func.count(models.movie_genres.c.movie_id))
            .filter(models.movie_genres.c.genre_id == genre_id)
            .scalar()
            or 0
        )

    @staticmethod
    def list_genres(db: Session) -> List[schemas.GenreRead]:
        counts = (
            db.query(
                models.Genre,
                func.count(models.movie_genres.c.movie_id),
            )
            .outerjoin(models.movie_genres, models.movie_genres.c.genre_id == models.Genre.id)
            .group_by(models.Genre.id)
            .order_by(models.Genre.name.asc())
            .all()
        )
        return [
            schemas.GenreRead(id=genre.id, name=genre.name, movie_count=count)
            for genre, count in counts
        ]

    @staticmethod
    def get_genre(db: Session, genre_id: int) -> Optional[models.Genre]:
        return db.query(models.Genre).filter(models.Genre.id == genre_id).first()

    @staticmethod
    def to_read(db: Session, genre: models.Genre) -> schemas.GenreRead:
        return schemas.GenreRead(
            id=genre.id, name=genre.name, movie_count=GenreService._movie_count(db, genre.id)
        )

    @staticmethod
    def create_genre(db: Session, data: schemas.GenreCreate) -> models.Genre:
        GenreService._ensure_unique(db, data.name)
        genre = models.Genre(name=data.name)
        db.add(genre)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise GenreServiceError(f"Genre '{data.name}' already exists") from exc
        db.refresh(genre)
        log_database_operation("create", "Genre", genre.id)
        return genre

    @staticmethod
    def update_genre(
        db: Session, genre: models.Genre, data: schemas.GenreUpdate
    ) -> models.Genre:
        GenreService._ensure_unique(db, data.name, exclude_id=genre.id)
        genre.name = data.name
        try:
            db.add(genre)
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise GenreServiceError(f"Genre '{data.name}' already exists") from exc
        db.refresh(genre)
        log_database_operation("update", "Genre", genre.id)
        return genre

    @staticmethod
    def delete_genre(db: Session, genre: models.Genre) -> None:
        count = GenreService._movie_count(db, genre.id)
        if count:
            raise GenreInUseError(
                f"Cannot delete genre '{genre.name}' because it is used by {count} movie(s)"
            )
        genre_id = genre.id
        db.delete(genre)
        db.commit()
        log_database_operation("delete", "Genre", genre_id)
        LOGGER.info("Deleted genre %s", genre_id)

    @staticmethod
    def _ensure_unique(db: Session, name: str, *, exclude_id: Optional[int] = None) -> None:
        query = db.query(models.Genre.id).filter(
            func.lower(models.Genre.name) == name.strip().lower()
        )
        if exclude_id is not None:
            query = query.filter(models.Genre.id != exclude_id)
        if query.first() is not None:
            raise GenreServiceError(f"Genre '{name}' already exists")
