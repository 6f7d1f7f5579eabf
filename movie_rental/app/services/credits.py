"""Manage the cast and crew credits attached to movies."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from .activity_log import log_database_operation

LOGGER = logging.getLogger(__name__)


class CreditServiceError(RuntimeError):
    """Raised when a credit cannot be created or changed."""


class CreditNotFoundError(CreditServiceError):
    """Raised when the movie, person or credit does not exist."""


class DuplicateCreditError(CreditServiceError):
    """Raised when the credit is already registered."""


class CreditService:
    """Encapsulates cast and crew maintenance for a movie."""

    @staticmethod
    def _require_movie(db: Session, movie_id: int) -> models.Movie:
        movie = db.query(models.Movie).filter(models.Movie.id == movie_id).first()
        if movie is None:
            raise CreditNotFoundError("Movie not found")
        return movie

    @staticmethod
    def _require_person(db: Session, person_id: int) -> models.Person:
        person = db.query(models.Person).filter(models.Person.id == person_id).first()
        if person is None:
            raise CreditNotFoundError("Person not found")
        return person

    @staticmethod
    def _get_cast(db: Session, movie_id: int, person_id: int):
        return (
            db.query(models.MovieCast)
            .filter(
                models.MovieCast.movie_id == movie_id,
                models.MovieCast.person_id == person_id,
            )
            .first()
        )

    @staticmethod
    def _get_crew(db: Session, movie_id: int, person_id: int, role: str):
        return (
            db.query(models.MovieCrew)
            .filter(
                models.MovieCrew.movie_id == movie_id,
                models.MovieCrew.person_id == person_id,
                models.MovieCrew.role == role,
            )
            .first()
        )

    @staticmethod
    def _cast_count(db: Session, movie_id: int) -> int:
        return (
            db.query(func.count())
            .select_from(models.MovieCast)
            .filter(models.MovieCast.movie_id == movie_id)
            .scalar()
            or 0
        )

    @staticmethod
    def get_credits(db: Session, movie_id: int) -> schemas.MovieCredits:
        movie = CreditService._require_movie(db, movie_id)
        cast = (
            db.query(models.MovieCast)
            .join(models.Person)
            .filter(models.MovieCast.movie_id == movie_id)
            .order_by(models.MovieCast.cast_order.asc(), models.Person.full_name.asc())
            .all()
        )
        crew = (
            db.query(models.MovieCrew)
            .join(models.Person)
            .filter(models.MovieCrew.movie_id == movie_id)
            .order_by(models.MovieCrew.role.asc(), models.Person.full_name.asc())
            .all()
        )
        return schemas.MovieCredits(
            movie_id=movie.id,
            movie_title=movie.title,
            release_year=movie.release_year,
            cast=[
                schemas.CastItem(
                    person_id=credit.person_id,
                    person_name=credit.person.full_name,
                    character_name=credit.character_name,
                    cast_order=credit.cast_order,
                )
                for credit in cast
            ],
            crew=[
                schemas.CrewItem(
                    person_id=credit.person_id,
                    person_name=credit.person.full_name,
                    role=credit.role,
                )
                for credit in crew
            ],
        )

    @staticmethod
    def available_cast(db: Session, movie_id: int) -> schemas.AvailableCast:
        movie = CreditService._require_movie(db, movie_id)
        cast_ids = select(models.MovieCast.person_id).where(
            models.MovieCast.movie_id == movie_id
        )
        people = (
            db.query(models.Person)
            .filter(models.Person.id.notin_(cast_ids))
            .order_by(models.Person.full_name.asc())
            .all()
        )
        return schemas.AvailableCast(
            movie_id=movie.id,
            movie_title=movie.title,
            next_cast_order=CreditService._cast_count(db, movie_id) + 1,
            people=[
                schemas.PersonOption(id=person.id, full_name=person.full_name)
                for person in people
            ],
        )

    @staticmethod
    def add_cast(db: Session, movie_id: int, data: schemas.CastCreate) -> models.MovieCast:
        CreditService._require_movie(db, movie_id)
        person = CreditService._require_person(db, data.person_id)
        duplicate_message = f"{person.full_name} is already in the cast"
        if CreditService._get_cast(db, movie_id, person.id) is not None:
            raise DuplicateCreditError(duplicate_message)

        cast_order = data.cast_order
        if cast_order is None:
            cast_order = CreditService._cast_count(db, movie_id) + 1
        credit = models.MovieCast(
            movie_id=movie_id,
            person_id=person.id,
            character_name=data.character_name,
            cast_order=cast_order,
        )
        db.add(credit)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DuplicateCreditError(duplicate_message) from exc
        log_database_operation("create", "MovieCast", f"{movie_id}:{person.id}")
        LOGGER.info("Added %s as '%s' to movie %s", person.full_name, data.character_name, movie_id)
        return credit

    @staticmethod
    def update_cast(
        db: Session, movie_id: int, person_id: int, data: schemas.CastUpdate
    ) -> models.MovieCast:
        credit = CreditService._get_cast(db, movie_id, person_id)
        if credit is None:
            raise CreditNotFoundError("Cast member not found")
        credit.character_name = data.character_name
        credit.cast_order = data.cast_order
        db.add(credit)
        db.commit()
        log_database_operation("update", "MovieCast", f"{movie_id}:{person_id}")
        return credit

    @staticmethod
    def remove_cast(db: Session, movie_id: int, person_id: int) -> None:
        credit = CreditService._get_cast(db, movie_id, person_id)
        if credit is None:
            raise CreditNotFoundError("Cast member not found")
        db.delete(credit)
        db.commit()
        log_database_operation("delete", "MovieCast", f"{movie_id}:{person_id}")

    @staticmethod
    def add_crew(db: Session, movie_id: int, data: schemas.CrewCreate) -> models.MovieCrew:
        CreditService._require_movie(db, movie_id)
        person = CreditService._require_person(db, data.person_id)
        duplicate_message = f"{person.full_name} is already credited as {data.role}"
        if CreditService._get_crew(db, movie_id, person.id, data.role) is not None:
            raise DuplicateCreditError(duplicate_message)

        credit = models.MovieCrew(movie_id=movie_id, person_id=person.id, role=data.role)
        db.add(credit)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DuplicateCreditError(duplicate_message) from exc
        log_database_operation("create", "MovieCrew", f"{movie_id}:{person.id}:{data.role}")
        LOGGER.info("Added %s as %s to movie %s", person.full_name, data.role, movie_id)
        return credit

    @staticmethod
    def remove_crew(db: Session, movie_id: int, person_id: int, role: str) -> None:
        credit = CreditService._get_crew(db, movie_id, person_id, role)
        if credit is None:
            raise CreditNotFoundError("Crew member not found")
        db.delete(credit)
        db.commit()
        log_database_operation("delete", "MovieCrew", f"{movie_id}:{person_id}:{role}")
