"""Business logic for people credited on movies."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from .. import models, schemas
from .activity_log import log_database_operation

LOGGER = logging.getLogger(__name__)


class PersonServiceError(RuntimeError):
    """Raised when operations on people fail."""


class PersonNotFoundError(PersonServiceError):
    """Raised when the requested person does not exist."""


class PersonHasCreditsError(PersonServiceError):
    """Raised when deleting a person who still has movie credits."""


class PersonService:
    """Encapsulates lookups and maintenance for people."""

    @staticmethod
    def list_people(db: Session, *, search: Optional[str] = None) -> List[schemas.PersonSummary]:
        acting = (
            db.query(models.MovieCast.person_id, func.count().label("total"))
            .group_by(models.MovieCast.person_id)
            .subquery()
        )
        crew = (
            db.query(
                models.MovieCrew.person_id,
                func.count(func.distinct(models.MovieCrew.movie_id)).label("total"),
            )
            .group_by(models.MovieCrew.person_id)
            .subquery()
        )
        query = (
            db.query(
                models.Person,
                func.coalesce(acting.c.total, 0),
                func.coalesce(crew.c.total, 0),
            )
            .outerjoin(acting, acting.c.person_id == models.Person.id)
            .outerjoin(crew, crew.c.person_id == models.Person.id)
        )
        if search and search.strip():
            term = search.strip().lower()
            query = query.filter(func.lower(models.Person.full_name).contains(term, autoescape=True))

        rows = query.order_by(models.Person.full_name.asc(), models.Person.id.asc()).all()
        return [
            schemas.PersonSummary(
                id=person.id,
                full_name=person.full_name,
                birth_date=person.birth_date,
                movies_as_actor=acting_count,
                movies_as_crew=crew_count,
            )
            for person, acting_count, crew_count in rows
        ]

    @staticmethod
    def get_person(db: Session, person_id: int) -> Optional[models.Person]:
        return db.query(models.Person).filter(models.Person.id == person_id).first()

    @staticmethod
    def get_details(db: Session, person_id: int) -> schemas.PersonDetail:
        person = (
            db.query(models.Person)
            .options(
                selectinload(models.Person.cast_credits).selectinload(models.MovieCast.movie),
                selectinload(models.Person.crew_credits).selectinload(models.MovieCrew.movie),
            )
            .filter(models.Person.id == person_id)
            .first()
        )
        if person is None:
            raise PersonNotFoundError("Person not found")

        acting = sorted(
            person.cast_credits,
            key=lambda credit: (-credit.movie.release_year, credit.movie.title),
        )
        crew = sorted(
            person.crew_credits,
            key=lambda credit: (-credit.movie.release_year, credit.movie.title, credit.role),
        )
        return schemas.PersonDetail(
            id=person.id,
            full_name=person.full_name,
            birth_date=person.birth_date,
            bio=person.bio,
            age=person.age,
            movies_as_actor=[
                schemas.ActingRole(
                    movie_id=credit.movie_id,
                    movie_title=credit.movie.title,
                    release_year=credit.movie.release_year,
                    character_name=credit.character_name,
                    cast_order=credit.cast_order,
                )
                for credit in acting
            ],
            movies_as_crew=[
                schemas.CrewRole(
                    movie_id=credit.movie_id,
                    movie_title=credit.movie.title,
                    release_year=credit.movie.release_year,
                    role=credit.role,
                )
                for credit in crew
            ],
        )

    @staticmethod
    def create_person(db: Session, data: schemas.PersonCreate) -> models.Person:
        person = models.Person(**data.model_dump())
        db.add(person)
        db.commit()
        db.refresh(person)
        log_database_operation("create", "Person", person.id)
        return person

    @staticmethod
    def update_person(
        db: Session, person: models.Person, data: schemas.PersonUpdate
    ) -> models.Person:
        for field, value in data.model_dump().items():
            setattr(person, field, value)
        db.add(person)
        db.commit()
        db.refresh(person)
        log_database_operation("update", "Person", person.id)
        return person

    @staticmethod
    def delete_person(db: Session, person: models.Person) -> None:
        acting = (
            db.query(func.count())
            .select_from(models.MovieCast)
            .filter(models.MovieCast.person_id == person.id)
            .scalar()
        )
        crew = (
            db.query(func.count())
            .select_from(models.MovieCrew)
            .filter(models.MovieCrew.person_id == person.id)
            .scalar()
        )
        if acting or crew:
            raise PersonHasCreditsError(
                f"Cannot delete '{person.full_name}' because they have "
                f"{acting} acting and {crew} crew credit(s)"
            )
        person_id = person.id
        db.delete(person)
        db.commit()
        log_database_operation("delete", "Person", person_id)
        LOGGER.info("Deleted person %s", person_id)
