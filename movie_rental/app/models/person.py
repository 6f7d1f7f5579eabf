"""Models for people and the credits linking them to movies."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class Person(Base):
    """An actor or crew member."""

    __tablename__ = "people"

    id = Column("person_id", Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(150), nullable=False, index=True)
    birth_date = Column(Date, nullable=True)
    bio = Column(Text, nullable=True)

    cast_credits = relationship(
        "MovieCast",
        back_populates="person",
        cascade="all, delete-orphan",
    )
    crew_credits = relationship(
        "MovieCrew",
        back_populates="person",
        cascade="all, delete-orphan",
    )

    @property
    def age(self) -> Optional[int]:
        """Whole years elapsed since ``birth_date`` as of today."""

        if self.birth_date is None:
            return None
        today = date.today()
        years = today.year - self.birth_date.year
        if (today.month, today.day) < (self.birth_date.month, self.birth_date.day):
            years -= 1
        return years


class MovieCast(Base):
    """An acting credit: a person playing a character in a movie."""

    __tablename__ = "movie_cast"

    movie_id = Column(
        Integer,
        ForeignKey("movies.movie_id", ondelete="CASCADE"),
        primary_key=True,
    )
    person_id = Column(
        Integer,
        ForeignKey("people.person_id", ondelete="CASCADE"),
        primary_key=True,
    )
    character_name = Column(String(150), nullable=False)
    cast_order = Column(Integer, nullable=False, default=1)

    movie = relationship("Movie", back_populates="cast")
    person = relationship("Person", back_populates="cast_credits")


class MovieCrew(Base):
    """A crew credit. A person may hold several roles on the same movie."""

    __tablename__ = "movie_crew"

    movie_id = Column(
        Integer,
        ForeignKey("movies.movie_id", ondelete="CASCADE"),
        primary_key=True,
    )
    person_id = Column(
        Integer,
        ForeignKey("people.person_id", ondelete="CASCADE"),
        primary_key=True,
    )
    role = Column(String(50), primary_key=True)

    movie = relationship("Movie", back_populates="crew")
    person = relationship("Person", back_populates="crew_credits")
