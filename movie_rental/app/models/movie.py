"""Models describing the movie catalog and its genres."""

from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from ..database import Base


movie_genres = Table(
    "movie_genres",
    Base.metadata,
    Column(
        "movie_id",
        Integer,
        ForeignKey("movies.movie_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "genre_id",
        Integer,
        ForeignKey("genres.genre_id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Genre(Base):
    """Catalog of genres used to classify movies."""

    __tablename__ = "genres"

    id = Column("genre_id", Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)

    movies = relationship("Movie", secondary=movie_genres, back_populates="genres")


class Movie(Base):
    """A rentable title in the catalog."""

    __tablename__ = "movies"

    id = Column("movie_id", Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    original_title = Column(String(200), nullable=True)
    synopsis = Column(Text, nullable=True)
    release_year = Column(Integer, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    language = Column(String(50), nullable=True)
    rental_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    genres = relationship(
        "Genre",
        secondary=movie_genres,
        back_populates="movies",
        order_by="Genre.name",
    )
    cast = relationship(
        "MovieCast",
        back_populates="movie",
        cascade="all, delete-orphan",
        order_by="MovieCast.cast_order",
    )
    crew = relationship(
        "MovieCrew",
        back_populates="movie",
        cascade="all, delete-orphan",
        order_by="MovieCrew.role",
    )

    @property
    def genre_names(self) -> list[str]:
        return [genre.name for genre in self.genres]


Index("movies_title_idx", Movie.title)
Index("movies_release_year_idx", Movie.release_year)
