"""Expose SQLAlchemy models for convenient imports."""

from .movie import Genre, Movie, movie_genres
from .person import MovieCast, MovieCrew, Person
from .user import CartItem, User, UserRole

__all__ = [
    "CartItem",
    "Genre",
    "Movie",
    "MovieCast",
    "MovieCrew",
    "Person",
    "User",
    "UserRole",
    "movie_genres",
]
