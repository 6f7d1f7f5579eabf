"""Idempotent demo data for a fresh catalog database."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models
from .users import UserService

LOGGER = logging.getLogger(__name__)

ADDITIONAL_MOVIES_THRESHOLD = 10

DEFAULT_USERS = [
    {
        "email": "admin@movierental.com",
        "password": "Admin123!",
        "first_name": "Admin",
        "last_name": "User",
        "role": models.UserRole.ADMIN,
    },
    {
        "email": "customer@example.com",
        "password": "Customer123!",
        "first_name": "John",
        "last_name": "Doe",
        "role": models.UserRole.CUSTOMER,
    },
]

DEFAULT_GENRES = [
    "Action",
    "Adventure",
    "Comedy",
    "Drama",
    "Horror",
    "Science Fiction",
    "Thriller",
    "Romance",
    "Animation",
    "Documentary",
    "Fantasy",
    "Crime",
]

DEFAULT_PEOPLE = [
    ("Christopher Nolan", date(1970, 7, 30), "British-American filmmaker known for his cerebral, often nonlinear storytelling."),
    ("Leonardo DiCaprio", date(1974, 11, 11), "American actor and film producer known for his work in biopics and period films."),
    ("Joseph Gordon-Levitt", date(1981, 2, 17), "American actor and filmmaker who has received various accolades."),
    ("Ellen Page", date(1987, 2, 21), "Canadian actor and producer."),
    ("Tom Hardy", date(1977, 9, 15), "English actor and producer."),
    ("Quentin Tarantino", date(1963, 3, 27), "American filmmaker and screenwriter known for his stylized films."),
    ("Samuel L. Jackson", date(1948, 12, 21), "American actor and producer, one of the most widely recognized actors of his generation."),
    ("Uma Thurman", date(1970, 4, 29), "American actress and model."),
    ("John Travolta", date(1954, 2, 18), "American actor, singer, and dancer."),
    ("Frank Darabont", date(1959, 1, 28), "Hungarian-American film director, screenwriter and producer."),
    ("Tim Robbins", date(1958, 10, 16), "American actor, filmmaker, and activist."),
    ("Morgan Freeman", date(1937, 6, 1), "American actor, director, and narrator."),
]

DEFAULT_MOVIES = [
    {
        "title": "Inception",
        "synopsis": (
            "A thief who steals corporate secrets through the use of dream-sharing technology "
            "is given the inverse task of planting an idea into the mind of a C.E.O."
        ),
        "release_year": 2010,
        "duration_minutes": 148,
        "rental_price": Decimal("4.99"),
        "genres": ["Action", "Science Fiction", "Thriller"],
        "cast": [
            ("Leonardo DiCaprio", "Dom Cobb"),
            ("Joseph Gordon-Levitt", "Arthur"),
            ("Ellen Page", "Ariadne"),
            ("Tom Hardy", "Eames"),
        ],
        "crew": [("Christopher Nolan", "Director"), ("Christopher Nolan", "Writer")],
    },
    {
        "title": "Pulp Fiction",
        "synopsis": (
            "The lives of two mob hitmen, a boxer, a gangster and his wife, and a pair of diner "
            "bandits intertwine in four tales of violence and redemption."
        ),
        "release_year": 1994,
        "duration_minutes": 154,
        "rental_price": Decimal("3.99"),
        "genres": ["Crime", "Drama"],
        "cast": [
            ("Samuel L. Jackson", "Jules Winnfield"),
            ("John Travolta", "Vincent Vega"),
            ("Uma Thurman", "Mia Wallace"),
        ],
        "crew": [("Quentin Tarantino", "Director"), ("Quentin Tarantino", "Writer")],
    },
    {
        "title": "The Shawshank Redemption",
        "synopsis": (
            "Two imprisoned men bond over a number of years, finding solace and eventual "
            "redemption through acts of common decency."
        ),
        "release_year": 1994,
        "duration_minutes": 142,
        "rental_price": Decimal("3.99"),
        "genres": ["Drama"],
        "cast": [
            ("Tim Robbins", "Andy Dufresne"),
            ("Morgan Freeman", "Ellis Boyd 'Red' Redding"),
        ],
        "crew": [("Frank Darabont", "Director"), ("Frank Darabont", "Writer")],
    },
    {
        "title": "The Dark Knight",
        "synopsis": (
            "When the menace known as the Joker wreaks havoc and chaos on the people of Gotham, "
            "Batman must accept one of the greatest psychological and physical tests of his "
            "ability to fight injustice."
        ),
        "release_year": 2008,
        "duration_minutes": 152,
        "rental_price": Decimal("4.99"),
        "genres": ["Action", "Crime", "Drama", "Thriller"],
        "cast": [],
        "crew": [("Christopher Nolan", "Director")],
    },
]

# (title, original title, year, minutes, price, synopsis)
ADDITIONAL_MOVIES = [
    ("The Matrix", "The Matrix", 1999, 136, "3.99", "A computer hacker learns about the true nature of reality and his role in the war against its controllers."),
    ("Interstellar", "Interstellar", 2014, 169, "4.99", "A team of explorers travel through a wormhole in space in an attempt to ensure humanity's survival."),
    ("The Godfather", "The Godfather", 1972, 175, "3.49", "The aging patriarch of an organized crime dynasty transfers control to his reluctant son."),
    ("Fight Club", "Fight Club", 1999, 139, "3.99", "An insomniac office worker and a soap salesman build a global organization to help vent male aggression."),
    ("Forrest Gump", "Forrest Gump", 1994, 142, "3.49", "The presidencies of Kennedy and Johnson, the Vietnam War, and other events unfold from the perspective of an Alabama man."),
    ("The Lord of the Rings: The Fellowship", "The Lord of the Rings: The Fellowship of the Ring", 2001, 178, "4.49", "A meek Hobbit sets out on a journey to destroy a powerful ring."),
    ("Gladiator", "Gladiator", 2000, 155, "3.99", "A former Roman General sets out to exact vengeance against the corrupt emperor."),
    ("The Prestige", "The Prestige", 2006, 130, "4.49", "Two stage magicians engage in competitive one-upmanship in an attempt to create the ultimate stage illusion."),
    ("Se7en", "Se7en", 1995, 127, "3.49", "Two detectives hunt a serial killer who uses the seven deadly sins as his motives."),
    ("The Silence of the Lambs", "The Silence of the Lambs", 1991, 118, "3.49", "A young FBI cadet must receive the help of an incarcerated cannibal killer."),
    ("Saving Private Ryan", "Saving Private Ryan", 1998, 169, "3.99", "Following the Normandy Landings, a group of soldiers go behind enemy lines to retrieve a paratrooper."),
    ("The Green Mile", "The Green Mile", 1999, 189, "3.99", "The lives of guards on Death Row are affected by one of their charges."),
    ("Schindler's List", "Schindler's List", 1993, 195, "3.49", "In German-occupied Poland, industrialist Oskar Schindler becomes concerned for his Jewish workforce."),
    ("Jurassic Park", "Jurassic Park", 1993, 127, "3.99", "A pragmatic paleontologist visiting an almost complete theme park is tasked with protecting a couple of kids."),
    ("The Lion King", "The Lion King", 1994, 88, "3.49", "Lion prince Simba flees his kingdom only to learn the true meaning of responsibility and bravery."),
    ("Back to the Future", "Back to the Future", 1985, 116, "3.49", "Marty McFly is accidentally sent 30 years into the past in a time-traveling DeLorean."),
    ("Terminator 2", "Terminator 2: Judgment Day", 1991, 137, "3.99", "A cyborg protects a boy from a more advanced killing machine sent from the future."),
    ("Alien", "Alien", 1979, 117, "3.49", "The crew of a commercial spacecraft encounter a deadly lifeform after investigating a mysterious transmission."),
    ("Die Hard", "Die Hard", 1988, 132, "3.49", "An NYPD officer tries to save his wife and others taken hostage by German terrorists."),
    ("Goodfellas", "Goodfellas", 1990, 146, "3.49", "The story of Henry Hill and his life in the mob."),
]

# First matching keyword group decides the genres; unmatched titles get Action.
GENRE_KEYWORD_RULES = [
    (("Matrix", "Terminator", "Alien"), ["Science Fiction", "Action"]),
    (("Godfather", "Goodfellas"), ["Drama"]),
    (("Se7en", "Silence"), ["Thriller", "Horror"]),
    (("Die Hard", "Gladiator"), ["Action"]),
    (("Forrest", "Green Mile", "Schindler"), ["Drama"]),
]
FALLBACK_GENRES = ["Action"]


def genres_for_title(title: str) -> list[str]:
    for keywords, genres in GENRE_KEYWORD_RULES:
        if any(keyword in title for keyword in keywords):
            return genres
    return FALLBACK_GENRES


def seed_users(db: Session) -> None:
    for user_data in DEFAULT_USERS:
        if UserService.get_by_email(db, user_data["email"]) is not None:
            continue
        UserService.create_user(db, **user_data)
        LOGGER.info("Seeded user %s", user_data["email"])


def seed_genres(db: Session) -> None:
    if db.query(models.Genre.id).first() is not None:
        return
    db.add_all(models.Genre(name=name) for name in DEFAULT_GENRES)
    db.commit()
    LOGGER.info("Seeded %s genres", len(DEFAULT_GENRES))


def seed_catalog(db: Session) -> None:
    """Insert the starter people, movies and credits when no movie exists yet."""

    if db.query(models.Movie.id).first() is not None:
        return

    genres = {genre.name: genre for genre in db.query(models.Genre).all()}
    people = {}
    for full_name, birth_date, bio in DEFAULT_PEOPLE:
        person = models.Person(full_name=full_name, birth_date=birth_date, bio=bio)
        db.add(person)
        people[full_name] = person

    for entry in DEFAULT_MOVIES:
        movie = models.Movie(
            title=entry["title"],
            original_title=entry["title"],
            synopsis=entry["synopsis"],
            release_year=entry["release_year"],
            duration_minutes=entry["duration_minutes"],
            language="English",
            rental_price=entry["rental_price"],
        )
        movie.genres = [genres[name] for name in entry["genres"] if name in genres]
        for order, (actor, character) in enumerate(entry["cast"], start=1):
            movie.cast.append(
                models.MovieCast(person=people[actor], character_name=character, cast_order=order)
            )
        for person_name, role in entry["crew"]:
            movie.crew.append(models.MovieCrew(person=people[person_name], role=role))
        db.add(movie)

    db.commit()
    LOGGER.info("Seeded %s people and %s movies", len(DEFAULT_PEOPLE), len(DEFAULT_MOVIES))


def seed_additional_movies(db: Session) -> None:
    """Top up a small catalog with a second batch of well-known titles."""

    movie_count = db.query(func.count(models.Movie.id)).scalar() or 0
    if movie_count > ADDITIONAL_MOVIES_THRESHOLD:
        return

    existing = {
        (title.lower(), year)
        for title, year in db.query(models.Movie.title, models.Movie.release_year).all()
    }
    genres = {genre.name: genre for genre in db.query(models.Genre).all()}
    added = 0
    for title, original_title, year, minutes, price, synopsis in ADDITIONAL_MOVIES:
        if (title.lower(), year) in existing:
            continue
        movie = models.Movie(
            title=title,
            original_title=original_title,
            synopsis=synopsis,
            release_year=year,
            duration_minutes=minutes,
            language="English",
            rental_price=Decimal(price),
        )
        movie.genres = [genres[name] for name in genres_for_title(title) if name in genres]
        db.add(movie)
        added += 1

    if added:
        db.commit()
        LOGGER.info("Seeded %s additional movies", added)


def seed_database(db: Session) -> None:
    """Run every seeding step; each one is skipped when its data already exists."""

    seed_users(db)
    seed_genres(db)
    seed_catalog(db)
    seed_additional_movies(db)
