from __future__ import annotations

import base64
import os
import sys
import tempfile
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure the project root (which exposes the ``movie_rental`` package) is on ``sys.path``
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("MOVIE_RENTAL_JWT_SECRET", base64.urlsafe_b64encode(os.urandom(32)).decode())
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="movie_rental_logs_"))
os.environ["SEED_DATABASE"] = "0"

from movie_rental.app import models
from movie_rental.app.database import Base, enable_sqlite_foreign_keys, get_db
from movie_rental.app.main import app
from movie_rental.app.security import create_access_token, generate_password_hash

TEST_PASSWORD = "Passw0rd!"
# Low iteration count keeps password hashing fast in tests.
TEST_HASH_ITERATIONS = 1_000

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture(scope="session", autouse=True)
def setup_database() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            db_session.expire_all()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


def make_user(
    db_session: Session,
    email: str,
    *,
    role: models.UserRole = models.UserRole.CUSTOMER,
    first_name: str = "Test",
    last_name: str = "User",
) -> models.User:
    user = models.User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=generate_password_hash(TEST_PASSWORD, iterations=TEST_HASH_ITERATIONS),
        role=role,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def user_password() -> str:
    return TEST_PASSWORD


def auth_headers(user: models.User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_user(db_session: Session) -> models.User:
    return make_user(
        db_session,
        "admin@movierental.com",
        role=models.UserRole.ADMIN,
        first_name="Admin",
        last_name="User",
    )


@pytest.fixture
def customer_user(db_session: Session) -> models.User:
    return make_user(db_session, "customer@example.com", first_name="John", last_name="Doe")


@pytest.fixture
def admin_headers(admin_user: models.User) -> dict:
    return auth_headers(admin_user)


@pytest.fixture
def customer_headers(customer_user: models.User) -> dict:
    return auth_headers(customer_user)


@pytest.fixture
def admin_client(client: TestClient, admin_headers: dict) -> TestClient:
    client.headers.update(admin_headers)
    return client


@pytest.fixture
def customer_client(client: TestClient, customer_headers: dict) -> TestClient:
    client.headers.update(customer_headers)
    return client


@pytest.fixture
def catalog(db_session: Session) -> dict:
    """Five movies with distinct creation times, a few credits and one unused genre."""

    genres = {
        name: models.Genre(name=name)
        for name in ("Action", "Crime", "Drama", "Science Fiction", "Thriller", "Documentary")
    }
    db_session.add_all(genres.values())

    nolan = models.Person(full_name="Christopher Nolan", birth_date=date(1970, 7, 30), bio="Director.")
    dicaprio = models.Person(full_name="Leonardo DiCaprio", birth_date=date(1974, 11, 11))
    hardy = models.Person(full_name="Tom Hardy", birth_date=date(1977, 9, 15))
    freeman = models.Person(full_name="Morgan Freeman", birth_date=date(1937, 6, 1))
    db_session.add_all([nolan, dicaprio, hardy, freeman])

    base_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
    specs = [
        ("Inception", 2010, 148, "4.99", ["Action", "Science Fiction", "Thriller"], "A thief steals secrets through dream-sharing technology."),
        ("Pulp Fiction", 1994, 154, "3.99", ["Crime", "Drama"], "Mob hitmen and a boxer cross paths."),
        ("The Shawshank Redemption", 1994, 142, "3.99", ["Drama"], "Two imprisoned men bond over a number of years."),
        ("The Dark Knight", 2008, 152, "4.99", ["Action", "Crime", "Drama", "Thriller"], "Batman faces the Joker in Gotham."),
        ("The Matrix", 1999, 136, "3.99", ["Action", "Science Fiction"], None),
    ]
    movies = {}
    for offset, (title, year, minutes, price, genre_names, synopsis) in enumerate(specs):
        movie = models.Movie(
            title=title,
            original_title=title,
            synopsis=synopsis,
            release_year=year,
            duration_minutes=minutes,
            language="English",
            rental_price=Decimal(price),
            created_at=base_time + timedelta(days=offset),
        )
        movie.genres = [genres[name] for name in genre_names]
        db_session.add(movie)
        movies[title] = movie

    inception = movies["Inception"]
    inception.cast.append(models.MovieCast(person=dicaprio, character_name="Dom Cobb", cast_order=1))
    inception.cast.append(models.MovieCast(person=hardy, character_name="Eames", cast_order=2))
    inception.crew.append(models.MovieCrew(person=nolan, role="Director"))
    inception.crew.append(models.MovieCrew(person=nolan, role="Writer"))
    movies["The Dark Knight"].crew.append(models.MovieCrew(person=nolan, role="Director"))
    movies["The Dark Knight"].cast.append(
        models.MovieCast(person=hardy, character_name="Bane Stand-in", cast_order=1)
    )

    db_session.commit()
    return {
        "genres": genres,
        "movies": movies,
        "people": {
            "nolan": nolan,
            "dicaprio": dicaprio,
            "hardy": hardy,
            "freeman": freeman,
        },
    }
