"""SQLAlchemy engine, session factory and declarative base for the catalog."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

DATABASE_URL_ENV = "DATABASE_URL"
DEFAULT_DATABASE_FILE = Path(__file__).resolve().parent.parent / "movie_rental.db"

# (engine keyword, environment variable, default) for server databases.
POOL_SETTINGS = (
    ("pool_size", "DATABASE_POOL_SIZE", 5),
    ("max_overflow", "DATABASE_MAX_OVERFLOW", 10),
    ("pool_timeout", "DATABASE_POOL_TIMEOUT", 30),
    ("pool_recycle", "DATABASE_POOL_RECYCLE", 1800),
)


def _read_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return value


def _sqlite_file(url: str) -> Optional[Path]:
    parsed = make_url(url)
    if not parsed.drivername.startswith("sqlite"):
        return None
    if parsed.database in (None, "", ":memory:"):
        return None
    return Path(parsed.database)


def resolve_database_url(raw_url: Optional[str] = None) -> str:
    """Return the configured URL, defaulting to a SQLite file beside the package.

    The parent directory of a SQLite database file is created on demand.
    """

    url = raw_url or f"sqlite:///{DEFAULT_DATABASE_FILE.as_posix()}"
    sqlite_file = _sqlite_file(url)
    if sqlite_file is not None:
        sqlite_file.parent.mkdir(parents=True, exist_ok=True)
    return url


def engine_options(url: str) -> Dict[str, Any]:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    options: Dict[str, Any] = {"pool_pre_ping": True}
    for keyword, env_name, default in POOL_SETTINGS:
        options[keyword] = _read_int_env(env_name, default)
    return options


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """Turn on SQLite FK enforcement so ``ON DELETE CASCADE`` clauses apply."""

    if target.dialect.name != "sqlite":
        return

    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):  # pragma: no cover - driver hook
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SQLALCHEMY_DATABASE_URL = resolve_database_url(os.getenv(DATABASE_URL_ENV))
engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_options(SQLALCHEMY_DATABASE_URL))
enable_sqlite_foreign_keys(engine)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Commit on success and roll back on error, for work outside a request."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_schema() -> None:
    """Create any missing tables for the registered models."""
    from . import models  # noqa: F401  (registers mappers on Base.metadata)

    Base.metadata.create_all(bind=engine)
