"""Expose the Movie Rental FastAPI app."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .cors import install_cors
from .database import create_schema, session_scope
from .logging_config import configure_logging
from .middleware import add_exception_logging
from .routers import (
    admin_router,
    auth_router,
    cart_router,
    credits_router,
    genres_router,
    movies_router,
    people_router,
)
from .services.seeding import seed_database

SEED_DATABASE_ENV = "SEED_DATABASE"

LOGGER = logging.getLogger(__name__)


def _read_bool_env(name: str, default: bool = True) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def ensure_database_is_ready() -> None:
    """Create missing tables and load the demo catalog when seeding is enabled."""

    LOGGER.info("Ensuring database schema exists before serving requests")
    create_schema()
    if not _read_bool_env(SEED_DATABASE_ENV, True):
        LOGGER.info("Database seeding disabled via %s", SEED_DATABASE_ENV)
        return
    with session_scope() as session:
        seed_database(session)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    LOGGER.info("Starting Movie Rental API")
    ensure_database_is_ready()
    try:
        yield
    finally:
        LOGGER.info("Movie Rental API stopped")


app = FastAPI(title="Movie Rental API", lifespan=lifespan)

add_exception_logging(app)
install_cors(app)

app.include_router(auth_router)
app.include_router(movies_router, prefix="/movies", tags=["movies"])
app.include_router(credits_router, tags=["credits"])
app.include_router(genres_router, prefix="/genres", tags=["genres"])
app.include_router(people_router, prefix="/people", tags=["people"])
app.include_router(cart_router, prefix="/cart", tags=["cart"])
app.include_router(admin_router, prefix="/admin", tags=["admin"])


@app.get("/", tags=["health"])
def read_root() -> dict[str, str]:
    """Return a simple health check response."""
    return {"status": "ok"}
