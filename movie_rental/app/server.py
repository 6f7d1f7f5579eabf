"""ASGI server entry point for the movie rental API."""

from __future__ import annotations

import os

import uvicorn

HOST_ENV = "MOVIE_RENTAL_HOST"
PORT_ENV = "MOVIE_RENTAL_PORT"
RELOAD_ENV = "MOVIE_RENTAL_RELOAD"

__all__ = ["run"]


def run() -> None:
    """Run the FastAPI application using Uvicorn."""

    from .main import _read_bool_env

    port_raw = os.getenv(PORT_ENV, "8000").strip()
    try:
        port = int(port_raw)
    except ValueError as exc:
        raise RuntimeError(f"{PORT_ENV} must be an integer") from exc

    uvicorn.run(
        "movie_rental.app.main:app",
        host=os.getenv(HOST_ENV, "127.0.0.1"),
        port=port,
        reload=_read_bool_env(RELOAD_ENV, False),
        server_header=False,
        # Logging is configured by the application lifespan.
        log_config=None,
    )
