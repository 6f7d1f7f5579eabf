"""Request middleware shared by the API."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request, Response

LOGGER = logging.getLogger("movie_rental.errors")


def add_exception_logging(app: FastAPI) -> None:
    """Log unhandled exceptions with request context before re-raising them."""

    @app.middleware("http")
    async def _exception_logging_middleware(
        request: Request,
        call_next: Callable[[Any], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception:
            user = getattr(request.state, "user_email", None) or "Anonymous"
            client_ip = request.client.host if request.client else "Unknown"
            LOGGER.exception(
                "Unhandled exception occurred. Request: %s %s",
                request.method,
                request.url.path,
                extra={"user": user, "client_ip": client_ip},
            )
            LOGGER.error("User: %s, IP: %s", user, client_ip)
            raise
