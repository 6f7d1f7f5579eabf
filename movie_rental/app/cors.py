"""Cross-origin settings for the catalog frontend."""

from __future__ import annotations

import os
import re
from typing import Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

ALLOWED_ORIGINS_ENV = "MOVIE_RENTAL_ALLOWED_ORIGINS"

# Vite dev server and preview ports.
DEV_SERVER_PORTS = (5173, 5174, 4173)
DEV_HOSTS = ("localhost", "127.0.0.1")

LOCAL_DEVELOPMENT_ORIGINS = frozenset(
    f"http://{host}:{port}" for host in DEV_HOSTS for port in DEV_SERVER_PORTS
)
LOOPBACK_ORIGIN_PATTERN = r"https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$"


def parse_origin_list(raw_value: str) -> list[str]:
    """Split on commas and whitespace, dropping empty entries."""

    return [chunk for chunk in re.split(r"[\s,]+", raw_value) if chunk]


def normalize_origins(origins: Iterable[str]) -> list[str]:
    cleaned = {origin.strip().rstrip("/") for origin in origins}
    cleaned.discard("")
    return sorted(cleaned)


def allowed_origins() -> list[str]:
    """Origins from the environment, or the local dev servers when none are set."""

    configured = normalize_origins(parse_origin_list(os.getenv(ALLOWED_ORIGINS_ENV, "")))
    return configured or normalize_origins(LOCAL_DEVELOPMENT_ORIGINS)


def install_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins(),
        allow_origin_regex=LOOPBACK_ORIGIN_PATTERN,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
