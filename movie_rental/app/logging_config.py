"""Configure console and rolling file logging for the service."""

from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOG_DIR_ENV = "LOG_DIR"
LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_FILE_NAME = "movie_rental.log"
LOG_BACKUP_COUNT = 7
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_HANDLER_MARKER = "_movie_rental_handler"


def resolve_log_dir() -> Path:
    raw = os.getenv(LOG_DIR_ENV)
    if raw:
        return Path(raw).expanduser()
    return _DEFAULT_LOG_DIR


def _resolve_level() -> int:
    raw = os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.INFO


def configure_logging() -> None:
    """Attach handlers to the root logger once per process."""

    root = logging.getLogger()
    root.setLevel(_resolve_level())
    if any(getattr(handler, _HANDLER_MARKER, False) for handler in root.handlers):
        return

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    setattr(console, _HANDLER_MARKER, True)
    root.addHandler(console)

    log_dir = resolve_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = TimedRotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        when="midnight",
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    setattr(file_handler, _HANDLER_MARKER, True)
    root.addHandler(file_handler)
