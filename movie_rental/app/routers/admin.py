"""Administrator endpoints for inspecting the application log files."""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse

from .. import schemas
from ..logging_config import resolve_log_dir
from ..security import require_admin

router = APIRouter(dependencies=[Depends(require_admin)])

LOGGER = logging.getLogger(__name__)

MAX_LISTED_LOG_FILES = 7
LOG_FILE_PATTERN = "*.log*"
_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_file_size(size: int) -> str:
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[unit]}"


def _recent_log_files(log_dir: Path) -> List[Path]:
    if not log_dir.is_dir():
        return []
    files = [path for path in log_dir.glob(LOG_FILE_PATTERN) if path.is_file()]
    files.sort(key=lambda path: path.stat().st_mtime, reverse=True)
    return files[:MAX_LISTED_LOG_FILES]


def _tail(path: Path, lines: int) -> str:
    with path.open("r", encoding="utf-8", errors="replace") as handle:
        return "\n".join(line.rstrip("\n") for line in deque(handle, maxlen=lines))


@router.get("/logs", response_model=schemas.LogsOverview)
def list_logs(
    lines: int = Query(100, ge=1, le=10_000, description="Lines to show from the newest log"),
) -> schemas.LogsOverview:
    files = _recent_log_files(resolve_log_dir())
    content = ""
    if files:
        try:
            content = _tail(files[0], lines)
        except OSError as exc:
            LOGGER.error("Error reading log file %s", files[0].name, exc_info=exc)
            content = f"Error reading log file: {exc}"

    return schemas.LogsOverview(
        log_files=[
            schemas.LogFileInfo(
                file_name=path.name,
                file_size=format_file_size(path.stat().st_size),
                last_modified=datetime.fromtimestamp(path.stat().st_mtime),
            )
            for path in files
        ],
        current_log_content=content,
        lines_shown=lines,
    )


@router.get("/logs/{file_name}")
def download_log(file_name: str) -> FileResponse:
    if (
        not file_name
        or ".." in file_name
        or "/" in file_name
        or "\\" in file_name
        or not Path(file_name).match(LOG_FILE_PATTERN)
    ):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid file name")

    path = resolve_log_dir() / file_name
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Log file not found")

    LOGGER.info("Admin downloaded log file: %s", file_name)
    return FileResponse(path, media_type="text/plain", filename=file_name)
