from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel


class LogFileInfo(BaseModel):
    file_name: str
    file_size: str
    last_modified: datetime


class LogsOverview(BaseModel):
    log_files: List[LogFileInfo]
    current_log_content: str
    lines_shown: int
