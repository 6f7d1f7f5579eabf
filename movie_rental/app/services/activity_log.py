"""Structured log helpers for user actions, security events and data changes."""

from __future__ import annotations

import logging
from typing import Any, Optional

LOGGER = logging.getLogger("movie_rental.activity")


def log_user_action(user_id: str, action: str, details: str) -> None:
    LOGGER.info(
        "User action: %s - %s",
        action,
        details,
        extra={"user_id": user_id, "action": action},
    )


def log_security_event(event_type: str, details: str, user_id: Optional[str] = None) -> None:
    extra: dict[str, Any] = {"event_type": event_type, "security_event": True}
    if user_id:
        extra["user_id"] = user_id
    LOGGER.warning("Security event: %s - %s", event_type, details, extra=extra)


def log_database_operation(operation: str, entity: str, entity_id: Any = None) -> None:
    extra: dict[str, Any] = {"operation": operation, "entity": entity}
    if entity_id is not None:
        extra["entity_id"] = entity_id
    LOGGER.debug("Database: %s on %s", operation, entity, extra=extra)
