"""Account registration and credential checks with lockout."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..security import generate_password_hash, verify_password
from .activity_log import log_security_event, log_user_action

LOGGER = logging.getLogger(__name__)

MAX_FAILED_LOGIN_ATTEMPTS = 5
LOCKOUT_DURATION = timedelta(minutes=5)


class UserServiceError(RuntimeError):
    """Raised when an account operation fails."""


class EmailAlreadyRegisteredError(UserServiceError):
    """Raised when registering an email that already has an account."""


class InvalidCredentialsError(UserServiceError):
    """Raised when the email or password is wrong."""


class AccountLockedError(UserServiceError):
    """Raised while an account is locked after repeated failures."""

    def __init__(self, message: str, locked_until: datetime) -> None:
        super().__init__(message)
        self.locked_until = locked_until


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserService:
    """Encapsulates registration and authentication for users."""

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[models.User]:
        return (
            db.query(models.User)
            .filter(models.User.email == email.strip().lower())
            .first()
        )

    @staticmethod
    def create_user(
        db: Session,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: models.UserRole = models.UserRole.CUSTOMER,
    ) -> models.User:
        user = models.User(
            email=email.strip().lower(),
            first_name=first_name,
            last_name=last_name,
            password_hash=generate_password_hash(password),
            role=role,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise EmailAlreadyRegisteredError("This email is already registered") from exc
        db.refresh(user)
        return user

    @staticmethod
    def register(db: Session, data: schemas.RegisterRequest) -> models.User:
        if UserService.get_by_email(db, data.email) is not None:
            raise EmailAlreadyRegisteredError("This email is already registered")
        user = UserService.create_user(
            db,
            email=data.email,
            password=data.password,
            first_name=data.first_name,
            last_name=data.last_name,
        )
        log_user_action(user.id, "Register", f"New customer account {user.email}")
        LOGGER.info("Registered customer %s", user.id)
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> models.User:
        """Verify credentials, tracking failures and locking the account when needed."""

        user = UserService.get_by_email(db, email)
        if user is None:
            log_security_event("LoginFailed", f"Unknown email {email}")
            raise InvalidCredentialsError("Invalid email or password")

        now = _utcnow()
        if user.locked_until is not None:
            locked_until = _as_utc(user.locked_until)
            if locked_until > now:
                log_security_event("LoginWhileLocked", f"Locked account {user.email}", user.id)
                raise AccountLockedError(
                    "Account locked due to multiple failed login attempts. Please try again later.",
                    locked_until,
                )
            user.locked_until = None
            user.failed_login_attempts = 0

        if not verify_password(password, user.password_hash):
            user.failed_login_attempts = (user.failed_login_attempts or 0) + 1
            locked = user.failed_login_attempts >= MAX_FAILED_LOGIN_ATTEMPTS
            if locked:
                user.locked_until = now + LOCKOUT_DURATION
                user.failed_login_attempts = 0
            db.add(user)
            db.commit()
            if locked:
                log_security_event("AccountLocked", f"Account locked for {user.email}", user.id)
                raise AccountLockedError(
                    "Account locked due to multiple failed login attempts. Please try again later.",
                    user.locked_until,
                )
            log_security_event("LoginFailed", f"Wrong password for {user.email}", user.id)
            raise InvalidCredentialsError("Invalid email or password")

        user.failed_login_attempts = 0
        user.locked_until = None
        user.last_login_at = now
        db.add(user)
        db.commit()
        db.refresh(user)
        log_user_action(user.id, "Login", f"User {user.email} logged in")
        return user
