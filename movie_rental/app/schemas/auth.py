"""Pydantic schemas for account registration and token endpoints."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models.user import UserRole

NAME_PATTERN = re.compile(r"^[a-zA-ZáéíóúÁÉÍÓÚñÑüÜ\s'-]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PASSWORD_RULES = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[^a-zA-Z0-9]"), "Password must contain at least one special character"),
)


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please enter a valid email address")
    return value


class RegisterRequest(BaseModel):
    """Payload for creating a customer account."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=256)
    password: str = Field(..., min_length=8, max_length=100)
    confirm_password: str

    @field_validator("first_name", "last_name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value or not NAME_PATTERN.match(value):
            raise ValueError("Names can only contain letters, spaces, hyphens, and apostrophes")
        return value

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return _normalize_email(value)

    @field_validator("password")
    @classmethod
    def _validate_password(cls, value: str) -> str:
        for pattern, message in PASSWORD_RULES:
            if not pattern.search(value):
                raise ValueError(message)
        return value

    @model_validator(mode="after")
    def _passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    """Credentials exchanged for an access token."""

    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return value.strip().lower()


class TokenResponse(BaseModel):
    """Access token returned upon successful authentication."""

    access_token: str
    token_type: str = "bearer"


class UserRead(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: UserRole
    created_at: datetime
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
