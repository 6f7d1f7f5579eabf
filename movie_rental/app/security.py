"""Password hashing, bearer tokens and the authorization dependencies."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import os
import secrets
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from . import models
from .database import get_db

JWT_SECRET_ENV = "MOVIE_RENTAL_JWT_SECRET"
ACCESS_TOKEN_EXPIRE_MINUTES_ENV = "ACCESS_TOKEN_EXPIRE_MINUTES"

PBKDF2_DEFAULT_ITERATIONS = 390_000
DEFAULT_TOKEN_MINUTES = 60

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


class SecurityConfigurationError(RuntimeError):
    """Raised when mandatory security settings are missing or invalid."""


def _read_env_var(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise SecurityConfigurationError(f"Environment variable '{name}' is required")
    return value


def generate_password_hash(password: str, *, iterations: int = PBKDF2_DEFAULT_ITERATIONS) -> str:
    """Return a PBKDF2-based password hash string."""

    if not password:
        raise ValueError("password must not be empty")
    salt = secrets.token_bytes(16)
    derived = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    components = (
        str(iterations),
        base64.urlsafe_b64encode(salt).decode("ascii"),
        base64.urlsafe_b64encode(derived).decode("ascii"),
    )
    return "$".join(components)


def _split_password_hash(stored_hash: str) -> tuple[int, bytes, bytes]:
    try:
        iterations_str, salt_b64, hash_b64 = stored_hash.split("$")
        iterations = int(iterations_str)
        salt = base64.urlsafe_b64decode(salt_b64)
        digest = base64.urlsafe_b64decode(hash_b64)
    except (ValueError, binascii.Error) as exc:
        raise SecurityConfigurationError("Stored password hash is invalid") from exc
    return iterations, salt, digest


def verify_password(password: str, stored_hash: str) -> bool:
    """Verify a password against a stored PBKDF2 hash."""

    iterations, salt, digest = _split_password_hash(stored_hash)
    candidate = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return hmac.compare_digest(candidate, digest)


@lru_cache(maxsize=1)
def _load_jwt_key() -> bytes:
    raw_secret = _read_env_var(JWT_SECRET_ENV)
    try:
        return base64.urlsafe_b64decode(raw_secret)
    except (ValueError, binascii.Error):
        return raw_secret.encode("utf-8")


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _invalid_token(detail: str = "Invalid token") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _encode_jwt(payload: dict[str, Any], key: bytes) -> str:
    header = {"typ": "JWT", "alg": "HS256"}
    header_b64 = _b64url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    signature = hmac.new(key, signing_input, hashlib.sha256).digest()
    return f"{header_b64}.{payload_b64}.{_b64url_encode(signature)}"


def _decode_jwt(token: str, key: bytes) -> dict[str, Any]:
    try:
        header_b64, payload_b64, signature_b64 = token.split(".")
        signature = _b64url_decode(signature_b64)
    except (ValueError, binascii.Error) as exc:
        raise _invalid_token() from exc

    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    expected_signature = hmac.new(key, signing_input, hashlib.sha256).digest()
    if not hmac.compare_digest(signature, expected_signature):
        raise _invalid_token()

    payload_data = json.loads(_b64url_decode(payload_b64).decode("utf-8"))
    if payload_data.get("exp") is None:
        raise _invalid_token()
    expires_at = datetime.fromtimestamp(int(payload_data["exp"]), tz=timezone.utc)
    if datetime.now(timezone.utc) >= expires_at:
        raise _invalid_token("Token expired")
    return payload_data


def _resolve_access_token_expiry() -> timedelta:
    raw = os.getenv(ACCESS_TOKEN_EXPIRE_MINUTES_ENV)
    if not raw:
        return timedelta(minutes=DEFAULT_TOKEN_MINUTES)
    try:
        minutes = int(raw)
    except ValueError as exc:
        raise SecurityConfigurationError("ACCESS_TOKEN_EXPIRE_MINUTES must be an integer") from exc
    if minutes <= 0:
        raise SecurityConfigurationError("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
    return timedelta(minutes=minutes)


def create_access_token(user: models.User) -> str:
    key = _load_jwt_key()
    expiry = datetime.now(timezone.utc) + _resolve_access_token_expiry()
    payload: dict[str, Any] = {
        "sub": str(user.id),
        "role": models.UserRole(user.role).value,
        "exp": int(expiry.timestamp()),
    }
    return _encode_jwt(payload, key)


def get_current_user(
    request: Request,
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> models.User:
    """Resolve the bearer token to a stored user."""

    payload = _decode_jwt(token, _load_jwt_key())
    user_id = payload.get("sub")
    if not isinstance(user_id, str):
        raise _invalid_token()
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if user is None:
        raise _invalid_token()
    request.state.user_email = user.email
    return user


def require_admin(user: models.User = Depends(get_current_user)) -> models.User:
    """FastAPI dependency that ensures the caller holds the admin role."""

    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Administrator role required")
    return user
