"""Registration and token endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import get_db
from ..security import create_access_token, get_current_user
from ..services import (
    AccountLockedError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    UserService,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=schemas.UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.RegisterRequest, db: Session = Depends(get_db)) -> schemas.UserRead:
    """Create a customer account."""

    try:
        return UserService.register(db, payload)
    except EmailAlreadyRegisteredError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.post("/token", response_model=schemas.TokenResponse)
def obtain_access_token(
    payload: schemas.LoginRequest, db: Session = Depends(get_db)
) -> schemas.TokenResponse:
    """Authenticate a user and return an access token."""

    try:
        user = UserService.authenticate(db, payload.email, payload.password)
    except AccountLockedError as exc:
        raise HTTPException(status_code=status.HTTP_423_LOCKED, detail=str(exc)) from exc
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    return schemas.TokenResponse(access_token=create_access_token(user))


@router.get("/me", response_model=schemas.UserRead)
def read_current_user(user: models.User = Depends(get_current_user)) -> schemas.UserRead:
    return user
