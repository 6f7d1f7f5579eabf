"""API router for the caller's shopping cart."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..database import get_db
from ..security import get_current_user
from ..services import (
    CartItemNotFoundError,
    CartService,
    EmptyCartError,
    MovieAlreadyInCartError,
)

router = APIRouter()


@router.get("", response_model=schemas.CartRead)
def get_cart(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
) -> schemas.CartRead:
    return CartService.get_cart(db, user)


@router.get("/count", response_model=schemas.CartCount)
def get_cart_count(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
) -> schemas.CartCount:
    return schemas.CartCount(count=CartService.count(db, user))


@router.post("/items", response_model=schemas.CartRead, status_code=status.HTTP_201_CREATED)
def add_to_cart(
    payload: schemas.CartItemCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
) -> schemas.CartRead:
    try:
        CartService.add_item(db, user, payload.movie_id)
    except MovieAlreadyInCartError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except CartItemNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return CartService.get_cart(db, user)


@router.delete("/items/{cart_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_cart(
    cart_item_id: int,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
) -> None:
    try:
        CartService.remove_item(db, user, cart_item_id)
    except CartItemNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
) -> None:
    CartService.clear(db, user)


@router.post("/checkout", response_model=schemas.CheckoutSummary)
def checkout(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
) -> schemas.CheckoutSummary:
    try:
        return CartService.checkout(db, user)
    except EmptyCartError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
