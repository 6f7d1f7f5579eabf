"""Shopping cart and simulated checkout for customers."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from .. import models, schemas
from .activity_log import log_user_action

LOGGER = logging.getLogger(__name__)


class CartServiceError(RuntimeError):
    """Raised when a cart operation cannot be completed."""


class CartItemNotFoundError(CartServiceError):
    """Raised when the movie or cart item does not exist for the caller."""


class MovieAlreadyInCartError(CartServiceError):
    """Raised when the movie is already waiting in the cart."""


class EmptyCartError(CartServiceError):
    """Raised when checking out a cart without items."""


class CartService:
    """Encapsulates cart maintenance for a single user."""

    @staticmethod
    def _find_item(db: Session, user_id: str, movie_id: int) -> Optional[models.CartItem]:
        return (
            db.query(models.CartItem)
            .filter(models.CartItem.user_id == user_id, models.CartItem.movie_id == movie_id)
            .first()
        )

    @staticmethod
    def _items(db: Session, user: models.User) -> List[models.CartItem]:
        return (
            db.query(models.CartItem)
            .options(selectinload(models.CartItem.movie).selectinload(models.Movie.genres))
            .filter(models.CartItem.user_id == user.id)
            .order_by(models.CartItem.added_at.desc(), models.CartItem.id.desc())
            .all()
        )

    @staticmethod
    def get_cart(db: Session, user: models.User) -> schemas.CartRead:
        items = CartService._items(db, user)
        total = sum((item.price_at_addition for item in items), Decimal("0"))
        return schemas.CartRead(
            items=[
                schemas.CartItemRead(
                    id=item.id,
                    movie_id=item.movie_id,
                    movie_title=item.movie.title,
                    release_year=item.movie.release_year,
                    price=item.price_at_addition,
                    added_at=item.added_at,
                    genres=item.movie.genre_names,
                )
                for item in items
            ],
            item_count=len(items),
            total=total,
        )

    @staticmethod
    def count(db: Session, user: models.User) -> int:
        return (
            db.query(func.count())
            .select_from(models.CartItem)
            .filter(models.CartItem.user_id == user.id)
            .scalar()
            or 0
        )

    @staticmethod
    def add_item(db: Session, user: models.User, movie_id: int) -> models.CartItem:
        movie = db.query(models.Movie).filter(models.Movie.id == movie_id).first()
        if movie is None:
            raise CartItemNotFoundError("Movie not found")

        duplicate_message = f"'{movie.title}' is already in your cart"
        if CartService._find_item(db, user.id, movie.id) is not None:
            raise MovieAlreadyInCartError(duplicate_message)

        item = models.CartItem(
            user_id=user.id,
            movie_id=movie.id,
            price_at_addition=movie.rental_price,
        )
        db.add(item)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise MovieAlreadyInCartError(duplicate_message) from exc
        db.refresh(item)
        log_user_action(user.id, "AddToCart", f"Added movie {movie.id} ({movie.title}) to cart")
        return item

    @staticmethod
    def remove_item(db: Session, user: models.User, cart_item_id: int) -> None:
        item = (
            db.query(models.CartItem)
            .filter(models.CartItem.id == cart_item_id, models.CartItem.user_id == user.id)
            .first()
        )
        if item is None:
            raise CartItemNotFoundError("Cart item not found")
        movie_id = item.movie_id
        db.delete(item)
        db.commit()
        log_user_action(user.id, "RemoveFromCart", f"Removed movie {movie_id} from cart")

    @staticmethod
    def clear(db: Session, user: models.User) -> int:
        removed = (
            db.query(models.CartItem)
            .filter(models.CartItem.user_id == user.id)
            .delete(synchronize_session=False)
        )
        db.commit()
        log_user_action(user.id, "ClearCart", f"Removed {removed} item(s) from cart")
        return removed

    @staticmethod
    def checkout(db: Session, user: models.User) -> schemas.CheckoutSummary:
        items = CartService._items(db, user)
        if not items:
            raise EmptyCartError("Your cart is empty")

        total = sum((item.price_at_addition for item in items), Decimal("0"))
        movie_count = len(items)
        for item in items:
            db.delete(item)
        db.commit()

        log_user_action(
            user.id,
            "Checkout",
            f"Checked out {movie_count} movie(s) for a total of {total:.2f}",
        )
        LOGGER.info("User %s completed checkout of %s movie(s)", user.id, movie_count)
        return schemas.CheckoutSummary(
            movie_count=movie_count,
            total=total,
            message=f"Successfully rented {movie_count} movie(s) for ${total:.2f}",
        )
