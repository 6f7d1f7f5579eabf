"""Models for application users and their shopping carts."""

from __future__ import annotations

import enum
import uuid

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship

from ..database import Base


class UserRole(str, enum.Enum):
    """Authorization role granted to a user."""

    ADMIN = "admin"
    CUSTOMER = "customer"


class User(Base):
    """A registered account able to rent movies."""

    __tablename__ = "users"

    id = Column("user_id", Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(256), nullable=False, unique=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            UserRole,
            name="user_role_enum",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=UserRole.CUSTOMER,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    failed_login_attempts = Column(Integer, nullable=False, default=0, server_default="0")
    locked_until = Column(DateTime(timezone=True), nullable=True)

    cart_items = relationship(
        "CartItem",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class CartItem(Base):
    """A movie waiting in a user's cart, priced when it was added."""

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="cart_items_user_movie_unique"),
    )

    id = Column("cart_item_id", Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Uuid(as_uuid=False),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    movie_id = Column(
        Integer,
        ForeignKey("movies.movie_id", ondelete="CASCADE"),
        nullable=False,
    )
    price_at_addition = Column(Numeric(10, 2), nullable=False)
    added_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="cart_items")
    movie = relationship("Movie")
