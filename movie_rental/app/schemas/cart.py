from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field


class CartItemCreate(BaseModel):
    movie_id: int = Field(..., ge=1)


class CartItemRead(BaseModel):
    id: int
    movie_id: int
    movie_title: str
    release_year: int
    price: Decimal
    added_at: datetime
    genres: List[str] = Field(default_factory=list)


class CartRead(BaseModel):
    items: List[CartItemRead]
    item_count: int
    total: Decimal


class CartCount(BaseModel):
    count: int


class CheckoutSummary(BaseModel):
    movie_count: int
    total: Decimal
    message: str
