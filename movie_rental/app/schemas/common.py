"""Shared schema definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, Sequence, TypeVar

from pydantic import BaseModel, Field

if TYPE_CHECKING:  # pragma: no cover
    from ..services.pagination import PageInfo

T = TypeVar("T")


class PageMeta(BaseModel):
    """Navigation metadata rendered next to every paged listing."""

    page_index: int
    page_size: int = Field(..., ge=1)
    total_count: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    has_previous_page: bool
    has_next_page: bool
    first_item_index: int
    last_item_index: int
    page_numbers: list[int]

    @classmethod
    def from_info(cls, info: PageInfo, *, window: int = 5) -> "PageMeta":
        return cls(
            page_index=info.page_index,
            page_size=info.page_size,
            total_count=info.total_count,
            total_pages=info.total_pages,
            has_previous_page=info.has_previous_page,
            has_next_page=info.has_next_page,
            first_item_index=info.first_item_index,
            last_item_index=info.last_item_index,
            page_numbers=list(info.page_numbers(window)),
        )


class PagedResponse(BaseModel, Generic[T]):
    """Standard shape for paged listings."""

    items: Sequence[T]
    meta: PageMeta
