"""Page slicing and navigation metadata for listing endpoints.

A :class:`Page` keeps the sliced items and the :class:`PageInfo` metadata as
two separate values. ``paginate`` issues exactly one count and one slice
against its source; both may observe slightly different snapshots of the
underlying table under concurrent writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, Protocol, Sequence, TypeVar

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

DEFAULT_PAGE_WINDOW = 5


class Sliceable(Protocol[T_co]):
    """Anything that can be counted and sliced, such as a SQLAlchemy ``Query``."""

    def count(self) -> int:
        ...

    def slice(self, start: int, stop: int) -> Iterable[T_co]:
        ...


class SequenceSource(Generic[T]):
    """Adapt an already materialized sequence to the :class:`Sliceable` protocol."""

    def __init__(self, items: Sequence[T]) -> None:
        self._items = items

    def count(self) -> int:
        return len(self._items)

    def slice(self, start: int, stop: int) -> Sequence[T]:
        return self._items[start:stop]


@dataclass(frozen=True)
class PageInfo:
    """Navigation metadata for one page of a result set.

    ``page_index`` is stored exactly as given; callers normalize it first.
    """

    page_index: int
    page_size: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_previous_page(self) -> bool:
        return self.page_index > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_index < self.total_pages

    @property
    def first_item_index(self) -> int:
        # Stays 1 for an empty first page.
        return (self.page_index - 1) * self.page_size + 1

    @property
    def last_item_index(self) -> int:
        return min(self.page_index * self.page_size, self.total_count)

    def page_numbers(self, window: int = DEFAULT_PAGE_WINDOW) -> range:
        """Return the page numbers to show in pagination controls.

        The window is centred on the current page and shifted left when it
        would run past the last page. Empty when there are no pages.
        """

        start_page = max(1, self.page_index - window // 2)
        end_page = min(self.total_pages, start_page + window - 1)
        if end_page - start_page + 1 < window:
            start_page = max(1, end_page - window + 1)
        return range(start_page, end_page + 1)


@dataclass(frozen=True)
class Page(Generic[T]):
    """A bounded slice of a larger result set plus its :class:`PageInfo`."""

    items: tuple[T, ...]
    info: PageInfo

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def paginate(source: Sliceable[T], page_index: int, page_size: int) -> Page[T]:
    """Count ``source`` and fetch the slice for ``page_index``.

    ``page_size`` is trusted as-is. Errors raised by the source propagate.
    """

    total_count = source.count()
    offset = max((page_index - 1) * page_size, 0)
    items = tuple(source.slice(offset, offset + page_size))
    return Page(
        items=items,
        info=PageInfo(page_index=page_index, page_size=page_size, total_count=total_count),
    )


def paginate_sequence(items: Sequence[T], page_index: int, page_size: int) -> Page[T]:
    """Paginate a list that has already been loaded into memory."""

    return paginate(SequenceSource(items), page_index, page_size)
