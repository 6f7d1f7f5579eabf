import math

import pytest

from movie_rental.app import models
from movie_rental.app.services.pagination import (
    Page,
    PageInfo,
    SequenceSource,
    paginate,
    paginate_sequence,
)


class FailingSource:
    def count(self) -> int:
        raise ConnectionError("catalog unavailable")

    def slice(self, start: int, stop: int):
        raise AssertionError("slice should not be reached")


class RecordingSource(SequenceSource):
    def __init__(self, items):
        super().__init__(items)
        self.calls = []

    def count(self) -> int:
        self.calls.append("count")
        return super().count()

    def slice(self, start: int, stop: int):
        self.calls.append(("slice", start, stop))
        return super().slice(start, stop)


def test_first_page_of_hundred_items():
    page = paginate_sequence(list(range(1, 101)), 1, 10)

    assert len(page) == 10
    assert page.info.total_pages == 10
    assert page.info.has_previous_page is False
    assert page.info.has_next_page is True


def test_middle_page_contains_ranked_items():
    page = paginate_sequence(list(range(1, 101)), 5, 10)

    assert list(page) == list(range(41, 51))
    assert page.info.has_previous_page is True
    assert page.info.has_next_page is True
    assert page.info.first_item_index == 41
    assert page.info.last_item_index == 50


def test_last_partial_page():
    page = paginate_sequence(list(range(95)), 10, 10)

    assert len(page.items) == 5
    assert page.info.has_next_page is False
    assert page.info.last_item_index == 95


def test_empty_source_keeps_first_item_index_formula():
    page = paginate_sequence([], 1, 10)

    assert page.items == ()
    assert page.info.total_count == 0
    assert page.info.total_pages == 0
    assert page.info.has_previous_page is False
    assert page.info.has_next_page is False
    assert page.info.first_item_index == 1
    assert page.info.last_item_index == 0
    assert list(page.info.page_numbers()) == []


def test_page_number_window_is_centred():
    info = PageInfo(page_index=5, page_size=10, total_count=100)

    assert list(info.page_numbers(5)) == [3, 4, 5, 6, 7]


@pytest.mark.parametrize(
    ("page_index", "total_count", "expected"),
    [
        (1, 100, [1, 2, 3, 4, 5]),
        (2, 100, [1, 2, 3, 4, 5]),
        (9, 100, [6, 7, 8, 9, 10]),
        (10, 100, [6, 7, 8, 9, 10]),
        (1, 20, [1, 2]),
        (2, 30, [1, 2, 3]),
    ],
)
def test_page_number_window_shifts_near_edges(page_index, total_count, expected):
    info = PageInfo(page_index=page_index, page_size=10, total_count=total_count)

    assert list(info.page_numbers()) == expected


def test_offset_past_end_returns_empty_page():
    page = paginate_sequence(list(range(30)), 7, 10)

    assert page.items == ()
    assert page.info.page_index == 7
    assert page.info.total_pages == 3
    assert page.info.has_previous_page is True
    assert page.info.has_next_page is False


def test_non_positive_index_is_stored_but_offset_is_floored():
    page = paginate_sequence(list(range(30)), 0, 10)

    assert list(page) == list(range(10))
    assert page.info.page_index == 0


@pytest.mark.parametrize("total_count", [0, 1, 9, 10, 11, 99, 100, 101])
def test_total_pages_matches_ceiling(total_count):
    info = PageInfo(page_index=1, page_size=10, total_count=total_count)

    assert info.total_pages == math.ceil(total_count / 10)
    assert (info.total_pages == 0) == (total_count == 0)


def test_paginate_issues_one_count_and_one_slice():
    source = RecordingSource(list(range(50)))

    paginate(source, 3, 12)

    assert source.calls == ["count", ("slice", 24, 36)]


def test_paginate_is_idempotent():
    items = list(range(37))

    assert paginate_sequence(items, 2, 12) == paginate_sequence(items, 2, 12)


def test_concatenated_pages_reproduce_source():
    items = [f"movie-{index}" for index in range(53)]
    first = paginate_sequence(items, 1, 6)

    collected = []
    for page_index in range(1, first.info.total_pages + 1):
        collected.extend(paginate_sequence(items, page_index, 6))

    assert collected == items


def test_source_failures_propagate():
    with pytest.raises(ConnectionError):
        paginate(FailingSource(), 1, 12)


def test_page_keeps_items_and_metadata_apart():
    page = paginate_sequence(["a", "b", "c"], 1, 2)

    assert isinstance(page, Page)
    assert not isinstance(page, list)
    assert page.items == ("a", "b")
    assert page.info == PageInfo(page_index=1, page_size=2, total_count=3)


def test_paginate_accepts_sqlalchemy_query(db_session):
    db_session.add_all(models.Genre(name=f"Genre {letter}") for letter in "ABCDEFG")
    db_session.commit()

    query = db_session.query(models.Genre).order_by(models.Genre.name.asc())
    page = paginate(query, 2, 3)

    assert [genre.name for genre in page] == ["Genre D", "Genre E", "Genre F"]
    assert page.info.total_count == 7
    assert page.info.total_pages == 3
