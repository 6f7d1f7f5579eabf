from decimal import Decimal

import pytest

from movie_rental.app import models
from movie_rental.app.services.movie_search import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE,
    MovieQuerySpec,
    SearchCriteria,
    SortDirection,
    SortField,
    build_movie_query,
)
from movie_rental.app.services.pagination import paginate


def _titles(db_session, **criteria):
    query = build_movie_query(SearchCriteria.create(**criteria))
    return [movie.title for movie in query.bind(db_session).all()]


@pytest.mark.parametrize("page", [None, 0, -3])
def test_non_positive_page_becomes_first_page(page):
    assert SearchCriteria.create(page=page).page == 1


def test_huge_page_is_capped_to_a_storable_offset():
    criteria = SearchCriteria.create(page=10**19, page_size=48)

    assert criteria.page == MAX_PAGE
    assert (criteria.page - 1) * criteria.page_size < 2**63


@pytest.mark.parametrize("page_size", [None, 0, 5, 10, 13, 100])
def test_page_size_outside_allow_list_falls_back(page_size):
    assert SearchCriteria.create(page_size=page_size).page_size == DEFAULT_PAGE_SIZE


@pytest.mark.parametrize("page_size", [6, 12, 24, 48])
def test_allowed_page_sizes_are_kept(page_size):
    assert SearchCriteria.create(page_size=page_size).page_size == page_size


def test_blank_search_term_is_not_an_active_filter():
    criteria = SearchCriteria.create(search_term="   ")

    assert criteria.search_term is None
    assert criteria.has_active_filters is False


def test_any_filter_marks_criteria_active():
    assert SearchCriteria.create(price_to=Decimal("3")).has_active_filters is True
    assert SearchCriteria.create(genre_id=4).has_active_filters is True


def test_sort_values_are_parsed_case_insensitively():
    criteria = SearchCriteria.create(sort_by="YEAR", sort_order="Asc")

    assert criteria.sort_by is SortField.YEAR
    assert criteria.sort_order is SortDirection.ASC


def test_unknown_sort_values_are_treated_as_absent():
    criteria = SearchCriteria.create(sort_by="rating", sort_order="sideways")

    assert criteria.sort_by is None
    assert criteria.sort_order is None
    assert criteria.effective_sort_by is SortField.CREATED
    assert criteria.effective_sort_order is SortDirection.DESC


def test_build_movie_query_does_not_touch_the_database():
    query = build_movie_query(SearchCriteria.create())

    assert isinstance(query, MovieQuerySpec)
    assert query.filters == ()
    assert len(query.order_by) == 2


def test_default_order_is_newest_first(db_session, catalog):
    assert _titles(db_session) == [
        "The Matrix",
        "The Dark Knight",
        "The Shawshank Redemption",
        "Pulp Fiction",
        "Inception",
    ]


def test_direction_without_field_keeps_default_order(db_session, catalog):
    assert _titles(db_session, sort_order="asc") == _titles(db_session)


def test_created_ascending(db_session, catalog):
    assert _titles(db_session, sort_by="created", sort_order="asc")[0] == "Inception"


def test_year_defaults_to_descending(db_session, catalog):
    assert _titles(db_session, sort_by="year") == [
        "Inception",
        "The Dark Knight",
        "The Matrix",
        "The Shawshank Redemption",
        "Pulp Fiction",
    ]


def test_year_ascending_when_requested(db_session, catalog):
    assert _titles(db_session, sort_by="year", sort_order="asc") == [
        "Pulp Fiction",
        "The Shawshank Redemption",
        "The Matrix",
        "The Dark Knight",
        "Inception",
    ]


def test_title_defaults_to_ascending(db_session, catalog):
    titles = _titles(db_session, sort_by="title")

    assert titles == sorted(titles)
    assert _titles(db_session, sort_by="title", sort_order="desc") == list(reversed(titles))


def test_price_sort_breaks_ties_by_id(db_session, catalog):
    assert _titles(db_session, sort_by="price") == [
        "Pulp Fiction",
        "The Shawshank Redemption",
        "The Matrix",
        "Inception",
        "The Dark Knight",
    ]


def test_duration_sort(db_session, catalog):
    assert _titles(db_session, sort_by="duration") == [
        "The Matrix",
        "The Shawshank Redemption",
        "Inception",
        "The Dark Knight",
        "Pulp Fiction",
    ]
    assert _titles(db_session, sort_by="duration", sort_order="desc")[0] == "Pulp Fiction"


def test_search_term_matches_title_or_synopsis_case_insensitively(db_session, catalog):
    assert _titles(db_session, search_term="KNIGHT") == ["The Dark Knight"]
    assert _titles(db_session, search_term="dream-sharing") == ["Inception"]


def test_search_term_matches_original_title_alone(db_session, catalog):
    matrix = catalog["movies"]["The Matrix"]
    matrix.original_title = "Matriks Asli"
    matrix.synopsis = None
    db_session.commit()

    assert _titles(db_session, search_term="matriks") == ["The Matrix"]


def test_search_term_surrounding_spaces_are_significant(db_session, catalog):
    assert SearchCriteria.create(search_term=" Knight").search_term == " Knight"
    assert _titles(db_session, search_term=" knight") == ["The Dark Knight"]
    assert _titles(db_session, search_term="knight ") == []


def test_search_term_wildcards_are_literal(db_session, catalog):
    assert _titles(db_session, search_term="%") == []
    assert _titles(db_session, search_term="_") == []


def test_genre_filter_returns_only_tagged_movie(db_session, catalog):
    noir = models.Genre(name="Noir")
    db_session.add(noir)
    catalog["movies"]["The Shawshank Redemption"].genres.append(noir)
    db_session.commit()

    assert _titles(db_session, genre_id=noir.id) == ["The Shawshank Redemption"]


def test_unknown_genre_yields_no_results(db_session, catalog):
    assert _titles(db_session, genre_id=99_999) == []


def test_year_and_price_bounds_are_inclusive(db_session, catalog):
    assert sorted(_titles(db_session, year_from=1994, year_to=1999)) == [
        "Pulp Fiction",
        "The Matrix",
        "The Shawshank Redemption",
    ]
    assert sorted(
        _titles(db_session, price_from=Decimal("4.99"), price_to=Decimal("4.99"))
    ) == ["Inception", "The Dark Knight"]


def test_filters_are_combined(db_session, catalog):
    action = catalog["genres"]["Action"]

    assert sorted(_titles(db_session, genre_id=action.id, year_from=2000)) == [
        "Inception",
        "The Dark Knight",
    ]


def test_paged_search_covers_every_match_once(db_session, catalog):
    criteria = SearchCriteria.create(sort_by="year", page_size=6)
    query = build_movie_query(criteria).bind(db_session)
    expected = [movie.id for movie in query.all()]

    collected = []
    first = paginate(query, 1, 2)
    for page_index in range(1, first.info.total_pages + 1):
        collected.extend(movie.id for movie in paginate(query, page_index, 2))

    assert collected == expected
    assert first.info.total_count == 5
