"""API router for browsing and maintaining the movie catalog."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import require_admin
from ..services import (
    DuplicateMovieError,
    MovieNotFoundError,
    MovieService,
    MovieServiceError,
    SearchCriteria,
)

router = APIRouter()


@router.get("", response_model=schemas.MovieSearchResponse)
def search_movies(
    db: Session = Depends(get_db),
    search_term: Optional[str] = Query(None, description="Matches title, original title or synopsis"),
    genre_id: Optional[int] = Query(None, description="Only movies tagged with this genre"),
    year_from: Optional[int] = Query(None, description="Earliest release year"),
    year_to: Optional[int] = Query(None, description="Latest release year"),
    price_from: Optional[Decimal] = Query(None, description="Minimum rental price"),
    price_to: Optional[Decimal] = Query(None, description="Maximum rental price"),
    sort_by: Optional[str] = Query(None, description="title, year, price, duration or created"),
    sort_order: Optional[str] = Query(None, description="asc or desc"),
    page: Optional[int] = Query(1, description="1-based page number"),
    page_size: Optional[int] = Query(12, description="One of 6, 12, 24 or 48"),
) -> schemas.MovieSearchResponse:
    criteria = SearchCriteria.create(
        search_term=search_term,
        genre_id=genre_id,
        year_from=year_from,
        year_to=year_to,
        price_from=price_from,
        price_to=price_to,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
    )
    result = MovieService.search(db, criteria)
    return schemas.MovieSearchResponse(
        items=[schemas.MovieSummary.model_validate(movie) for movie in result.items],
        meta=schemas.PageMeta.from_info(result.info),
        filters=schemas.MovieSearchFilters(
            search_term=criteria.search_term,
            genre_id=criteria.genre_id,
            year_from=criteria.year_from,
            year_to=criteria.year_to,
            price_from=criteria.price_from,
            price_to=criteria.price_to,
            sort_by=criteria.effective_sort_by.value,
            sort_order=criteria.effective_sort_order.value,
            page=criteria.page,
            page_size=criteria.page_size,
            has_active_filters=criteria.has_active_filters,
        ),
    )


@router.get("/search-options", response_model=schemas.MovieSearchOptions)
def get_search_options(db: Session = Depends(get_db)) -> schemas.MovieSearchOptions:
    return MovieService.search_options(db)


@router.get("/{movie_id}", response_model=schemas.MovieDetail)
def get_movie(movie_id: int, db: Session = Depends(get_db)) -> schemas.MovieDetail:
    try:
        return MovieService.get_details(db, movie_id)
    except MovieNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post(
    "",
    response_model=schemas.MovieRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_movie(
    payload: schemas.MovieCreate, db: Session = Depends(get_db)
) -> schemas.MovieRead:
    try:
        return MovieService.create_movie(db, payload)
    except DuplicateMovieError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except MovieServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.put(
    "/{movie_id}",
    response_model=schemas.MovieRead,
    dependencies=[Depends(require_admin)],
)
def update_movie(
    movie_id: int,
    payload: schemas.MovieUpdate,
    db: Session = Depends(get_db),
) -> schemas.MovieRead:
    movie = MovieService.get_movie(db, movie_id)
    if movie is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    try:
        return MovieService.update_movie(db, movie, payload)
    except DuplicateMovieError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except MovieServiceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete(
    "/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_movie(movie_id: int, db: Session = Depends(get_db)) -> None:
    movie = MovieService.get_movie(db, movie_id)
    if movie is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    MovieService.delete_movie(db, movie)
