"""API router for managing the cast and crew of a movie."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import require_admin
from ..services import CreditNotFoundError, CreditService, DuplicateCreditError

router = APIRouter(dependencies=[Depends(require_admin)])


def _not_found(exc: CreditNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/credits/crew-roles", response_model=List[str])
def list_crew_roles() -> List[str]:
    return list(schemas.PREDEFINED_CREW_ROLES)


@router.get("/movies/{movie_id}/credits", response_model=schemas.MovieCredits)
def get_movie_credits(movie_id: int, db: Session = Depends(get_db)) -> schemas.MovieCredits:
    try:
        return CreditService.get_credits(db, movie_id)
    except CreditNotFoundError as exc:
        raise _not_found(exc) from exc


@router.get("/movies/{movie_id}/credits/available-cast", response_model=schemas.AvailableCast)
def get_available_cast(movie_id: int, db: Session = Depends(get_db)) -> schemas.AvailableCast:
    try:
        return CreditService.available_cast(db, movie_id)
    except CreditNotFoundError as exc:
        raise _not_found(exc) from exc


@router.post(
    "/movies/{movie_id}/credits/cast",
    response_model=schemas.MovieCredits,
    status_code=status.HTTP_201_CREATED,
)
def add_cast_member(
    movie_id: int,
    payload: schemas.CastCreate,
    db: Session = Depends(get_db),
) -> schemas.MovieCredits:
    try:
        CreditService.add_cast(db, movie_id, payload)
    except CreditNotFoundError as exc:
        raise _not_found(exc) from exc
    except DuplicateCreditError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return CreditService.get_credits(db, movie_id)


@router.put("/movies/{movie_id}/credits/cast/{person_id}", response_model=schemas.MovieCredits)
def update_cast_member(
    movie_id: int,
    person_id: int,
    payload: schemas.CastUpdate,
    db: Session = Depends(get_db),
) -> schemas.MovieCredits:
    try:
        CreditService.update_cast(db, movie_id, person_id, payload)
    except CreditNotFoundError as exc:
        raise _not_found(exc) from exc
    return CreditService.get_credits(db, movie_id)


@router.delete(
    "/movies/{movie_id}/credits/cast/{person_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def remove_cast_member(movie_id: int, person_id: int, db: Session = Depends(get_db)) -> None:
    try:
        CreditService.remove_cast(db, movie_id, person_id)
    except CreditNotFoundError as exc:
        raise _not_found(exc) from exc


@router.post(
    "/movies/{movie_id}/credits/crew",
    response_model=schemas.MovieCredits,
    status_code=status.HTTP_201_CREATED,
)
def add_crew_member(
    movie_id: int,
    payload: schemas.CrewCreate,
    db: Session = Depends(get_db),
) -> schemas.MovieCredits:
    try:
        CreditService.add_crew(db, movie_id, payload)
    except CreditNotFoundError as exc:
        raise _not_found(exc) from exc
    except DuplicateCreditError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return CreditService.get_credits(db, movie_id)


@router.delete(
    "/movies/{movie_id}/credits/crew/{person_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def remove_crew_member(
    movie_id: int,
    person_id: int,
    role: str = Query(..., min_length=1, description="Crew role to remove"),
    db: Session = Depends(get_db),
) -> None:
    try:
        CreditService.remove_crew(db, movie_id, person_id, role)
    except CreditNotFoundError as exc:
        raise _not_found(exc) from exc
