"""API router for actors and crew members."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import require_admin
from ..services import PersonHasCreditsError, PersonNotFoundError, PersonService

router = APIRouter()


@router.get("", response_model=List[schemas.PersonSummary])
def list_people(
    db: Session = Depends(get_db),
    search: Optional[str] = Query(None, description="Filter by name"),
) -> List[schemas.PersonSummary]:
    return PersonService.list_people(db, search=search)


@router.get("/{person_id}", response_model=schemas.PersonDetail)
def get_person(person_id: int, db: Session = Depends(get_db)) -> schemas.PersonDetail:
    try:
        return PersonService.get_details(db, person_id)
    except PersonNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post(
    "",
    response_model=schemas.PersonRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_person(
    payload: schemas.PersonCreate, db: Session = Depends(get_db)
) -> schemas.PersonRead:
    return PersonService.create_person(db, payload)


@router.put(
    "/{person_id}",
    response_model=schemas.PersonRead,
    dependencies=[Depends(require_admin)],
)
def update_person(
    person_id: int,
    payload: schemas.PersonUpdate,
    db: Session = Depends(get_db),
) -> schemas.PersonRead:
    person = PersonService.get_person(db, person_id)
    if person is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Person not found")
    return PersonService.update_person(db, person, payload)


@router.delete(
    "/{person_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_person(person_id: int, db: Session = Depends(get_db)) -> None:
    person = PersonService.get_person(db, person_id)
    if person is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Person not found")
    try:
        PersonService.delete_person(db, person)
    except PersonHasCreditsError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
