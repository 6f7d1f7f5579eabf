"""API router for the genre catalog."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..security import require_admin
from ..services import GenreInUseError, GenreService, GenreServiceError

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[schemas.GenreRead])
def list_genres(db: Session = Depends(get_db)) -> List[schemas.GenreRead]:
    return GenreService.list_genres(db)


@router.post("", response_model=schemas.GenreRead, status_code=status.HTTP_201_CREATED)
def create_genre(payload: schemas.GenreCreate, db: Session = Depends(get_db)) -> schemas.GenreRead:
    try:
        genre = GenreService.create_genre(db, payload)
    except GenreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return GenreService.to_read(db, genre)


@router.get("/{genre_id}", response_model=schemas.GenreRead)
def get_genre(genre_id: int, db: Session = Depends(get_db)) -> schemas.GenreRead:
    genre = GenreService.get_genre(db, genre_id)
    if genre is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Genre not found")
    return GenreService.to_read(db, genre)


@router.put("/{genre_id}", response_model=schemas.GenreRead)
def update_genre(
    genre_id: int,
    payload: schemas.GenreUpdate,
    db: Session = Depends(get_db),
) -> schemas.GenreRead:
    genre = GenreService.get_genre(db, genre_id)
    if genre is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Genre not found")
    try:
        genre = GenreService.update_genre(db, genre, payload)
    except GenreServiceError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return GenreService.to_read(db, genre)


@router.delete("/{genre_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_genre(genre_id: int, db: Session = Depends(get_db)) -> None:
    genre = GenreService.get_genre(db, genre_id)
    if genre is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Genre not found")
    try:
        GenreService.delete_genre(db, genre)
    except GenreInUseError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
