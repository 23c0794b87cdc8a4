"""Artist endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from atelier.api.deps import get_db
from atelier.schemas.artist import ArtistCreate, ArtistResponse, ArtistUpdate
from atelier.services.artist_service import (
    ArtistNotFoundError,
    create_artist,
    get_artist,
    list_artists,
    update_artist,
)

router = APIRouter()


@router.get("", response_model=List[ArtistResponse])
def list_all_artists(db: Session = Depends(get_db)):
    """List all artists."""
    return list_artists(db)


@router.post("", response_model=ArtistResponse, status_code=status.HTTP_201_CREATED)
def create_new_artist(
    artist_data: ArtistCreate,
    db: Session = Depends(get_db),
):
    """
    Create a new artist.

    - **display_name**: Public name, also embedded in watermarks

    The artist's "Available Work" system catalogue is created alongside.
    """
    return create_artist(db, artist_data.display_name)


@router.get("/{artist_id}", response_model=ArtistResponse)
def get_one_artist(
    artist_id: str,
    db: Session = Depends(get_db),
):
    """Get artist by ID."""
    try:
        return get_artist(db, artist_id)
    except ArtistNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{artist_id}", response_model=ArtistResponse)
def update_one_artist(
    artist_id: str,
    artist_data: ArtistUpdate,
    db: Session = Depends(get_db),
):
    """
    Update artist.

    - **display_name**: New display name (optional); triggers watermark regeneration
    """
    try:
        artist, _ = update_artist(db, artist_id, display_name=artist_data.display_name)
        return artist
    except ArtistNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
