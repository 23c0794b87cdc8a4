"""Artwork API endpoints."""

import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from atelier.api.deps import get_artist_id, get_db
from atelier.api.errors import to_http_exception
from atelier.schemas.artwork import (
    STATUS_PATTERN,
    ArtworkCreate,
    ArtworkListResponse,
    ArtworkResponse,
    ArtworkUpdate,
)
from atelier.services.artwork_service import (
    build_artwork_response,
    create_artwork,
    delete_artwork,
    get_artwork,
    list_artworks,
    update_artwork,
)

router = APIRouter()


@router.post("", response_model=ArtworkResponse, status_code=status.HTTP_201_CREATED)
def create_new_artwork(
    artwork_data: ArtworkCreate,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """
    Create an artwork.

    - **status**: 'pending' (default) or 'draft'; pending artworks become
      available as soon as title, medium and dimensions are complete
    - **pricing**: Exactly one mode: fixed, negotiable or on_request
    - **edition**: Optional edition sizes
    - **catalogue_ids**: User catalogues to include the artwork in
    - **image_urls**: Source images; the first is primary

    Derived images are generated in the background.
    """
    try:
        artwork = create_artwork(db, artist_id, artwork_data)
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "create artwork")
    return build_artwork_response(artwork)


@router.get("", response_model=ArtworkListResponse)
def list_all_artworks(
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(20, ge=1, le=100, description="Page size"),
    status_filter: Optional[str] = Query(None, pattern=STATUS_PATTERN, description="Filter by status"),
    catalogue_id: Optional[str] = Query(None, description="Only artworks in this catalogue, in catalogue order"),
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """
    List artworks with pagination.

    - **page**: Page number (default: 1)
    - **size**: Page size (default: 20, max: 100)
    - **status_filter**: Optional status filter (draft, pending, available, on_hold, sold)
    - **catalogue_id**: Optional catalogue filter
    """
    try:
        items, total = list_artworks(db, artist_id, page, size, status_filter, catalogue_id)
    except Exception as e:
        raise to_http_exception(e, "list artworks")

    pages = math.ceil(total / size) if total > 0 else 1
    return ArtworkListResponse(items=items, total=total, page=page, size=size, pages=pages)


@router.get("/{artwork_id}", response_model=ArtworkResponse)
def get_one_artwork(
    artwork_id: str,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """Get artwork by ID."""
    try:
        artwork = get_artwork(db, artwork_id, artist_id)
    except Exception as e:
        raise to_http_exception(e, "get artwork")
    return build_artwork_response(artwork)


@router.put("/{artwork_id}", response_model=ArtworkResponse)
def update_one_artwork(
    artwork_id: str,
    artwork_data: ArtworkUpdate,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """
    Update an artwork.

    Omitted fields are left unchanged. Pass **expected_version** to reject
    the update with 409 if someone else saved in between.
    """
    try:
        artwork = update_artwork(db, artwork_id, artist_id, artwork_data)
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "update artwork")
    return build_artwork_response(artwork)


@router.delete("/{artwork_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_one_artwork(
    artwork_id: str,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """Delete an artwork with its images and catalogue memberships."""
    try:
        delete_artwork(db, artwork_id, artist_id)
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "delete artwork")
