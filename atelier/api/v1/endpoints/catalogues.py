"""Catalogue endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from atelier.api.deps import get_artist_id, get_db
from atelier.api.errors import to_http_exception
from atelier.schemas.catalogue import (
    CatalogueCreate,
    CatalogueDetailResponse,
    CatalogueOrderRequest,
    CatalogueResponse,
    CatalogueUpdate,
)
from atelier.services.catalogue_service import (
    build_catalogue_response,
    create_catalogue,
    delete_catalogue,
    get_catalogue_detail,
    list_catalogues,
    reorder_catalogue,
    update_catalogue,
)

router = APIRouter()


@router.get("", response_model=List[CatalogueResponse])
def list_all_catalogues(
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """List the artist's catalogues, system catalogue first."""
    return list_catalogues(db, artist_id)


@router.post("", response_model=CatalogueResponse, status_code=status.HTTP_201_CREATED)
def create_new_catalogue(
    catalogue_data: CatalogueCreate,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """
    Create a catalogue.

    - **title**: Catalogue title
    - **description**: Optional description
    - **is_published**: Visible to the public (default: true)
    """
    try:
        catalogue = create_catalogue(db, artist_id, catalogue_data)
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "create catalogue")
    return build_catalogue_response(catalogue)


@router.get("/{catalogue_id}", response_model=CatalogueDetailResponse)
def get_one_catalogue(
    catalogue_id: str,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """Get a catalogue with its artworks in display order."""
    try:
        return get_catalogue_detail(db, catalogue_id, artist_id)
    except Exception as e:
        raise to_http_exception(e, "get catalogue")


@router.put("/{catalogue_id}", response_model=CatalogueDetailResponse)
def update_one_catalogue(
    catalogue_id: str,
    catalogue_data: CatalogueUpdate,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """Update a catalogue. The system catalogue cannot be edited."""
    try:
        update_catalogue(db, catalogue_id, artist_id, catalogue_data)
        return get_catalogue_detail(db, catalogue_id, artist_id)
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "update catalogue")


@router.delete("/{catalogue_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_one_catalogue(
    catalogue_id: str,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """Delete a catalogue. Artworks in it are kept."""
    try:
        delete_catalogue(db, catalogue_id, artist_id)
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "delete catalogue")


@router.put("/{catalogue_id}/order", response_model=CatalogueDetailResponse)
def reorder_one_catalogue(
    catalogue_id: str,
    request: CatalogueOrderRequest,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """
    Set the display order of artworks in a catalogue.

    - **artwork_ids**: Every artwork in the catalogue, in the new order
    """
    try:
        reorder_catalogue(db, catalogue_id, artist_id, request.artwork_ids)
        return get_catalogue_detail(db, catalogue_id, artist_id)
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "reorder catalogue")
