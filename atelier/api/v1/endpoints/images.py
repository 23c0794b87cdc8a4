"""Artwork image endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from atelier.api.deps import get_artist_id, get_db
from atelier.api.errors import to_http_exception
from atelier.schemas.artwork import ArtworkImageCreate, ArtworkResponse, ImageOrderRequest
from atelier.services.artwork_service import (
    add_image,
    build_artwork_response,
    remove_image,
    reorder_images,
    set_primary_image,
)

router = APIRouter()


@router.post(
    "/{artwork_id}/images",
    response_model=ArtworkResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_artwork_image(
    artwork_id: str,
    image_data: ArtworkImageCreate,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """
    Add an image to an artwork.

    - **image_url**: Source image URL
    - **make_primary**: Put the image first (default: append)
    - **expected_version**: Reject the change if the artwork moved on
    """
    try:
        artwork = add_image(
            db,
            artwork_id,
            artist_id,
            image_data.image_url,
            make_primary=image_data.make_primary,
            expected_version=image_data.expected_version,
        )
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "add image")
    return build_artwork_response(artwork)


@router.delete("/{artwork_id}/images/{image_id}", response_model=ArtworkResponse)
def remove_artwork_image(
    artwork_id: str,
    image_id: str,
    expected_version: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """Remove an image; the next image becomes primary."""
    try:
        artwork = remove_image(
            db, artwork_id, artist_id, image_id, expected_version=expected_version
        )
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "remove image")
    return build_artwork_response(artwork)


@router.put("/{artwork_id}/images/order", response_model=ArtworkResponse)
def reorder_artwork_images(
    artwork_id: str,
    request: ImageOrderRequest,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """Reorder images. The first image listed becomes primary."""
    try:
        artwork = reorder_images(
            db, artwork_id, artist_id, request.image_ids, expected_version=request.expected_version
        )
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "reorder images")
    return build_artwork_response(artwork)


@router.post("/{artwork_id}/images/{image_id}/primary", response_model=ArtworkResponse)
def make_primary_image(
    artwork_id: str,
    image_id: str,
    expected_version: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """Make an image the primary one."""
    try:
        artwork = set_primary_image(
            db, artwork_id, artist_id, image_id, expected_version=expected_version
        )
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "set primary image")
    return build_artwork_response(artwork)
