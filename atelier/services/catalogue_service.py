"""Catalogue business logic service."""

import logging
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from atelier.models.artist import Artist
from atelier.models.artwork_catalogue import ArtworkCatalogue
from atelier.models.catalogue import Catalogue
from atelier.schemas.catalogue import (
    CatalogueCreate,
    CatalogueDetailResponse,
    CatalogueResponse,
    CatalogueUpdate,
)
from atelier.services.slug_service import generate_unique_slug

logger = logging.getLogger(__name__)

SYSTEM_CATALOGUE_TITLE = "Available Work"
SYSTEM_CATALOGUE_DESCRIPTION = "All currently available and sold work."


class CatalogueServiceError(Exception):
    """Base exception for catalogue service errors."""
    pass


class CatalogueNotFoundError(CatalogueServiceError):
    """Catalogue not found."""
    pass


class SystemCatalogueLockedError(CatalogueServiceError):
    """The system catalogue cannot be edited by hand."""
    pass


class InvalidCatalogueOrderError(CatalogueServiceError):
    """Submitted order does not match the catalogue's artworks."""
    pass


def get_system_catalogue(db: Session, artist_id: str) -> Optional[Catalogue]:
    """Get the artist's system catalogue, if it exists."""
    return db.query(Catalogue).filter(
        Catalogue.artist_id == artist_id,
        Catalogue.is_system_catalogue == True,  # noqa: E712
    ).first()


def ensure_system_catalogue(db: Session, artist: Artist) -> Catalogue:
    """
    Get or create the artist's system catalogue.

    Does not commit; the caller owns the transaction.
    """
    catalogue = get_system_catalogue(db, artist.id)
    if catalogue:
        return catalogue

    catalogue = Catalogue(
        artist_id=artist.id,
        title=SYSTEM_CATALOGUE_TITLE,
        description=SYSTEM_CATALOGUE_DESCRIPTION,
        slug=generate_unique_slug(db, f"{artist.slug} {SYSTEM_CATALOGUE_TITLE}", "catalogues"),
        is_system_catalogue=True,
        is_published=True,
    )
    db.add(catalogue)
    db.flush()
    logger.info(f"Created system catalogue {catalogue.id} for artist {artist.id}")
    return catalogue


def owned_catalogue_ids(db: Session, artist_id: str) -> List[str]:
    """IDs of every catalogue owned by the artist, system catalogue included."""
    rows = db.query(Catalogue.id).filter(Catalogue.artist_id == artist_id).all()
    return [row.id for row in rows]


def get_catalogue(db: Session, catalogue_id: str, artist_id: str) -> Catalogue:
    """
    Get catalogue by ID and owner.

    Raises:
        CatalogueNotFoundError: If catalogue not found
    """
    catalogue = db.query(Catalogue).filter(
        Catalogue.id == catalogue_id,
        Catalogue.artist_id == artist_id,
    ).first()

    if not catalogue:
        raise CatalogueNotFoundError(f"Catalogue {catalogue_id} not found")

    return catalogue


def _artwork_counts(db: Session, catalogue_ids: List[str]) -> Dict[str, int]:
    if not catalogue_ids:
        return {}
    rows = (
        db.query(ArtworkCatalogue.catalogue_id, func.count(ArtworkCatalogue.id))
        .filter(ArtworkCatalogue.catalogue_id.in_(catalogue_ids))
        .group_by(ArtworkCatalogue.catalogue_id)
        .all()
    )
    return {catalogue_id: count for catalogue_id, count in rows}


def build_catalogue_response(catalogue: Catalogue, artwork_count: int = 0) -> CatalogueResponse:
    response = CatalogueResponse.model_validate(catalogue)
    response.artwork_count = artwork_count
    return response


def list_catalogues(db: Session, artist_id: str) -> List[CatalogueResponse]:
    """List the artist's catalogues, system catalogue first."""
    catalogues = (
        db.query(Catalogue)
        .filter(Catalogue.artist_id == artist_id)
        .order_by(Catalogue.is_system_catalogue.desc(), Catalogue.created_at)
        .all()
    )
    counts = _artwork_counts(db, [c.id for c in catalogues])
    return [build_catalogue_response(c, counts.get(c.id, 0)) for c in catalogues]


def get_catalogue_detail(db: Session, catalogue_id: str, artist_id: str) -> CatalogueDetailResponse:
    """
    Get catalogue with ordered artwork IDs.

    Raises:
        CatalogueNotFoundError: If catalogue not found
    """
    catalogue = get_catalogue(db, catalogue_id, artist_id)
    artwork_ids = [link.artwork_id for link in catalogue.artwork_links]
    base = CatalogueResponse.model_validate(catalogue).model_dump()
    base["artwork_count"] = len(artwork_ids)
    return CatalogueDetailResponse(**base, artwork_ids=artwork_ids)


def create_catalogue(db: Session, artist_id: str, data: CatalogueCreate) -> Catalogue:
    """Create a user catalogue. System catalogues are only created with the artist."""
    catalogue = Catalogue(
        artist_id=artist_id,
        title=data.title,
        description=data.description,
        is_published=data.is_published,
        is_system_catalogue=False,
        slug=generate_unique_slug(db, data.title, "catalogues"),
    )
    db.add(catalogue)
    db.commit()
    db.refresh(catalogue)
    return catalogue


def update_catalogue(db: Session, catalogue_id: str, artist_id: str, data: CatalogueUpdate) -> Catalogue:
    """
    Update a user catalogue.

    Raises:
        CatalogueNotFoundError: If catalogue not found
        SystemCatalogueLockedError: If catalogue is the system catalogue
    """
    catalogue = get_catalogue(db, catalogue_id, artist_id)
    if catalogue.is_system_catalogue:
        raise SystemCatalogueLockedError("The system catalogue cannot be edited")

    if data.title is not None and data.title != catalogue.title:
        catalogue.title = data.title
        catalogue.slug = generate_unique_slug(db, data.title, "catalogues", exclude_id=catalogue.id)
    if data.description is not None:
        catalogue.description = data.description
    if data.is_published is not None:
        catalogue.is_published = data.is_published

    db.commit()
    db.refresh(catalogue)
    return catalogue


def delete_catalogue(db: Session, catalogue_id: str, artist_id: str) -> None:
    """
    Delete a user catalogue and its memberships.

    Raises:
        CatalogueNotFoundError: If catalogue not found
        SystemCatalogueLockedError: If catalogue is the system catalogue
    """
    catalogue = get_catalogue(db, catalogue_id, artist_id)
    if catalogue.is_system_catalogue:
        raise SystemCatalogueLockedError("The system catalogue cannot be deleted")

    db.delete(catalogue)
    db.commit()


def reorder_catalogue(db: Session, catalogue_id: str, artist_id: str, artwork_ids: List[str]) -> Catalogue:
    """
    Set the display order of artworks in a catalogue.

    Raises:
        CatalogueNotFoundError: If catalogue not found
        SystemCatalogueLockedError: If catalogue is the system catalogue
        InvalidCatalogueOrderError: If IDs are not exactly the catalogue's artworks
    """
    catalogue = get_catalogue(db, catalogue_id, artist_id)
    if catalogue.is_system_catalogue:
        raise SystemCatalogueLockedError("The system catalogue order is managed automatically")

    links = {link.artwork_id: link for link in catalogue.artwork_links}
    if len(artwork_ids) != len(set(artwork_ids)) or set(artwork_ids) != set(links):
        raise InvalidCatalogueOrderError(
            "Order must list every artwork in the catalogue exactly once"
        )

    for position, artwork_id in enumerate(artwork_ids):
        links[artwork_id].position = position

    db.commit()
    db.refresh(catalogue)
    return catalogue


def next_position(db: Session, catalogue_id: str) -> int:
    """Position after the last artwork currently in the catalogue."""
    current = db.query(func.max(ArtworkCatalogue.position)).filter(
        ArtworkCatalogue.catalogue_id == catalogue_id
    ).scalar()
    return 0 if current is None else current + 1
