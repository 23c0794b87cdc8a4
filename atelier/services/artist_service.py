"""Artist business logic service."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from atelier.models.artist import Artist
from atelier.models.derivative_task import DerivativeTask
from atelier.services import derivative_coordinator
from atelier.services.catalogue_service import ensure_system_catalogue
from atelier.services.derivative_coordinator import DerivativeSnapshot
from atelier.services.slug_service import generate_unique_slug

logger = logging.getLogger(__name__)


class ArtistServiceError(Exception):
    """Base exception for artist service errors."""
    pass


class ArtistNotFoundError(ArtistServiceError):
    """Artist not found."""
    pass


def get_artist(db: Session, artist_id: str) -> Artist:
    """
    Get artist by ID.

    Raises:
        ArtistNotFoundError: If artist not found
    """
    artist = db.query(Artist).filter(Artist.id == artist_id).first()
    if not artist:
        raise ArtistNotFoundError(f"Artist {artist_id} not found")
    return artist


def list_artists(db: Session) -> List[Artist]:
    return db.query(Artist).order_by(Artist.created_at).all()


def create_artist(db: Session, display_name: str) -> Artist:
    """
    Create an artist together with its system catalogue.

    Args:
        db: Database session
        display_name: Name shown publicly and embedded in watermarks

    Returns:
        Created artist
    """
    artist = Artist(
        display_name=display_name,
        slug=generate_unique_slug(db, display_name, "artists"),
    )
    db.add(artist)
    db.flush()

    ensure_system_catalogue(db, artist)

    db.commit()
    db.refresh(artist)
    logger.info(f"Created artist {artist.id} ({artist.slug})")
    return artist


def update_artist(
    db: Session,
    artist_id: str,
    display_name: Optional[str] = None,
) -> Tuple[Artist, List[DerivativeTask]]:
    """
    Update an artist.

    Watermarks embed the display name, so renaming the artist requests
    watermark regeneration for every artwork that has images.

    Returns:
        Tuple of (artist, regeneration tasks requested)

    Raises:
        ArtistNotFoundError: If artist not found
    """
    artist = get_artist(db, artist_id)
    tasks: List[DerivativeTask] = []

    if display_name is not None and display_name != artist.display_name:
        old_snapshots = [
            (artwork, DerivativeSnapshot.from_artwork(artwork, artist_name=artist.display_name))
            for artwork in artist.artworks
        ]

        artist.display_name = display_name
        artist.slug = generate_unique_slug(db, display_name, "artists", exclude_id=artist.id)

        for artwork, old in old_snapshots:
            new = DerivativeSnapshot.from_artwork(artwork, artist_name=display_name)
            task = derivative_coordinator.request_for_change(db, artwork, old, new)
            if task:
                tasks.append(task)

        logger.info(
            f"Artist {artist.id} renamed; {len(tasks)} watermark regeneration(s) requested"
        )

    db.commit()
    db.refresh(artist)

    for task in tasks:
        derivative_coordinator.dispatch_derivative_task(task.id)

    return artist, tasks
