"""SQLAlchemy models."""

from atelier.database import Base
from atelier.models.artist import Artist
from atelier.models.artwork import Artwork
from atelier.models.artwork_image import ArtworkImage
from atelier.models.catalogue import Catalogue
from atelier.models.artwork_catalogue import ArtworkCatalogue
from atelier.models.derivative_task import DerivativeTask

__all__ = [
    "Base",
    "Artist",
    "Artwork",
    "ArtworkImage",
    "Catalogue",
    "ArtworkCatalogue",
    "DerivativeTask",
]
