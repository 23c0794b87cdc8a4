"""Descriptive artwork metadata.

Orientation follows the artwork's dimensions unless the artist sets it.
Dominant colours, genre and subject come from the client (colour picking
and classification run client-side) and are only written when they differ
from what is stored.
"""

import logging
from typing import Any, Dict, List, Optional

from atelier.models.artwork import Artwork

logger = logging.getLogger(__name__)

# Request fields handled here
METADATA_FIELDS = ("dominant_colors", "genre", "subject", "orientation")


class Orientation:
    """Orientation values."""

    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    SQUARE = "square"


def derive_orientation(width: Optional[float], height: Optional[float]) -> Optional[str]:
    """
    Orientation from width and height, or None when either is missing.

    Examples:
        >>> derive_orientation(70, 50)
        'landscape'
    """
    if not width or not height:
        return None
    if width > height:
        return Orientation.LANDSCAPE
    if height > width:
        return Orientation.PORTRAIT
    return Orientation.SQUARE


def apply_descriptive_metadata(artwork: Artwork, provided: Dict[str, Any]) -> List[str]:
    """
    Write descriptive metadata onto an artwork.

    ``provided`` holds only the fields the caller sent. Genre and subject
    may be cleared with None; an empty colour list leaves the stored
    colours alone. Without an explicit orientation the one derived from
    the current dimensions is used.

    Returns:
        Names of the fields that changed
    """
    changed = []

    colors = provided.get("dominant_colors")
    if colors and list(colors) != list(artwork.dominant_colors or []):
        artwork.dominant_colors = list(colors)
        changed.append("dominant_colors")

    for name in ("genre", "subject"):
        if name in provided and provided[name] != getattr(artwork, name):
            setattr(artwork, name, provided[name])
            changed.append(name)

    orientation = provided.get("orientation") or derive_orientation(artwork.width, artwork.height)
    if orientation is not None and orientation != artwork.orientation:
        artwork.orientation = orientation
        changed.append("orientation")

    if changed:
        logger.debug(f"Artwork {artwork.id} metadata changed: {changed}")
    return changed
