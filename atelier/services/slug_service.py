"""Unique slug generation."""

from typing import Dict, Optional

from slugify import slugify as to_slug
from sqlalchemy.orm import Session

from atelier.models.artist import Artist
from atelier.models.artwork import Artwork
from atelier.models.catalogue import Catalogue

# Namespace -> model whose ``slug`` column must stay unique
SLUG_NAMESPACES: Dict[str, type] = {
    "artists": Artist,
    "artworks": Artwork,
    "catalogues": Catalogue,
}

MAX_SLUG_LENGTH = 200


def slugify(text: str) -> str:
    """
    Convert free text to a URL-safe slug.

    Examples:
        >>> slugify("Nuit Étoilée, No. 2")
        'nuit-etoilee-no-2'
    """
    return to_slug(text or "", max_length=MAX_SLUG_LENGTH) or "untitled"


def generate_unique_slug(
    db: Session,
    text: str,
    namespace: str,
    exclude_id: Optional[str] = None,
) -> str:
    """
    Generate a slug unique within a namespace.

    Collisions get a numeric suffix (``-2``, ``-3``...).

    Args:
        db: Database session
        text: Free text (usually a title or name)
        namespace: One of SLUG_NAMESPACES
        exclude_id: Row ID allowed to keep its own slug

    Raises:
        ValueError: If namespace is unknown
    """
    model = SLUG_NAMESPACES.get(namespace)
    if model is None:
        raise ValueError(f"Unknown slug namespace: {namespace}")

    base = slugify(text)
    query = db.query(model.slug).filter(model.slug.like(f"{base}%"))
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    taken = {row.slug for row in query.all()}

    if base not in taken:
        return base

    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"
