"""Business logic services."""

from atelier.services.catalogue_membership import diff_membership, resolve_membership
from atelier.services.edition_ledger import enumerate_editions, is_fully_sold, set_sale_state
from atelier.services.slug_service import generate_unique_slug, slugify

__all__ = [
    "diff_membership",
    "resolve_membership",
    "enumerate_editions",
    "is_fully_sold",
    "set_sale_state",
    "generate_unique_slug",
    "slugify",
]
