"""Catalogue membership resolution.

The system catalogue ("Available Work") mirrors artwork status; every other
catalogue is under direct user control.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Set

logger = logging.getLogger(__name__)

# Statuses that place an artwork in the system catalogue
SYSTEM_CATALOGUE_STATUSES = frozenset({"available", "sold"})


class MembershipError(Exception):
    """Base exception for membership resolution errors."""
    pass


class ForeignCatalogueError(MembershipError):
    """Selection references catalogues the artist does not own."""

    def __init__(self, catalogue_ids: Iterable[str]):
        self.catalogue_ids = sorted(catalogue_ids)
        super().__init__(
            "Catalogues do not belong to this artist: " + ", ".join(self.catalogue_ids)
        )


class SystemCatalogueToggleError(MembershipError):
    """User tried to add or remove the system catalogue by hand."""
    pass


@dataclass
class MembershipDiff:
    """Join rows to insert and delete."""

    to_add: Set[str] = field(default_factory=set)
    to_remove: Set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove


def belongs_in_system_catalogue(status: str) -> bool:
    """True when the status qualifies for the system catalogue."""
    return status in SYSTEM_CATALOGUE_STATUSES


def resolve_membership(
    status: str,
    user_selected_ids: Iterable[str],
    system_catalogue_id: Optional[str],
    owned_catalogue_ids: Optional[Iterable[str]] = None,
) -> Set[str]:
    """
    Compute the final set of catalogue ids for an artwork.

    The system catalogue is added when status is available or sold and
    removed otherwise, whatever the user selected.

    Args:
        status: Artwork status
        user_selected_ids: Catalogue ids chosen by the user
        system_catalogue_id: The artist's system catalogue id, if any
        owned_catalogue_ids: All catalogue ids owned by the artist; when
            given, selections outside it are rejected

    Returns:
        Final set of catalogue ids

    Raises:
        ForeignCatalogueError: If a selected catalogue is not owned
    """
    result = set(user_selected_ids)

    if owned_catalogue_ids is not None:
        foreign = result - set(owned_catalogue_ids)
        if foreign:
            logger.error(f"Membership selection contains foreign catalogues: {sorted(foreign)}")
            raise ForeignCatalogueError(foreign)

    if system_catalogue_id:
        if belongs_in_system_catalogue(status):
            result.add(system_catalogue_id)
        else:
            result.discard(system_catalogue_id)

    return result


def check_system_selection(
    status: str,
    user_selected_ids: Iterable[str],
    system_catalogue_id: Optional[str],
) -> None:
    """
    Reject a selection that disagrees with the status on the system catalogue.

    Including the system catalogue is tolerated only when status already
    puts the artwork there, so a round-tripped membership list is accepted.

    Raises:
        SystemCatalogueToggleError: If the selection contradicts the status
    """
    if not system_catalogue_id:
        return
    if system_catalogue_id in set(user_selected_ids) and not belongs_in_system_catalogue(status):
        raise SystemCatalogueToggleError(
            f"The system catalogue is managed automatically; "
            f"artworks with status '{status}' cannot be added to it"
        )


def diff_membership(old_ids: Iterable[str], new_ids: Iterable[str]) -> MembershipDiff:
    """Minimal inserts and deletes turning ``old_ids`` into ``new_ids``."""
    old = set(old_ids)
    new = set(new_ids)
    return MembershipDiff(to_add=new - old, to_remove=old - new)
