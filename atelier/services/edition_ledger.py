"""Edition ledger: enumerate sellable edition identifiers and track sales.

Identifiers take the form ``"{n}/{numeric_size}"`` for numbered prints and
``"AP {n}/{ap_size}"`` for artist's proofs. All functions here are pure and
return new descriptors instead of mutating their input.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)


class EditionLedgerError(Exception):
    """Base exception for edition ledger errors."""
    pass


class InvalidEditionIdentifierError(EditionLedgerError):
    """Identifier is not one of the editions derivable from the descriptor."""
    pass


class EditionResizeError(EditionLedgerError):
    """New edition sizes would orphan identifiers already sold."""

    def __init__(self, orphaned: List[str]):
        self.orphaned = orphaned
        super().__init__(
            "Edition sizes cannot shrink below already sold editions: " + ", ".join(orphaned)
        )


@dataclass(frozen=True)
class EditionDescriptor:
    """Edition sizes and the identifiers already sold."""

    is_edition: bool = False
    numeric_size: int = 0
    ap_size: int = 0
    sold_editions: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.numeric_size < 0 or self.ap_size < 0:
            raise ValueError("Edition sizes must be >= 0")

    @classmethod
    def from_artwork(cls, artwork) -> "EditionDescriptor":
        """Build a descriptor from an Artwork row."""
        return cls(
            is_edition=bool(artwork.is_edition),
            numeric_size=artwork.edition_numeric_size or 0,
            ap_size=artwork.edition_ap_size or 0,
            sold_editions=list(artwork.sold_editions or []),
        )


def enumerate_editions(descriptor: EditionDescriptor) -> List[str]:
    """
    List every sellable identifier, numbered prints first then APs.

    Unique works (``is_edition`` false) have no edition slots.

    Examples:
        >>> enumerate_editions(EditionDescriptor(True, 3, 1))
        ['1/3', '2/3', '3/3', 'AP 1/1']
    """
    if not descriptor.is_edition:
        return []

    numeric = descriptor.numeric_size
    aps = descriptor.ap_size
    editions = [f"{i}/{numeric}" for i in range(1, numeric + 1)]
    editions.extend(f"AP {i}/{aps}" for i in range(1, aps + 1))
    return editions


def _ordered_subset(identifiers: Iterable[str], order: List[str]) -> List[str]:
    wanted = set(identifiers)
    return [identifier for identifier in order if identifier in wanted]


def set_sale_state(descriptor: EditionDescriptor, identifier: str, is_sold: bool) -> EditionDescriptor:
    """
    Mark a single edition as sold or unsold.

    Setting an identifier to the state it already has is a no-op.

    Raises:
        InvalidEditionIdentifierError: If identifier is not a valid edition
    """
    editions = enumerate_editions(descriptor)
    if identifier not in editions:
        raise InvalidEditionIdentifierError(
            f"Edition '{identifier}' does not exist for this artwork"
        )

    sold = set(descriptor.sold_editions)
    if is_sold:
        sold.add(identifier)
    else:
        sold.discard(identifier)

    # Orphans (from an earlier unchecked resize) are kept as history
    orphans = [s for s in descriptor.sold_editions if s not in editions]
    return replace(descriptor, sold_editions=_ordered_subset(sold, editions) + orphans)


def is_fully_sold(descriptor: EditionDescriptor) -> bool:
    """True when every edition is sold and there is at least one edition."""
    editions = enumerate_editions(descriptor)
    if not editions:
        return False
    return set(editions).issubset(descriptor.sold_editions)


def orphaned_sales(descriptor: EditionDescriptor) -> List[str]:
    """Sold identifiers that current sizes no longer produce."""
    editions = set(enumerate_editions(descriptor))
    return [identifier for identifier in descriptor.sold_editions if identifier not in editions]


def validate_resize(old: EditionDescriptor, new: EditionDescriptor) -> None:
    """
    Check that a size change keeps every sold identifier derivable.

    Raises:
        EditionResizeError: If any sold identifier would be orphaned
    """
    if not old.sold_editions:
        return
    target = replace(new, sold_editions=list(old.sold_editions))
    orphaned = orphaned_sales(target)
    if orphaned:
        logger.warning(f"Rejected edition resize orphaning sold editions {orphaned}")
        raise EditionResizeError(orphaned)


def resize(
    old: EditionDescriptor,
    is_edition: bool,
    numeric_size: Optional[int],
    ap_size: Optional[int],
) -> EditionDescriptor:
    """
    Apply new edition sizes, keeping the sold set.

    Turning an edition into a unique work clears sizes and sales, which is
    only allowed while nothing has been sold.
    """
    if not is_edition:
        if old.sold_editions:
            raise EditionResizeError(list(old.sold_editions))
        return EditionDescriptor()

    new = EditionDescriptor(
        is_edition=True,
        numeric_size=old.numeric_size if numeric_size is None else numeric_size,
        ap_size=old.ap_size if ap_size is None else ap_size,
        sold_editions=list(old.sold_editions),
    )
    validate_resize(old, new)
    return replace(new, sold_editions=_ordered_subset(old.sold_editions, enumerate_editions(new)))
