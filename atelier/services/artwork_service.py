"""Artwork business logic service.

Every save runs one sequence inside a single transaction: validate, check
the optimistic version, write the artwork row, sync catalogue membership,
record derived image work, commit, then hand that work to the worker.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value

from atelier.models.artwork import Artwork
from atelier.models.artwork_catalogue import ArtworkCatalogue
from atelier.models.artwork_image import ArtworkImage
from atelier.models.derivative_task import DerivativeTask
from atelier.schemas.artwork import (
    ArtworkCreate,
    ArtworkListItem,
    ArtworkResponse,
    ArtworkImageResponse,
    ArtworkStatus,
    ArtworkUpdate,
    Dimensions,
    EditionInput,
    EditionResponse,
    Pricing,
)
from atelier.schemas.edition import EditionLedgerResponse, EditionSlot
from atelier.services import derivative_coordinator
from atelier.services.artist_service import get_artist
from atelier.services.catalogue_membership import (
    check_system_selection,
    diff_membership,
    resolve_membership,
)
from atelier.services.catalogue_service import (
    get_system_catalogue,
    next_position,
    owned_catalogue_ids,
)
from atelier.services.derivative_coordinator import DerivativeSnapshot
from atelier.services.edition_ledger import (
    EditionDescriptor,
    enumerate_editions,
    is_fully_sold,
    orphaned_sales,
    resize,
    set_sale_state,
)
from atelier.services.keywords import extract_keywords, merge_keywords
from atelier.services.metadata import METADATA_FIELDS, apply_descriptive_metadata
from atelier.services.slug_service import generate_unique_slug

logger = logging.getLogger(__name__)

# Statuses that require a complete record
LISTED_STATUSES = frozenset({ArtworkStatus.AVAILABLE, ArtworkStatus.ON_HOLD, ArtworkStatus.SOLD})


class ArtworkServiceError(Exception):
    """Base exception for artwork service errors."""
    pass


class ArtworkNotFoundError(ArtworkServiceError):
    """Artwork not found."""
    pass


class ImageNotFoundError(ArtworkServiceError):
    """Image not found on the artwork."""
    pass


class ArtworkValidationError(ArtworkServiceError):
    """Artwork data is incomplete or inconsistent."""
    pass


class ConflictError(ArtworkServiceError):
    """Artwork changed since the version the caller last saw."""

    def __init__(self, artwork_id: str, expected: int, actual: Optional[int]):
        self.artwork_id = artwork_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Artwork {artwork_id} was modified (expected version {expected}, current {actual})"
        )


class PersistenceError(ArtworkServiceError):
    """Database write failed; nothing was saved."""
    pass


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_artwork(db: Session, artwork_id: str, artist_id: str) -> Artwork:
    """
    Get artwork by ID and owner.

    Raises:
        ArtworkNotFoundError: If artwork not found
    """
    artwork = db.query(Artwork).filter(
        Artwork.id == artwork_id,
        Artwork.artist_id == artist_id,
    ).first()

    if not artwork:
        raise ArtworkNotFoundError(f"Artwork {artwork_id} not found")

    return artwork


def list_artworks(
    db: Session,
    artist_id: str,
    page: int = 1,
    size: int = 20,
    status_filter: Optional[str] = None,
    catalogue_id: Optional[str] = None,
) -> Tuple[List[ArtworkListItem], int]:
    """
    List artworks with pagination.

    Args:
        db: Database session
        artist_id: Owner ID
        page: Page number (1-indexed)
        size: Page size
        status_filter: Optional status filter
        catalogue_id: Optional catalogue filter

    Returns:
        Tuple of (artworks, total_count)
    """
    query = db.query(Artwork).filter(Artwork.artist_id == artist_id)

    if status_filter:
        query = query.filter(Artwork.status == status_filter)

    if catalogue_id:
        query = query.join(ArtworkCatalogue, ArtworkCatalogue.artwork_id == Artwork.id).filter(
            ArtworkCatalogue.catalogue_id == catalogue_id
        )
        query = query.order_by(ArtworkCatalogue.position)
    else:
        query = query.order_by(Artwork.updated_at.desc())

    total = query.count()
    artworks = query.offset((page - 1) * size).limit(size).all()

    items = []
    for artwork in artworks:
        primary = artwork.primary_image
        items.append(ArtworkListItem(
            id=artwork.id,
            title=artwork.title,
            slug=artwork.slug,
            status=artwork.status,
            is_edition=artwork.is_edition,
            primary_image_url=primary.image_url if primary else None,
            version=artwork.version,
            updated_at=artwork.updated_at,
        ))

    return items, total


def build_artwork_response(artwork: Artwork) -> ArtworkResponse:
    """Convert an artwork row and its relations to the API representation."""
    pricing = Pricing.model_construct(
        mode=artwork.pricing_mode,
        price=artwork.price,
        min_price=artwork.min_price,
        max_price=artwork.max_price,
        currency=artwork.currency,
    )
    dimensions = Dimensions.model_construct(
        width=artwork.width,
        height=artwork.height,
        depth=artwork.depth,
        unit=artwork.dimension_unit or "cm",
    )
    return ArtworkResponse(
        id=artwork.id,
        artist_id=artwork.artist_id,
        title=artwork.title,
        slug=artwork.slug,
        description=artwork.description,
        medium=artwork.medium,
        status=artwork.status,
        pricing=pricing,
        dimensions=dimensions,
        edition=EditionResponse(
            is_edition=artwork.is_edition,
            numeric_size=artwork.edition_numeric_size,
            ap_size=artwork.edition_ap_size,
            sold_editions=list(artwork.sold_editions or []),
        ),
        keywords=list(artwork.keywords or []),
        orientation=artwork.orientation,
        dominant_colors=list(artwork.dominant_colors or []),
        genre=artwork.genre,
        subject=artwork.subject,
        images=[
            ArtworkImageResponse.model_validate(image)
            for image in sorted(artwork.images, key=lambda img: img.position)
        ],
        catalogue_ids=sorted(link.catalogue_id for link in artwork.catalogue_links),
        version=artwork.version,
        created_at=artwork.created_at,
        updated_at=artwork.updated_at,
    )


def build_edition_ledger(artwork: Artwork) -> EditionLedgerResponse:
    """Edition inventory view of an artwork."""
    descriptor = EditionDescriptor.from_artwork(artwork)
    editions = enumerate_editions(descriptor)
    sold = set(descriptor.sold_editions)
    slots = [EditionSlot(identifier=e, is_sold=e in sold) for e in editions]
    return EditionLedgerResponse(
        artwork_id=artwork.id,
        is_edition=descriptor.is_edition,
        numeric_size=descriptor.numeric_size,
        ap_size=descriptor.ap_size,
        editions=slots,
        sold_count=sum(1 for slot in slots if slot.is_sold),
        total=len(editions),
        is_fully_sold=is_fully_sold(descriptor),
        orphaned_sales=orphaned_sales(descriptor),
        status=artwork.status,
        version=artwork.version,
    )


def list_derivative_tasks(db: Session, artwork_id: str, artist_id: str) -> List[DerivativeTask]:
    """
    Derivative tasks of an artwork, oldest first.

    Raises:
        ArtworkNotFoundError: If artwork not found
    """
    artwork = get_artwork(db, artwork_id, artist_id)
    return list(artwork.derivative_tasks)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def missing_required_fields(artwork: Artwork) -> List[str]:
    """Fields that must be filled before an artwork can be listed."""
    missing = []
    if not (artwork.title or "").strip():
        missing.append("title")
    if not (artwork.medium or "").strip():
        missing.append("medium")
    if not artwork.width or not artwork.height:
        missing.append("dimensions")
    return missing


def check_version(artwork: Artwork, expected_version: Optional[int]) -> None:
    """
    Raises:
        ConflictError: If expected_version is given and stale
    """
    if expected_version is not None and expected_version != artwork.version:
        raise ConflictError(artwork.id, expected_version, artwork.version)


def claim_version(db: Session, artwork: Artwork, expected_version: Optional[int] = None) -> None:
    """
    Check the caller's version and take the next one in a single
    ``UPDATE ... WHERE version = :seen``.

    The row stays claimed until the transaction ends, so a concurrent
    writer that loaded the same version gets a ConflictError instead of
    overwriting this save.

    Raises:
        ConflictError: If expected_version is stale or the row moved on
        PersistenceError: If the database write fails
    """
    check_version(artwork, expected_version)

    seen_version = artwork.version
    try:
        written = (
            db.query(Artwork)
            .filter(Artwork.id == artwork.id, Artwork.version == seen_version)
            .update(
                {
                    Artwork.version: seen_version + 1,
                    Artwork.updated_at: datetime.utcnow(),
                },
                synchronize_session=False,
            )
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to claim version of artwork {artwork.id}: {e}", exc_info=True)
        raise PersistenceError(f"Failed to save artwork: {e}") from e

    if written != 1:
        db.rollback()
        current = db.query(Artwork.version).filter(Artwork.id == artwork.id).scalar()
        logger.warning(f"Save of artwork {artwork.id} lost a version race")
        raise ConflictError(artwork.id, seen_version, current)

    set_committed_value(artwork, "version", seen_version + 1)


def resolve_status(artwork: Artwork, requested: Optional[str]) -> str:
    """
    Decide the status to persist.

    - Listing statuses (available, on_hold, sold) need a complete record.
    - Pending artworks become available once the record is complete;
      drafts stay drafts until the artist says otherwise.
    - Edition sold state follows the ledger: fully sold editions are sold,
      anything else cannot be.

    Raises:
        ArtworkValidationError: If the requested status is not allowed
    """
    explicit = requested is not None
    status = requested if explicit else artwork.status
    missing = missing_required_fields(artwork)

    if status in LISTED_STATUSES and missing:
        raise ArtworkValidationError(
            f"Cannot set status '{status}': missing required fields: {', '.join(missing)}"
        )

    if status == ArtworkStatus.PENDING and not missing:
        status = ArtworkStatus.AVAILABLE

    if artwork.is_edition:
        fully_sold = is_fully_sold(EditionDescriptor.from_artwork(artwork))
        if status == ArtworkStatus.SOLD and not fully_sold:
            if explicit:
                raise ArtworkValidationError(
                    "Editions are marked sold through their edition ledger"
                )
            status = ArtworkStatus.AVAILABLE
        elif fully_sold and status in (ArtworkStatus.AVAILABLE, ArtworkStatus.ON_HOLD):
            status = ArtworkStatus.SOLD

    return status


# ---------------------------------------------------------------------------
# Write helpers
# ---------------------------------------------------------------------------

def _apply_pricing(artwork: Artwork, pricing: Pricing) -> None:
    artwork.pricing_mode = pricing.mode
    artwork.price = pricing.price
    artwork.min_price = pricing.min_price
    artwork.max_price = pricing.max_price
    artwork.currency = pricing.currency


def _apply_dimensions(artwork: Artwork, dimensions: Dimensions) -> None:
    artwork.width = dimensions.width
    artwork.height = dimensions.height
    artwork.depth = dimensions.depth
    artwork.dimension_unit = dimensions.unit


def _apply_edition(artwork: Artwork, edition: EditionInput) -> None:
    current = EditionDescriptor.from_artwork(artwork)
    updated = resize(current, edition.is_edition, edition.numeric_size, edition.ap_size)
    artwork.is_edition = updated.is_edition
    artwork.edition_numeric_size = updated.numeric_size
    artwork.edition_ap_size = updated.ap_size
    artwork.sold_editions = list(updated.sold_editions)


def _refresh_slug(db: Session, artwork: Artwork, previous_title: Optional[str]) -> None:
    if not artwork.slug or artwork.title != previous_title:
        artwork.slug = generate_unique_slug(
            db, artwork.title or "untitled", "artworks", exclude_id=artwork.id
        )


def _refresh_keywords(
    artwork: Artwork,
    user_keywords: Optional[Sequence[str]],
    image_keywords: Optional[Sequence[str]] = None,
) -> None:
    base = user_keywords if user_keywords is not None else (artwork.keywords or [])
    merged = merge_keywords(
        base,
        extract_keywords(artwork.title, artwork.description, artwork.medium),
        image_keywords,
    )
    if merged != list(artwork.keywords or []):
        artwork.keywords = merged


def _provided_metadata(data) -> dict:
    return {name: getattr(data, name) for name in METADATA_FIELDS if name in data.model_fields_set}


def sync_membership(
    db: Session,
    artwork: Artwork,
    selected_ids: Optional[Sequence[str]] = None,
) -> None:
    """
    Bring the artwork's catalogue rows in line with its status and selection.

    ``selected_ids`` of None keeps the current user-chosen catalogues.

    Raises:
        SystemCatalogueToggleError: If the selection contradicts the status
        ForeignCatalogueError: If a selected catalogue is not the artist's
    """
    system = get_system_catalogue(db, artwork.artist_id)
    system_id = system.id if system else None
    current_ids = {link.catalogue_id for link in artwork.catalogue_links}

    if selected_ids is None:
        user_selected = current_ids - {system_id}
    else:
        check_system_selection(artwork.status, selected_ids, system_id)
        user_selected = set(selected_ids)

    final_ids = resolve_membership(
        artwork.status,
        user_selected,
        system_id,
        owned_catalogue_ids(db, artwork.artist_id),
    )
    diff = diff_membership(current_ids, final_ids)
    if diff.is_empty:
        return

    for link in list(artwork.catalogue_links):
        if link.catalogue_id in diff.to_remove:
            artwork.catalogue_links.remove(link)

    for catalogue_id in sorted(diff.to_add):
        artwork.catalogue_links.append(ArtworkCatalogue(
            catalogue_id=catalogue_id,
            position=next_position(db, catalogue_id),
        ))

    logger.debug(
        f"Artwork {artwork.id} membership: +{sorted(diff.to_add)} -{sorted(diff.to_remove)}"
    )


def _commit(db: Session, task: Optional[DerivativeTask] = None) -> None:
    """Commit, then dispatch any derivative task recorded in the transaction."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to persist artwork changes: {e}", exc_info=True)
        raise PersistenceError(f"Failed to save artwork: {e}") from e

    if task is not None:
        derivative_coordinator.dispatch_derivative_task(task.id)


def _set_image_order(artwork: Artwork, ordered: List[ArtworkImage]) -> None:
    """Renumber images; the first one is the only primary."""
    for position, image in enumerate(ordered):
        image.position = position
        image.is_primary = position == 0


def _ordered_images(artwork: Artwork) -> List[ArtworkImage]:
    return sorted(artwork.images, key=lambda img: img.position)


# ---------------------------------------------------------------------------
# Artwork CRUD
# ---------------------------------------------------------------------------

def create_artwork(db: Session, artist_id: str, data: ArtworkCreate) -> Artwork:
    """
    Create an artwork.

    Raises:
        ArtistNotFoundError: If the artist does not exist
        ArtworkValidationError, EditionResizeError, MembershipError: On invalid data
        PersistenceError: If the database write fails
    """
    get_artist(db, artist_id)

    artwork = Artwork(
        artist_id=artist_id,
        title=data.title,
        description=data.description,
        medium=data.medium,
        status=data.status,
        sold_editions=[],
        keywords=[],
        version=1,
    )
    _apply_pricing(artwork, data.pricing or Pricing())
    _apply_dimensions(artwork, data.dimensions or Dimensions())
    if data.edition is not None:
        _apply_edition(artwork, data.edition)

    db.add(artwork)
    db.flush()

    for position, url in enumerate(data.image_urls or []):
        artwork.images.append(ArtworkImage(image_url=url, position=position, is_primary=position == 0))

    artwork.status = resolve_status(artwork, None)
    _refresh_slug(db, artwork, previous_title=None)
    _refresh_keywords(artwork, data.keywords, data.image_keywords)
    apply_descriptive_metadata(artwork, _provided_metadata(data))
    sync_membership(db, artwork, data.catalogue_ids or [])

    task = derivative_coordinator.request_for_change(db, artwork, old=None)
    _commit(db, task)
    db.refresh(artwork)

    logger.info(f"Created artwork {artwork.id} with status '{artwork.status}'")
    return artwork


def update_artwork(db: Session, artwork_id: str, artist_id: str, data: ArtworkUpdate) -> Artwork:
    """
    Update an artwork.

    Raises:
        ArtworkNotFoundError: If artwork not found
        ConflictError: If expected_version is stale
        ArtworkValidationError, EditionResizeError, MembershipError: On invalid data
        PersistenceError: If the database write fails
    """
    artwork = get_artwork(db, artwork_id, artist_id)
    claim_version(db, artwork, data.expected_version)

    old_snapshot = DerivativeSnapshot.from_artwork(artwork)
    previous_title = artwork.title
    fields = data.model_fields_set

    if "title" in fields:
        artwork.title = data.title
    if "description" in fields:
        artwork.description = data.description
    if "medium" in fields:
        artwork.medium = data.medium
    if data.pricing is not None:
        _apply_pricing(artwork, data.pricing)
    if data.dimensions is not None:
        _apply_dimensions(artwork, data.dimensions)
    if data.edition is not None:
        _apply_edition(artwork, data.edition)

    artwork.status = resolve_status(artwork, data.status)
    _refresh_slug(db, artwork, previous_title)
    _refresh_keywords(artwork, data.keywords, data.image_keywords)
    apply_descriptive_metadata(artwork, _provided_metadata(data))
    sync_membership(db, artwork, data.catalogue_ids)

    task = derivative_coordinator.request_for_change(db, artwork, old_snapshot)
    _commit(db, task)
    db.refresh(artwork)

    logger.info(f"Updated artwork {artwork.id} to version {artwork.version}")
    return artwork


def delete_artwork(db: Session, artwork_id: str, artist_id: str) -> None:
    """
    Delete an artwork with its images, memberships and derivative tasks.

    Raises:
        ArtworkNotFoundError: If artwork not found
    """
    artwork = get_artwork(db, artwork_id, artist_id)
    db.delete(artwork)
    _commit(db)
    logger.info(f"Deleted artwork {artwork_id}")


# ---------------------------------------------------------------------------
# Edition sales
# ---------------------------------------------------------------------------

def update_edition_sale(
    db: Session,
    artwork_id: str,
    artist_id: str,
    identifier: str,
    is_sold: bool,
    expected_version: Optional[int] = None,
) -> Artwork:
    """
    Mark one edition sold or unsold.

    The write is a compare-and-swap on the version counter, so two sessions
    toggling editions of the same artwork cannot overwrite each other.
    Fully selling an edition marks the artwork sold; undoing a sale on a
    sold artwork makes it available again.

    Raises:
        ArtworkNotFoundError: If artwork not found
        InvalidEditionIdentifierError: If identifier is not a valid edition
        ConflictError: If the artwork changed concurrently
    """
    artwork = get_artwork(db, artwork_id, artist_id)
    check_version(artwork, expected_version)

    descriptor = EditionDescriptor.from_artwork(artwork)
    updated = set_sale_state(descriptor, identifier, is_sold)

    status = artwork.status
    if is_fully_sold(updated) and status in LISTED_STATUSES:
        status = ArtworkStatus.SOLD
    elif status == ArtworkStatus.SOLD and not is_fully_sold(updated):
        status = ArtworkStatus.AVAILABLE

    if updated.sold_editions == descriptor.sold_editions and status == artwork.status:
        return artwork

    seen_version = artwork.version
    written = (
        db.query(Artwork)
        .filter(Artwork.id == artwork.id, Artwork.version == seen_version)
        .update(
            {
                Artwork.sold_editions: list(updated.sold_editions),
                Artwork.status: status,
                Artwork.version: seen_version + 1,
                Artwork.updated_at: datetime.utcnow(),
            },
            synchronize_session=False,
        )
    )
    if written != 1:
        db.rollback()
        current = db.query(Artwork.version).filter(Artwork.id == artwork.id).scalar()
        logger.warning(f"Edition sale on artwork {artwork.id} lost a version race")
        raise ConflictError(artwork.id, seen_version, current)

    db.expire(artwork)
    sync_membership(db, artwork)
    _commit(db)
    db.refresh(artwork)

    logger.info(
        f"Edition '{identifier}' of artwork {artwork.id} marked "
        f"{'sold' if is_sold else 'unsold'} (status '{artwork.status}')"
    )
    return artwork


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

def _get_image(artwork: Artwork, image_id: str) -> ArtworkImage:
    for image in artwork.images:
        if image.id == image_id:
            return image
    raise ImageNotFoundError(f"Image {image_id} not found on artwork {artwork.id}")


def _save_image_change(db: Session, artwork: Artwork, old_snapshot: DerivativeSnapshot) -> Artwork:
    task = derivative_coordinator.request_for_change(db, artwork, old_snapshot)
    _commit(db, task)
    db.refresh(artwork)
    return artwork


def add_image(
    db: Session,
    artwork_id: str,
    artist_id: str,
    image_url: str,
    make_primary: bool = False,
    expected_version: Optional[int] = None,
) -> Artwork:
    """Append an image; the first image of an artwork becomes primary."""
    artwork = get_artwork(db, artwork_id, artist_id)
    claim_version(db, artwork, expected_version)
    old_snapshot = DerivativeSnapshot.from_artwork(artwork)

    ordered = _ordered_images(artwork)
    image = ArtworkImage(image_url=image_url)
    artwork.images.append(image)
    ordered = [image] + ordered if make_primary else ordered + [image]
    _set_image_order(artwork, ordered)

    return _save_image_change(db, artwork, old_snapshot)


def remove_image(
    db: Session,
    artwork_id: str,
    artist_id: str,
    image_id: str,
    expected_version: Optional[int] = None,
) -> Artwork:
    """
    Remove an image; the next image takes over as primary.

    Raises:
        ImageNotFoundError: If the image is not on the artwork
        ConflictError: If expected_version is stale
    """
    artwork = get_artwork(db, artwork_id, artist_id)
    image = _get_image(artwork, image_id)
    claim_version(db, artwork, expected_version)
    old_snapshot = DerivativeSnapshot.from_artwork(artwork)

    remaining = [img for img in _ordered_images(artwork) if img.id != image_id]
    artwork.images.remove(image)
    _set_image_order(artwork, remaining)

    return _save_image_change(db, artwork, old_snapshot)


def reorder_images(
    db: Session,
    artwork_id: str,
    artist_id: str,
    image_ids: List[str],
    expected_version: Optional[int] = None,
) -> Artwork:
    """
    Reorder images; the first listed becomes primary.

    Raises:
        ArtworkValidationError: If IDs are not exactly the artwork's images
        ConflictError: If expected_version is stale
    """
    artwork = get_artwork(db, artwork_id, artist_id)
    by_id = {image.id: image for image in artwork.images}
    if len(image_ids) != len(set(image_ids)) or set(image_ids) != set(by_id):
        raise ArtworkValidationError("Order must list every image of the artwork exactly once")

    claim_version(db, artwork, expected_version)
    old_snapshot = DerivativeSnapshot.from_artwork(artwork)
    _set_image_order(artwork, [by_id[image_id] for image_id in image_ids])
    return _save_image_change(db, artwork, old_snapshot)


def set_primary_image(
    db: Session,
    artwork_id: str,
    artist_id: str,
    image_id: str,
    expected_version: Optional[int] = None,
) -> Artwork:
    """
    Move an image to the front, making it primary.

    Raises:
        ImageNotFoundError: If the image is not on the artwork
        ConflictError: If expected_version is stale
    """
    artwork = get_artwork(db, artwork_id, artist_id)
    image = _get_image(artwork, image_id)
    if image.is_primary:
        check_version(artwork, expected_version)
        return artwork

    claim_version(db, artwork, expected_version)
    old_snapshot = DerivativeSnapshot.from_artwork(artwork)
    others = [img for img in _ordered_images(artwork) if img.id != image_id]
    _set_image_order(artwork, [image] + others)
    return _save_image_change(db, artwork, old_snapshot)


# ---------------------------------------------------------------------------
# Derived images
# ---------------------------------------------------------------------------

def regenerate_derivatives(
    db: Session,
    artwork_id: str,
    artist_id: str,
    watermark: bool = True,
    visualization: bool = True,
    expected_version: Optional[int] = None,
) -> DerivativeTask:
    """
    Force regeneration of derived images.

    Marking the image statuses pending counts as a write, so the version
    moves on like any other save.

    Raises:
        ArtworkValidationError: If the artwork has no image, or nothing was requested
        ConflictError: If expected_version is stale
    """
    artwork = get_artwork(db, artwork_id, artist_id)
    if artwork.primary_image is None:
        raise ArtworkValidationError("Artwork has no image to derive from")

    snapshot = DerivativeSnapshot.from_artwork(artwork)
    visualization = visualization and snapshot.has_complete_dimensions
    if not watermark and not visualization:
        raise ArtworkValidationError(
            "Nothing to regenerate (visualizations need complete dimensions)"
        )

    claim_version(db, artwork, expected_version)
    task = derivative_coordinator.request_regeneration(db, artwork, watermark, visualization)

    _commit(db, task)
    db.refresh(task)
    return task
