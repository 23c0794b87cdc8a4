"""Derived image coordination.

Decides when an artwork's watermark or room visualization must be rebuilt,
records durable ``DerivativeTask`` rows, and runs them against the
compositor from the worker.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from atelier.celery_app import celery_app
from atelier.config import settings
from atelier.models.artwork import Artwork
from atelier.models.artwork_image import ArtworkImage
from atelier.models.derivative_task import DerivativeTask
from atelier.services.compositor import BaseCompositor, CompositorError

logger = logging.getLogger(__name__)

PROCESS_TASK_NAME = "atelier.tasks.derivatives.process_derivative_task"


class DerivativeStatus:
    """Derived image status values."""

    MISSING = "missing"
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class DerivativeTaskStatus:
    """Derivative task status values."""

    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class DerivativeSnapshot:
    """Attributes of an artwork that derived images depend on."""

    artist_name: Optional[str] = None
    primary_image_id: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    unit: Optional[str] = None
    has_watermark: bool = False
    has_visualization: bool = False

    @classmethod
    def from_artwork(cls, artwork: Artwork, artist_name: Optional[str] = None) -> "DerivativeSnapshot":
        primary = artwork.primary_image
        if artist_name is None and artwork.artist is not None:
            artist_name = artwork.artist.display_name
        return cls(
            artist_name=artist_name,
            primary_image_id=primary.id if primary else None,
            width=artwork.width,
            height=artwork.height,
            unit=artwork.dimension_unit,
            has_watermark=bool(primary and primary.watermarked_image_url),
            has_visualization=bool(primary and primary.visualization_image_url),
        )

    @property
    def has_complete_dimensions(self) -> bool:
        return bool(self.width and self.height and self.unit)


def needs_watermark_regeneration(old: Optional[DerivativeSnapshot], new: DerivativeSnapshot) -> bool:
    """
    Watermark text embeds the artist name, so it is rebuilt when there is
    none yet, the artist name changed, or the primary image changed.
    """
    if not new.primary_image_id:
        return False
    if not new.has_watermark or old is None:
        return True
    return old.artist_name != new.artist_name or old.primary_image_id != new.primary_image_id


def needs_visualization_regeneration(old: Optional[DerivativeSnapshot], new: DerivativeSnapshot) -> bool:
    """
    The room visualization scales the image by real-world size, so it is
    rebuilt when there is none yet, width/height/unit changed, or the
    primary image changed. Incomplete dimensions cannot be visualized.
    """
    if not new.primary_image_id or not new.has_complete_dimensions:
        return False
    if not new.has_visualization or old is None:
        return True
    return (
        old.width != new.width
        or old.height != new.height
        or old.unit != new.unit
        or old.primary_image_id != new.primary_image_id
    )


def request_regeneration(
    db: Session,
    artwork: Artwork,
    watermark: bool,
    visualization: bool,
) -> Optional[DerivativeTask]:
    """
    Record a regeneration request for an artwork.

    A pending task for the same artwork absorbs the request instead of a
    second task being created. The caller commits and then calls
    ``dispatch_derivative_task``.

    Returns:
        The pending task, or None when nothing was requested
    """
    if not watermark and not visualization:
        return None

    primary = artwork.primary_image
    now = datetime.utcnow()

    task = db.query(DerivativeTask).filter(
        DerivativeTask.artwork_id == artwork.id,
        DerivativeTask.status == DerivativeTaskStatus.PENDING,
    ).first()

    if task:
        task.force_watermark = task.force_watermark or watermark
        task.force_visualization = task.force_visualization or visualization
        task.next_attempt_at = now
        logger.info(f"Coalesced regeneration request into task {task.id} for artwork {artwork.id}")
    else:
        task = DerivativeTask(
            artwork_id=artwork.id,
            force_watermark=watermark,
            force_visualization=visualization,
            status=DerivativeTaskStatus.PENDING,
            attempts=0,
            max_attempts=settings.derivative_max_attempts,
            next_attempt_at=now,
        )
        db.add(task)

    task.source_image_id = primary.id if primary else None

    if primary:
        if watermark:
            primary.watermark_status = DerivativeStatus.PENDING
        if visualization:
            primary.visualization_status = DerivativeStatus.PENDING

    db.flush()
    return task


def request_for_change(
    db: Session,
    artwork: Artwork,
    old: Optional[DerivativeSnapshot],
    new: Optional[DerivativeSnapshot] = None,
) -> Optional[DerivativeTask]:
    """Request whatever regeneration the change from ``old`` to the artwork's current state needs."""
    if new is None:
        # New images only get their IDs on flush
        db.flush()
        new = DerivativeSnapshot.from_artwork(artwork)
    return request_regeneration(
        db,
        artwork,
        watermark=needs_watermark_regeneration(old, new),
        visualization=needs_visualization_regeneration(old, new),
    )


def dispatch_derivative_task(task_id: int) -> bool:
    """
    Hand a committed task to the worker.

    Dispatch is best-effort: a broker failure is logged and the periodic
    poller picks the task up later.
    """
    try:
        celery_app.send_task(PROCESS_TASK_NAME, args=[task_id])
    except Exception as e:
        logger.error(f"Failed to dispatch derivative task {task_id}: {e}", exc_info=True)
        return False
    logger.info(f"Dispatched derivative task {task_id}")
    return True


def due_task_ids(db: Session, now: Optional[datetime] = None, limit: int = 50) -> List[int]:
    """IDs of pending tasks whose next attempt time has passed."""
    now = now or datetime.utcnow()
    rows = (
        db.query(DerivativeTask.id)
        .filter(
            DerivativeTask.status == DerivativeTaskStatus.PENDING,
            DerivativeTask.next_attempt_at <= now,
        )
        .order_by(DerivativeTask.next_attempt_at)
        .limit(limit)
        .all()
    )
    return [row.id for row in rows]


def requeue_stale_tasks(db: Session, now: Optional[datetime] = None) -> int:
    """
    Hand tasks stuck in processing (worker lost mid-run) back to the poller.

    A lost run counts as a failed attempt, so a task that keeps killing its
    worker still ends up failed once max_attempts is used up.

    Returns:
        Number of stale tasks handled
    """
    now = now or datetime.utcnow()
    cutoff = now - timedelta(seconds=settings.derivative_processing_timeout_seconds)
    stale = (
        db.query(DerivativeTask)
        .filter(
            DerivativeTask.status == DerivativeTaskStatus.PROCESSING,
            DerivativeTask.updated_at < cutoff,
        )
        .all()
    )
    for task in stale:
        _record_failure(task, task.artwork.primary_image, "Worker stopped while processing", now)
    db.commit()
    if stale:
        logger.warning(f"Requeued {len(stale)} stale derivative task(s)")
    return len(stale)


def retry_delay(attempts: int) -> timedelta:
    """Exponential backoff after the given number of failed attempts."""
    return timedelta(seconds=settings.derivative_retry_base_seconds * (2 ** max(attempts - 1, 0)))


def _record_failure(
    task: DerivativeTask,
    primary: Optional[ArtworkImage],
    error: str,
    now: datetime,
) -> None:
    """Count a failed attempt; schedule a retry or give up for good."""
    task.attempts += 1
    task.last_error = error
    if task.attempts >= task.max_attempts:
        task.status = DerivativeTaskStatus.FAILED
        task.completed_at = now
        if primary is not None:
            if task.force_watermark:
                primary.watermark_status = DerivativeStatus.FAILED
            if task.force_visualization:
                primary.visualization_status = DerivativeStatus.FAILED
        logger.error(
            f"Derivative task {task.id} failed permanently after {task.attempts} attempts: {error}"
        )
    else:
        task.status = DerivativeTaskStatus.PENDING
        task.next_attempt_at = now + retry_delay(task.attempts)
        logger.warning(
            f"Derivative task {task.id} attempt {task.attempts} failed, "
            f"retrying at {task.next_attempt_at.isoformat()}: {error}"
        )


def _claim(db: Session, task_id: int) -> bool:
    claimed = (
        db.query(DerivativeTask)
        .filter(
            DerivativeTask.id == task_id,
            DerivativeTask.status == DerivativeTaskStatus.PENDING,
        )
        .update(
            {
                DerivativeTask.status: DerivativeTaskStatus.PROCESSING,
                DerivativeTask.updated_at: datetime.utcnow(),
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return claimed == 1


def run_derivative_task(
    db: Session,
    task_id: int,
    compositor: BaseCompositor,
    now: Optional[datetime] = None,
) -> Optional[DerivativeTask]:
    """
    Execute one derivative task against the compositor.

    Pipeline:
    1. Claim the task (pending -> processing); tasks already claimed are skipped
    2. Call the compositor for the artwork
    3. On success write URLs onto the primary image and mark the task done
    4. On failure record the error and either schedule a retry or mark failed

    Args:
        db: Database session
        task_id: DerivativeTask ID
        compositor: Compositor client
        now: Current time (for tests)

    Returns:
        The task after processing, or None if it was not claimed
    """
    if not _claim(db, task_id):
        logger.info(f"Derivative task {task_id} not pending, skipping")
        return None

    task = db.query(DerivativeTask).filter(DerivativeTask.id == task_id).first()
    artwork = task.artwork
    primary = artwork.primary_image

    if primary is None:
        logger.info(f"Artwork {artwork.id} has no primary image, nothing to generate for task {task_id}")
        task.status = DerivativeTaskStatus.DONE
        task.completed_at = datetime.utcnow()
        db.commit()
        return task

    try:
        result = compositor.generate(
            artwork.id,
            force_watermark=task.force_watermark,
            force_visualization=task.force_visualization,
        )
    except CompositorError as e:
        _record_failure(task, primary, str(e), now or datetime.utcnow())
        db.commit()
        return task

    if result.watermarked_image_url:
        primary.watermarked_image_url = result.watermarked_image_url
        primary.watermark_status = DerivativeStatus.READY
    elif task.force_watermark:
        primary.watermark_status = (
            DerivativeStatus.READY if primary.watermarked_image_url else DerivativeStatus.MISSING
        )

    if result.visualization_image_url:
        primary.visualization_image_url = result.visualization_image_url
        primary.visualization_status = DerivativeStatus.READY
    elif task.force_visualization:
        primary.visualization_status = (
            DerivativeStatus.READY if primary.visualization_image_url else DerivativeStatus.MISSING
        )

    task.status = DerivativeTaskStatus.DONE
    task.last_error = None
    task.completed_at = datetime.utcnow()
    db.commit()

    logger.info(f"Derivative task {task_id} completed for artwork {artwork.id}")
    return task
