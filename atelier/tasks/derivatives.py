"""Derived image tasks."""

import logging

from atelier.celery_app import celery_app
from atelier.config import settings
from atelier.database import SessionLocal
from atelier.services import derivative_coordinator
from atelier.services.compositor import get_compositor

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name="atelier.tasks.derivatives.process_derivative_task")
def process_derivative_task(self, task_id: int) -> dict:
    """
    Generate watermark / visualization images for one derivative task.

    Failures are recorded on the task row and retried by the poller, so
    this Celery task itself never retries.

    Args:
        task_id: DerivativeTask ID

    Returns:
        Dict with status and details
    """
    logger.info(f"Processing derivative task {task_id}")

    db = SessionLocal()
    try:
        task = derivative_coordinator.run_derivative_task(db, task_id, get_compositor())
        if task is None:
            return {"status": "skipped", "task_id": task_id}
        return {
            "status": task.status,
            "task_id": task_id,
            "attempts": task.attempts,
            "error": task.last_error,
        }
    except Exception as e:
        db.rollback()
        logger.error(f"Derivative task {task_id} crashed: {e}", exc_info=True)
        raise
    finally:
        db.close()


@celery_app.task(name="atelier.tasks.derivatives.dispatch_pending_derivatives")
def dispatch_pending_derivatives() -> dict:
    """Periodic poller: dispatch pending derivative tasks that are due."""
    db = SessionLocal()
    try:
        derivative_coordinator.requeue_stale_tasks(db)
        task_ids = derivative_coordinator.due_task_ids(db, limit=settings.derivative_poll_batch_size)
    finally:
        db.close()

    dispatched = sum(1 for task_id in task_ids if derivative_coordinator.dispatch_derivative_task(task_id))
    if task_ids:
        logger.info(f"Poller dispatched {dispatched}/{len(task_ids)} due derivative task(s)")
    return {"due": len(task_ids), "dispatched": dispatched}
