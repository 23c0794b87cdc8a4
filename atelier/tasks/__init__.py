"""Celery tasks."""

from atelier.celery_app import celery_app

# Import all tasks to register them with Celery
from atelier.tasks.derivatives import dispatch_pending_derivatives, process_derivative_task  # noqa: F401


@celery_app.task(name="atelier.tasks.health_check")
def health_check() -> dict:
    """Health check task."""
    return {"status": "ok", "worker": "ready"}


# Export all tasks
__all__ = ["health_check", "process_derivative_task", "dispatch_pending_derivatives"]
