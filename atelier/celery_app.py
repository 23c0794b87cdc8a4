"""Celery application shared by the API (dispatch) and the worker (execution)."""

from celery import Celery

from atelier.config import settings

celery_app = Celery(
    "atelier",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["atelier.tasks.derivatives"],
)

# Configure Celery
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    beat_schedule={
        "dispatch-pending-derivatives": {
            "task": "atelier.tasks.derivatives.dispatch_pending_derivatives",
            "schedule": float(settings.derivative_poll_interval_seconds),
        },
    },
)
