"""Main FastAPI application."""

import logging
from typing import Dict, Optional

import redis
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError

from atelier.api.v1 import api_router
from atelier.config import settings
from atelier.database import SessionLocal, engine
from atelier.models.derivative_task import DerivativeTask
from atelier.services.derivative_coordinator import DerivativeTaskStatus

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Atelier",
    description="Artwork inventory, edition sales and catalogue service for artists",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/v1")


def _check_database() -> str:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return f"error: {e}"
    return "connected"


def _check_redis() -> str:
    try:
        redis.from_url(settings.redis_url, socket_connect_timeout=1).ping()
    except redis.RedisError as e:
        return f"error: {e}"
    return "connected"


def _derivative_backlog() -> Optional[Dict[str, int]]:
    """Pending and failed derivative task counts, or None if the DB is unreachable."""
    db = SessionLocal()
    try:
        rows = (
            db.query(DerivativeTask.status, func.count(DerivativeTask.id))
            .filter(DerivativeTask.status.in_([DerivativeTaskStatus.PENDING, DerivativeTaskStatus.FAILED]))
            .group_by(DerivativeTask.status)
            .all()
        )
    except SQLAlchemyError as e:
        logger.warning(f"Could not count derivative tasks: {e}")
        return None
    finally:
        db.close()
    counts = {DerivativeTaskStatus.PENDING: 0, DerivativeTaskStatus.FAILED: 0}
    counts.update({status: count for status, count in rows})
    return counts


@app.get("/health")
def health_check():
    """
    Health check endpoint.

    Reports the database and Redis, whether a compositor is configured,
    and how many derivative tasks are waiting or have failed.
    """
    db_status = _check_database()
    redis_status = _check_redis()
    compositor_status = "configured" if settings.compositor_url else "not configured"

    healthy = db_status == "connected" and redis_status == "connected" and settings.compositor_url
    return {
        "status": "ok" if healthy else "degraded",
        "db": db_status,
        "redis": redis_status,
        "compositor": compositor_status,
        "derivatives": _derivative_backlog() if db_status == "connected" else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "atelier.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
