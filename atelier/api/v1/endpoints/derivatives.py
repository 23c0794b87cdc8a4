"""Derived image endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from atelier.api.deps import get_artist_id, get_db
from atelier.api.errors import to_http_exception
from atelier.schemas.derivative import (
    DerivativeTaskListResponse,
    DerivativeTaskResponse,
    RegenerateRequest,
)
from atelier.services.artwork_service import list_derivative_tasks, regenerate_derivatives

router = APIRouter()


@router.get("/{artwork_id}/derivatives", response_model=DerivativeTaskListResponse)
def list_artwork_derivative_tasks(
    artwork_id: str,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """List derivative tasks of an artwork, oldest first."""
    try:
        tasks = list_derivative_tasks(db, artwork_id, artist_id)
    except Exception as e:
        raise to_http_exception(e, "list derivative tasks")
    return DerivativeTaskListResponse(
        items=[DerivativeTaskResponse.model_validate(task) for task in tasks]
    )


@router.post(
    "/{artwork_id}/derivatives/regenerate",
    response_model=DerivativeTaskResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def regenerate_artwork_derivatives(
    artwork_id: str,
    request: RegenerateRequest,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """
    Request regeneration of derived images.

    - **watermark**: Regenerate the watermarked image
    - **visualization**: Regenerate the room visualization (needs dimensions)

    Returns the queued task.
    """
    try:
        task = regenerate_derivatives(
            db,
            artwork_id,
            artist_id,
            watermark=request.watermark,
            visualization=request.visualization,
            expected_version=request.expected_version,
        )
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "request regeneration")
    return DerivativeTaskResponse.model_validate(task)
