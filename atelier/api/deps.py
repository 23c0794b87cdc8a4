"""API dependencies."""

from fastapi import Header, HTTPException, status

from atelier.database import get_db  # noqa: F401


def get_artist_id(x_artist_id: str = Header(None)) -> str:
    """Get acting artist ID from header."""
    if not x_artist_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Artist-ID header is required",
        )
    return x_artist_id
