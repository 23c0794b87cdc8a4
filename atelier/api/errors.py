"""Translate service exceptions into HTTP errors."""

import logging

from fastapi import HTTPException, status

from atelier.services.artist_service import ArtistNotFoundError
from atelier.services.artwork_service import (
    ArtworkNotFoundError,
    ArtworkValidationError,
    ConflictError,
    ImageNotFoundError,
    PersistenceError,
)
from atelier.services.catalogue_membership import MembershipError
from atelier.services.catalogue_service import CatalogueNotFoundError, CatalogueServiceError
from atelier.services.edition_ledger import EditionLedgerError

logger = logging.getLogger(__name__)

NOT_FOUND_ERRORS = (
    ArtistNotFoundError,
    ArtworkNotFoundError,
    CatalogueNotFoundError,
    ImageNotFoundError,
)

BAD_REQUEST_ERRORS = (
    ArtworkValidationError,
    EditionLedgerError,
    MembershipError,
    CatalogueServiceError,
)


def to_http_exception(error: Exception, action: str) -> HTTPException:
    """
    Map a service exception to an HTTPException.

    Args:
        error: Exception raised by a service call
        action: What was being attempted, used in 500 messages

    Returns:
        HTTPException to raise
    """
    if isinstance(error, NOT_FOUND_ERRORS):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))

    if isinstance(error, ConflictError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": str(error),
                "expected_version": error.expected,
                "current_version": error.actual,
            },
        )

    if isinstance(error, BAD_REQUEST_ERRORS):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

    if isinstance(error, PersistenceError):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))

    logger.error(f"Failed to {action}: {error}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}: {str(error)}",
    )
