"""Edition ledger endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from atelier.api.deps import get_artist_id, get_db
from atelier.api.errors import to_http_exception
from atelier.schemas.edition import EditionLedgerResponse, EditionSaleRequest
from atelier.services.artwork_service import (
    build_edition_ledger,
    get_artwork,
    update_edition_sale,
)

router = APIRouter()


@router.get("/{artwork_id}/editions", response_model=EditionLedgerResponse)
def get_edition_ledger(
    artwork_id: str,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """
    Get the edition inventory of an artwork.

    Lists every identifier ("1/N" ... "N/N", then "AP 1/M" ... "AP M/M")
    with its sale state.
    """
    try:
        artwork = get_artwork(db, artwork_id, artist_id)
    except Exception as e:
        raise to_http_exception(e, "get editions")
    return build_edition_ledger(artwork)


@router.post("/{artwork_id}/editions/sale", response_model=EditionLedgerResponse)
def toggle_edition_sale(
    artwork_id: str,
    request: EditionSaleRequest,
    db: Session = Depends(get_db),
    artist_id: str = Depends(get_artist_id),
):
    """
    Mark one edition sold or unsold.

    - **identifier**: Edition identifier, e.g. "2/10" or "AP 1/2"
    - **is_sold**: New sale state
    - **expected_version**: Optional; 409 if the artwork changed since

    The change is saved immediately. Selling the last edition marks the
    artwork sold.
    """
    try:
        artwork = update_edition_sale(
            db,
            artwork_id,
            artist_id,
            request.identifier,
            request.is_sold,
            expected_version=request.expected_version,
        )
    except Exception as e:
        db.rollback()
        raise to_http_exception(e, "update edition sale")
    return build_edition_ledger(artwork)
