"""Edition schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field


class EditionSlot(BaseModel):
    """One sellable edition and its sale state."""

    identifier: str
    is_sold: bool


class EditionLedgerResponse(BaseModel):
    """Edition inventory of an artwork."""

    artwork_id: str
    is_edition: bool
    numeric_size: int
    ap_size: int
    editions: List[EditionSlot]
    sold_count: int
    total: int
    is_fully_sold: bool
    orphaned_sales: List[str] = Field(
        default_factory=list,
        description="Sold identifiers no longer produced by the current sizes",
    )
    status: str
    version: int


class EditionSaleRequest(BaseModel):
    """Mark one edition as sold or unsold."""

    identifier: str = Field(..., min_length=1, examples=["2/10", "AP 1/2"])
    is_sold: bool
    expected_version: Optional[int] = Field(None, ge=1)
