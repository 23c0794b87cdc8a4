"""Derivative task schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RegenerateRequest(BaseModel):
    """Manually request derived image regeneration."""

    watermark: bool = True
    visualization: bool = True
    expected_version: Optional[int] = Field(
        None, ge=1, description="Reject the request if the artwork changed since this version"
    )


class DerivativeTaskResponse(BaseModel):
    """Response schema for a derivative task."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    artwork_id: str
    source_image_id: Optional[str]
    force_watermark: bool
    force_visualization: bool
    status: str
    attempts: int
    max_attempts: int
    last_error: Optional[str]
    next_attempt_at: datetime
    created_at: datetime
    completed_at: Optional[datetime]


class DerivativeTaskListResponse(BaseModel):
    """Derivative tasks of an artwork, oldest first."""

    items: List[DerivativeTaskResponse]
