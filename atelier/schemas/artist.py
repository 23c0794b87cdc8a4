"""Artist schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ArtistBase(BaseModel):
    """Base artist schema."""

    display_name: str = Field(..., min_length=1, max_length=255)


class ArtistCreate(ArtistBase):
    """Schema for creating an artist."""

    pass


class ArtistUpdate(BaseModel):
    """Schema for updating an artist."""

    display_name: Optional[str] = Field(None, min_length=1, max_length=255)


class ArtistResponse(ArtistBase):
    """Schema for artist response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    slug: str
    created_at: datetime
    updated_at: datetime
