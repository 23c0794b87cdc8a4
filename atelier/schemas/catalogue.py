"""Catalogue schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CatalogueBase(BaseModel):
    """Base catalogue schema."""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_published: bool = True


class CatalogueCreate(CatalogueBase):
    """Schema for creating a catalogue."""

    pass


class CatalogueUpdate(BaseModel):
    """Schema for updating a catalogue."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_published: Optional[bool] = None


class CatalogueResponse(CatalogueBase):
    """Schema for catalogue response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    artist_id: str
    slug: str
    is_system_catalogue: bool
    artwork_count: int = 0
    created_at: datetime
    updated_at: datetime


class CatalogueDetailResponse(CatalogueResponse):
    """Catalogue with its artworks in display order."""

    artwork_ids: List[str] = Field(default_factory=list)


class CatalogueOrderRequest(BaseModel):
    """New artwork order within a catalogue."""

    artwork_ids: List[str] = Field(..., min_length=1)
