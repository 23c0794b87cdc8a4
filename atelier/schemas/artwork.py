"""Artwork schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ArtworkStatus:
    """Artwork status values."""

    DRAFT = "draft"
    PENDING = "pending"
    AVAILABLE = "available"
    ON_HOLD = "on_hold"
    SOLD = "sold"

    ALL = (DRAFT, PENDING, AVAILABLE, ON_HOLD, SOLD)


class PricingMode:
    """Pricing modes; exactly one is active per artwork."""

    FIXED = "fixed"
    NEGOTIABLE = "negotiable"
    ON_REQUEST = "on_request"


STATUS_PATTERN = "^(draft|pending|available|on_hold|sold)$"
ORIENTATION_PATTERN = "^(landscape|portrait|square)$"


class Pricing(BaseModel):
    """Pricing in exactly one mode."""

    mode: str = Field(
        default=PricingMode.ON_REQUEST,
        description="Pricing mode: 'fixed', 'negotiable' or 'on_request'",
        pattern="^(fixed|negotiable|on_request)$",
    )
    price: Optional[Decimal] = Field(None, gt=0)
    min_price: Optional[Decimal] = Field(None, gt=0)
    max_price: Optional[Decimal] = Field(None, gt=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)

    @model_validator(mode="after")
    def check_mode_fields(self) -> "Pricing":
        if self.mode == PricingMode.FIXED:
            if self.price is None:
                raise ValueError("Fixed pricing requires a price")
            self.min_price = None
            self.max_price = None
        elif self.mode == PricingMode.NEGOTIABLE:
            if self.min_price is None or self.max_price is None:
                raise ValueError("Negotiable pricing requires min_price and max_price")
            if self.min_price > self.max_price:
                raise ValueError("min_price cannot exceed max_price")
            self.price = None
        else:
            self.price = None
            self.min_price = None
            self.max_price = None
        self.currency = self.currency.upper()
        return self


class Dimensions(BaseModel):
    """Physical dimensions of an artwork."""

    width: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    depth: Optional[float] = Field(None, gt=0)
    unit: str = Field(default="cm", pattern="^(cm|in|mm)$")


class EditionInput(BaseModel):
    """Edition sizes submitted by the artist."""

    is_edition: bool = False
    numeric_size: Optional[int] = Field(None, ge=0)
    ap_size: Optional[int] = Field(None, ge=0)


class ArtworkCreate(BaseModel):
    """Request to create an artwork."""

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    medium: Optional[str] = Field(None, max_length=255)
    status: str = Field(
        default=ArtworkStatus.PENDING,
        description="Initial status: 'pending' or 'draft'",
        pattern="^(pending|draft)$",
    )
    pricing: Optional[Pricing] = None
    dimensions: Optional[Dimensions] = None
    edition: Optional[EditionInput] = None
    keywords: Optional[List[str]] = None
    image_keywords: Optional[List[str]] = Field(
        None, description="Keywords detected on the image, merged into keywords"
    )
    dominant_colors: Optional[List[str]] = None
    genre: Optional[str] = Field(None, max_length=100)
    subject: Optional[str] = Field(None, max_length=100)
    orientation: Optional[str] = Field(
        None,
        description="Overrides the orientation derived from dimensions",
        pattern=ORIENTATION_PATTERN,
    )
    catalogue_ids: Optional[List[str]] = Field(
        None, description="User catalogues to place the artwork in"
    )
    image_urls: Optional[List[str]] = Field(
        None, description="Source image URLs; the first becomes primary"
    )


class ArtworkUpdate(BaseModel):
    """Request to update an artwork. Omitted fields are left unchanged."""

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    medium: Optional[str] = Field(None, max_length=255)
    status: Optional[str] = Field(None, pattern=STATUS_PATTERN)
    pricing: Optional[Pricing] = None
    dimensions: Optional[Dimensions] = None
    edition: Optional[EditionInput] = None
    keywords: Optional[List[str]] = None
    image_keywords: Optional[List[str]] = Field(
        None, description="Keywords detected on the image, merged into keywords"
    )
    dominant_colors: Optional[List[str]] = None
    genre: Optional[str] = Field(None, max_length=100)
    subject: Optional[str] = Field(None, max_length=100)
    orientation: Optional[str] = Field(
        None,
        description="Overrides the orientation derived from dimensions",
        pattern=ORIENTATION_PATTERN,
    )
    catalogue_ids: Optional[List[str]] = None
    expected_version: Optional[int] = Field(
        None, ge=1, description="Reject the update if the artwork changed since this version"
    )


class ArtworkImageCreate(BaseModel):
    """Request to add an image."""

    image_url: str = Field(..., min_length=1, max_length=1000)
    make_primary: bool = False
    expected_version: Optional[int] = Field(
        None, ge=1, description="Reject the change if the artwork changed since this version"
    )


class ImageOrderRequest(BaseModel):
    """New image order; the first image becomes primary."""

    image_ids: List[str] = Field(..., min_length=1)
    expected_version: Optional[int] = Field(
        None, ge=1, description="Reject the change if the artwork changed since this version"
    )


class ArtworkImageResponse(BaseModel):
    """Response schema for an artwork image."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    image_url: str
    position: int
    is_primary: bool
    watermarked_image_url: Optional[str]
    visualization_image_url: Optional[str]
    watermark_status: str
    visualization_status: str


class EditionResponse(BaseModel):
    """Edition descriptor as stored."""

    is_edition: bool
    numeric_size: int
    ap_size: int
    sold_editions: List[str]


class ArtworkResponse(BaseModel):
    """Full artwork representation."""

    id: str
    artist_id: str
    title: Optional[str]
    slug: Optional[str]
    description: Optional[str]
    medium: Optional[str]
    status: str
    pricing: Pricing
    dimensions: Dimensions
    edition: EditionResponse
    keywords: List[str]
    orientation: Optional[str]
    dominant_colors: List[str]
    genre: Optional[str]
    subject: Optional[str]
    images: List[ArtworkImageResponse]
    catalogue_ids: List[str]
    version: int
    created_at: datetime
    updated_at: datetime


class ArtworkListItem(BaseModel):
    """Simplified artwork info for list view."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: Optional[str]
    slug: Optional[str]
    status: str
    is_edition: bool
    primary_image_url: Optional[str] = None
    version: int
    updated_at: datetime


class ArtworkListResponse(BaseModel):
    """Paginated artwork list."""

    items: List[ArtworkListItem]
    total: int
    page: int
    size: int
    pages: int
