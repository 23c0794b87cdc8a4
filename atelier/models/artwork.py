"""Artwork model."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from atelier.database import Base


class Artwork(Base):
    """Artwork record with pricing, dimensions and edition inventory."""

    __tablename__ = "artworks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    artist_id = Column(String(36), ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=True)
    slug = Column(String(255), nullable=True, unique=True, index=True)
    description = Column(Text, nullable=True)
    medium = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    # Status: draft, pending, available, on_hold, sold

    # Pricing: exactly one mode is active (fixed, negotiable, on_request)
    pricing_mode = Column(String(20), nullable=False, default="on_request")
    price = Column(Numeric(12, 2), nullable=True)
    min_price = Column(Numeric(12, 2), nullable=True)
    max_price = Column(Numeric(12, 2), nullable=True)
    currency = Column(String(3), nullable=False, default="USD")

    # Dimensions
    width = Column(Float, nullable=True)
    height = Column(Float, nullable=True)
    depth = Column(Float, nullable=True)
    dimension_unit = Column(String(5), nullable=True, default="cm")

    # Edition inventory
    is_edition = Column(Boolean, nullable=False, default=False)
    edition_numeric_size = Column(Integer, nullable=False, default=0)
    edition_ap_size = Column(Integer, nullable=False, default=0)
    sold_editions = Column(JSON, nullable=False, default=list)

    keywords = Column(JSON, nullable=False, default=list)

    # Descriptive metadata
    orientation = Column(String(20), nullable=True)
    # Orientation: landscape, portrait, square
    dominant_colors = Column(JSON, nullable=True)
    genre = Column(String(100), nullable=True, index=True)
    subject = Column(String(100), nullable=True)

    # Optimistic concurrency counter, bumped on every write
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    artist = relationship("Artist", back_populates="artworks")
    images = relationship(
        "ArtworkImage",
        back_populates="artwork",
        cascade="all, delete-orphan",
        order_by="ArtworkImage.position",
    )
    catalogue_links = relationship(
        "ArtworkCatalogue",
        back_populates="artwork",
        cascade="all, delete-orphan",
    )
    derivative_tasks = relationship(
        "DerivativeTask",
        back_populates="artwork",
        cascade="all, delete-orphan",
        order_by="DerivativeTask.created_at",
    )

    @property
    def primary_image(self):
        """Primary image, or None when the artwork has no images."""
        for image in self.images:
            if image.is_primary:
                return image
        return None

    def __repr__(self):
        return f"<Artwork(id={self.id}, status={self.status}, artist_id={self.artist_id})>"
