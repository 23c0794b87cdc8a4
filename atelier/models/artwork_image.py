"""Artwork image model."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from atelier.database import Base


class ArtworkImage(Base):
    """Source image of an artwork plus its derived variants."""

    __tablename__ = "artwork_images"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    artwork_id = Column(String(36), ForeignKey("artworks.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(String(1000), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    is_primary = Column(Boolean, nullable=False, default=False)

    watermarked_image_url = Column(String(1000), nullable=True)
    visualization_image_url = Column(String(1000), nullable=True)
    # Derivative status: missing, pending, ready, failed
    watermark_status = Column(String(20), nullable=False, default="missing")
    visualization_status = Column(String(20), nullable=False, default="missing")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    artwork = relationship("Artwork", back_populates="images")

    def __repr__(self):
        return f"<ArtworkImage(id={self.id}, artwork_id={self.artwork_id}, position={self.position})>"
