"""Derivative task model."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from atelier.database import Base


class DerivativeTask(Base):
    """Durable request to regenerate an artwork's derived images."""

    __tablename__ = "derivative_tasks"

    id = Column(Integer, primary_key=True, index=True)
    artwork_id = Column(String(36), ForeignKey("artworks.id", ondelete="CASCADE"), nullable=False, index=True)
    source_image_id = Column(String(36), nullable=True)
    force_watermark = Column(Boolean, nullable=False, default=False)
    force_visualization = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default="pending", index=True)
    # Status: pending, processing, done, failed
    attempts = Column(Integer, nullable=False, default=0)
    max_attempts = Column(Integer, nullable=False, default=5)
    last_error = Column(Text, nullable=True)
    next_attempt_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    completed_at = Column(DateTime, nullable=True)

    artwork = relationship("Artwork", back_populates="derivative_tasks")

    def __repr__(self):
        return f"<DerivativeTask(id={self.id}, artwork_id={self.artwork_id}, status={self.status})>"
