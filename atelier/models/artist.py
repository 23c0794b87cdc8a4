"""Artist model."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from atelier.database import Base


class Artist(Base):
    """Artist owning artworks and catalogues."""

    __tablename__ = "artists"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    display_name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    artworks = relationship("Artwork", back_populates="artist", cascade="all, delete-orphan")
    catalogues = relationship("Catalogue", back_populates="artist", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Artist(id={self.id}, display_name={self.display_name!r})>"
