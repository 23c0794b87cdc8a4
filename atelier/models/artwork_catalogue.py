"""Artwork / catalogue membership model."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from atelier.database import Base


class ArtworkCatalogue(Base):
    """Join row placing an artwork in a catalogue at a given position."""

    __tablename__ = "artwork_catalogues"
    __table_args__ = (
        UniqueConstraint("artwork_id", "catalogue_id", name="uq_artwork_catalogues_pair"),
    )

    id = Column(Integer, primary_key=True, index=True)
    artwork_id = Column(String(36), ForeignKey("artworks.id", ondelete="CASCADE"), nullable=False, index=True)
    catalogue_id = Column(String(36), ForeignKey("catalogues.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    artwork = relationship("Artwork", back_populates="catalogue_links")
    catalogue = relationship("Catalogue", back_populates="artwork_links")

    def __repr__(self):
        return (
            f"<ArtworkCatalogue(artwork_id={self.artwork_id}, "
            f"catalogue_id={self.catalogue_id}, position={self.position})>"
        )
