"""Catalogue model."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import relationship

from atelier.database import Base


class Catalogue(Base):
    """
    Named grouping of artworks owned by an artist.

    Each artist has exactly one system catalogue ("Available Work") whose
    membership follows artwork status and is never edited by hand.
    """

    __tablename__ = "catalogues"
    __table_args__ = (
        Index(
            "uq_catalogues_system_per_artist",
            "artist_id",
            unique=True,
            postgresql_where=text("is_system_catalogue = true"),
            sqlite_where=text("is_system_catalogue = 1"),
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    artist_id = Column(String(36), ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    is_system_catalogue = Column(Boolean, nullable=False, default=False)
    is_published = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    artist = relationship("Artist", back_populates="catalogues")
    artwork_links = relationship(
        "ArtworkCatalogue",
        back_populates="catalogue",
        cascade="all, delete-orphan",
        order_by="ArtworkCatalogue.position",
    )

    def __repr__(self):
        return (
            f"<Catalogue(id={self.id}, artist_id={self.artist_id}, "
            f"title={self.title!r}, system={self.is_system_catalogue})>"
        )
