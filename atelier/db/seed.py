"""Database seeding script."""

from decimal import Decimal

from atelier.database import SessionLocal
from atelier.models.artist import Artist
from atelier.schemas.artwork import ArtworkCreate, Dimensions, EditionInput, Pricing
from atelier.schemas.catalogue import CatalogueCreate
from atelier.services.artist_service import create_artist
from atelier.services.artwork_service import create_artwork
from atelier.services.catalogue_service import create_catalogue

DEMO_ARTIST_NAME = "Demo Artist"


def seed_database():
    """Seed database with a demo artist, catalogue and artworks."""
    db = SessionLocal()

    try:
        if db.query(Artist).filter_by(display_name=DEMO_ARTIST_NAME).first():
            print("Database already seeded. Skipping.")
            return

        artist = create_artist(db, DEMO_ARTIST_NAME)
        print(f"Created artist: {artist.display_name} (ID: {artist.id})")

        catalogue = create_catalogue(
            db, artist.id, CatalogueCreate(title="Coastal Series", description="Studies of the shoreline")
        )
        print(f"Created catalogue: {catalogue.title}")

        painting = create_artwork(db, artist.id, ArtworkCreate(
            title="Low Tide at Dusk",
            description="Oil study of wet sand and reflected light",
            medium="Oil on canvas",
            pricing=Pricing(mode="fixed", price=Decimal("1800.00")),
            dimensions=Dimensions(width=60, height=80, unit="cm"),
            catalogue_ids=[catalogue.id],
        ))
        print(f"Created artwork: {painting.title} ({painting.status})")

        print_run = create_artwork(db, artist.id, ArtworkCreate(
            title="Harbour Lines",
            description="Screen print in three colours",
            medium="Screen print",
            pricing=Pricing(mode="negotiable", min_price=Decimal("150"), max_price=Decimal("220")),
            dimensions=Dimensions(width=30, height=40, unit="cm"),
            edition=EditionInput(is_edition=True, numeric_size=20, ap_size=2),
            catalogue_ids=[catalogue.id],
        ))
        print(f"Created edition: {print_run.title} ({print_run.edition_numeric_size} + {print_run.edition_ap_size} AP)")

        print("\nDatabase seeded successfully!")

    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    print("Starting database seeding...")
    seed_database()
