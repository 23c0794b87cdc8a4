"""API v1 router."""

from fastapi import APIRouter

from atelier.api.v1.endpoints import (
    artists,
    artworks,
    catalogues,
    derivatives,
    editions,
    health,
    images,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(artists.router, prefix="/artists", tags=["artists"])
api_router.include_router(artworks.router, prefix="/artworks", tags=["artworks"])
api_router.include_router(editions.router, prefix="/artworks", tags=["editions"])
api_router.include_router(images.router, prefix="/artworks", tags=["images"])
api_router.include_router(derivatives.router, prefix="/artworks", tags=["derivatives"])
api_router.include_router(catalogues.router, prefix="/catalogues", tags=["catalogues"])
