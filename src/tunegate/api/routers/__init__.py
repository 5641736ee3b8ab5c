"""API router initialization.

api_router is mounted under /api in main.py, so the artist routes become
/api/artists/{id}/songs and /api/artists/{id}/albums. The health router is mounted
at the root (/health) separately.
"""

from fastapi import APIRouter

from tunegate.api.routers import artists, health

api_router = APIRouter()
api_router.include_router(artists.router)

__all__ = ["api_router", "artists", "health"]
