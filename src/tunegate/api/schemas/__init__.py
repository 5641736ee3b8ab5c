"""Pydantic request/response models for the HTTP API."""

from tunegate.api.schemas.artists import (
    AlbumSummary,
    ArtistAlbumsData,
    ArtistAlbumsResponse,
    ArtistSongsData,
    ArtistSongsResponse,
    ErrorResponse,
    SongSummary,
)

__all__ = [
    "AlbumSummary",
    "ArtistAlbumsData",
    "ArtistAlbumsResponse",
    "ArtistSongsData",
    "ArtistSongsResponse",
    "ErrorResponse",
    "SongSummary",
]
