"""Response schemas for the artist catalog endpoints.

Hey future me - public field names are camelCase on the wire (musicId, albumId) to stay
compatible with existing clients. The Python side stays snake_case; populate_by_name
accepts either spelling, and FastAPI serializes response models by alias.
"""

from pydantic import BaseModel, ConfigDict, Field


class SongSummary(BaseModel):
    """Public shape of a song: just its id."""

    model_config = ConfigDict(populate_by_name=True)

    music_id: str = Field(
        ..., alias="musicId", description="Catalog song ID"
    )


class AlbumSummary(BaseModel):
    """Public shape of an album."""

    model_config = ConfigDict(populate_by_name=True)

    album_id: str = Field(
        ..., alias="albumId", description="Catalog album ID"
    )
    name: str = Field(..., description="Album title")


class ArtistSongsData(BaseModel):
    total: int = Field(..., description="Number of songs returned (or catalog total in page mode)")
    page: int | None = Field(
        None, description="Catalog page returned, null when all pages were aggregated"
    )
    songs: list[SongSummary] = Field(default_factory=list)


class ArtistAlbumsData(BaseModel):
    total: int = Field(..., description="Number of albums returned (or catalog total in page mode)")
    page: int | None = Field(
        None, description="Catalog page returned, null when all pages were aggregated"
    )
    albums: list[AlbumSummary] = Field(default_factory=list)


class ArtistSongsResponse(BaseModel):
    """Success envelope for GET /artists/{id}/songs."""

    success: bool = True
    data: ArtistSongsData


class ArtistAlbumsResponse(BaseModel):
    """Success envelope for GET /artists/{id}/albums."""

    success: bool = True
    data: ArtistAlbumsData


class ErrorResponse(BaseModel):
    """Failure envelope produced by the exception handlers."""

    success: bool = False
    message: str
