"""Catalog query value objects.

Hey future me - these enums are the ONLY place the allowed sort values live. The API
layer uses them directly as query parameter types so FastAPI rejects anything else
with a 422 before we ever talk to the catalog. The string values are exactly what the
catalog expects on the wire (category=..., sort_order=...), so .value is passed through
unchanged.
"""

from enum import Enum


class SortBy(str, Enum):
    """Criterion the catalog sorts an artist's songs/albums by."""

    POPULARITY = "popularity"
    LATEST = "latest"
    ALPHABETICAL = "alphabetical"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class ResourceKind(str, Enum):
    """Which per-artist collection of the catalog to walk.

    Each kind maps to its own catalog call and JSON container. The aggregation logic
    doesn't care which one it gets - only the catalog client does.
    """

    SONGS = "songs"
    ALBUMS = "albums"

    @property
    def call_name(self) -> str:
        """Catalog ``__call`` value for this kind."""
        return _CALL_NAMES[self]

    @property
    def container_key(self) -> str:
        """Top-level JSON key wrapping the page (e.g. ``topSongs``)."""
        return _CONTAINER_KEYS[self]

    @property
    def items_key(self) -> str:
        """Key of the item list inside the container."""
        return self.value


_CALL_NAMES = {
    ResourceKind.SONGS: "artist.getArtistMoreSong",
    ResourceKind.ALBUMS: "artist.getArtistMoreAlbum",
}

_CONTAINER_KEYS = {
    ResourceKind.SONGS: "topSongs",
    ResourceKind.ALBUMS: "topAlbums",
}


__all__ = ["ResourceKind", "SortBy", "SortOrder"]
