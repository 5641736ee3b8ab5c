"""Artist catalog API endpoints.

Hey future me - these routes are thin on purpose. All the paging work happens in the use
cases; this module only validates query params, picks the mode, and projects CatalogItem
down to the public shape (songs → musicId, albums → albumId + name). The projection lives
HERE and not in the aggregator so the aggregator stays the same for songs and albums.

Two modes per endpoint:
- no ``page``: every catalog page is fetched and merged, total = number of items returned
- ``page=N``: exactly catalog page N, total = the catalog's grand total
"""

import logging

from fastapi import APIRouter, Depends, Path, Query

from tunegate.api.dependencies import (
    get_aggregate_catalog_use_case,
    get_catalog_page_use_case,
)
from tunegate.api.schemas import (
    AlbumSummary,
    ArtistAlbumsData,
    ArtistAlbumsResponse,
    ArtistSongsData,
    ArtistSongsResponse,
    ErrorResponse,
    SongSummary,
)
from tunegate.application.use_cases import (
    AggregateArtistCatalogUseCase,
    AggregateCatalogRequest,
    GetCatalogPageRequest,
    GetCatalogPageUseCase,
)
from tunegate.domain.dtos import CatalogItem, PageRequest
from tunegate.domain.value_objects import ResourceKind, SortBy, SortOrder

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/artists", tags=["Artists"])

_ERROR_RESPONSES: dict[int | str, dict] = {
    404: {"model": ErrorResponse, "description": "Artist not found for the given ID"},
    422: {"model": ErrorResponse, "description": "Invalid query parameters"},
    502: {"model": ErrorResponse, "description": "Catalog returned an unusable payload"},
    503: {"model": ErrorResponse, "description": "Catalog unreachable or failing"},
}


def _to_song_summary(item: CatalogItem) -> SongSummary:
    return SongSummary(music_id=item.id)


def _to_album_summary(item: CatalogItem) -> AlbumSummary:
    return AlbumSummary(album_id=item.id, name=item.name)


async def _load_items(
    kind: ResourceKind,
    artist_id: str,
    sort_by: SortBy,
    sort_order: SortOrder,
    page: int | None,
    aggregate: AggregateArtistCatalogUseCase,
    single_page: GetCatalogPageUseCase,
) -> tuple[int, tuple[CatalogItem, ...]]:
    """Run whichever mode was requested, return (total, items)."""
    logger.debug(
        "Artist %s %s: %s",
        artist_id,
        kind.value,
        "all pages" if page is None else f"page {page}",
    )
    if page is None:
        result = await aggregate.execute(
            AggregateCatalogRequest(
                kind=kind,
                resource_id=artist_id,
                sort_by=sort_by,
                sort_order=sort_order,
            )
        )
        return result.total, result.items

    catalog_page = await single_page.execute(
        GetCatalogPageRequest(
            kind=kind,
            page=PageRequest(
                resource_id=artist_id,
                page_number=page,
                sort_by=sort_by,
                sort_order=sort_order,
            ),
        )
    )
    return catalog_page.total, catalog_page.items


@router.get(
    "/{artist_id}/songs",
    response_model=ArtistSongsResponse,
    responses=_ERROR_RESPONSES,
    summary="Retrieve artist's songs (music IDs + total count)",
    operation_id="getArtistSongs",
)
async def get_artist_songs(
    artist_id: str = Path(
        ..., description="ID of the artist to retrieve the songs for", examples=["1274170"]
    ),
    page: int | None = Query(
        None,
        ge=1,
        description="Return only this catalog page (1-based). Omit to get all songs.",
    ),
    sort_by: SortBy = Query(
        SortBy.POPULARITY, alias="sortBy", description="The criterion to sort the songs by"
    ),
    sort_order: SortOrder = Query(
        SortOrder.DESC, alias="sortOrder", description="The order to sort the songs"
    ),
    aggregate: AggregateArtistCatalogUseCase = Depends(get_aggregate_catalog_use_case),
    single_page: GetCatalogPageUseCase = Depends(get_catalog_page_use_case),
) -> ArtistSongsResponse:
    """Retrieve the songs of an artist, returning only music IDs and the total count."""
    total, items = await _load_items(
        ResourceKind.SONGS, artist_id, sort_by, sort_order, page, aggregate, single_page
    )
    return ArtistSongsResponse(
        data=ArtistSongsData(
            total=total,
            page=page,
            songs=[_to_song_summary(item) for item in items],
        )
    )


@router.get(
    "/{artist_id}/albums",
    response_model=ArtistAlbumsResponse,
    responses=_ERROR_RESPONSES,
    summary="Retrieve artist's albums",
    operation_id="getArtistAlbums",
)
async def get_artist_albums(
    artist_id: str = Path(
        ..., description="ID of the artist to retrieve the albums for", examples=["1274170"]
    ),
    page: int | None = Query(
        None,
        ge=1,
        description="Return only this catalog page (1-based). Omit to get all albums.",
    ),
    sort_by: SortBy = Query(
        SortBy.POPULARITY, alias="sortBy", description="The criterion to sort the albums by"
    ),
    sort_order: SortOrder = Query(
        SortOrder.DESC, alias="sortOrder", description="The order to sort the albums"
    ),
    aggregate: AggregateArtistCatalogUseCase = Depends(get_aggregate_catalog_use_case),
    single_page: GetCatalogPageUseCase = Depends(get_catalog_page_use_case),
) -> ArtistAlbumsResponse:
    """Retrieve the albums of an artist (album IDs and titles + total count)."""
    total, items = await _load_items(
        ResourceKind.ALBUMS, artist_id, sort_by, sort_order, page, aggregate, single_page
    )
    return ArtistAlbumsResponse(
        data=ArtistAlbumsData(
            total=total,
            page=page,
            albums=[_to_album_summary(item) for item in items],
        )
    )
