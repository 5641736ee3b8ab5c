"""FastAPI dependency providers.

Hey future me - everything here is cheap to build per request: the catalog client and the
use cases only hold configuration plus a handle to the pooled httpx client. Tests swap
these out with app.dependency_overrides instead of patching modules.
"""

from fastapi import Depends

from tunegate.application.use_cases import (
    AggregateArtistCatalogUseCase,
    GetCatalogPageUseCase,
)
from tunegate.config import Settings, get_settings
from tunegate.domain.ports import ICatalogPageFetcher
from tunegate.infrastructure.integrations import CatalogClient


def get_catalog_client(
    settings: Settings = Depends(get_settings),
) -> ICatalogPageFetcher:
    """Catalog client backed by the shared HTTP pool."""
    return CatalogClient(settings.catalog)


def get_aggregate_catalog_use_case(
    settings: Settings = Depends(get_settings),
    fetcher: ICatalogPageFetcher = Depends(get_catalog_client),
) -> AggregateArtistCatalogUseCase:
    return AggregateArtistCatalogUseCase(
        fetcher,
        max_pages=settings.catalog.max_pages,
        prefetch_concurrency=settings.catalog.prefetch_concurrency,
    )


def get_catalog_page_use_case(
    fetcher: ICatalogPageFetcher = Depends(get_catalog_client),
) -> GetCatalogPageUseCase:
    return GetCatalogPageUseCase(fetcher)
