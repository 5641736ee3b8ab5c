"""Fetch a single catalog page (the API's ``?page=N`` mode)."""

import logging
from dataclasses import dataclass

from tunegate.application.use_cases import UseCase
from tunegate.domain.dtos import CatalogPage, PageRequest
from tunegate.domain.ports import ICatalogPageFetcher
from tunegate.domain.value_objects import ResourceKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetCatalogPageRequest:
    kind: ResourceKind
    page: PageRequest


class GetCatalogPageUseCase(UseCase[GetCatalogPageRequest, CatalogPage]):
    """Pass one catalog page through unchanged.

    total is the catalog's grand total, so callers can page through themselves.
    """

    def __init__(self, fetcher: ICatalogPageFetcher) -> None:
        self._fetcher = fetcher

    async def execute(self, request: GetCatalogPageRequest) -> CatalogPage:
        page = await self._fetcher.fetch_page(request.kind, request.page)
        logger.debug(
            "Returning single %s page %d for artist %s (%d items)",
            request.kind.value,
            request.page.page_number,
            request.page.resource_id,
            page.items_on_this_page,
        )
        return CatalogPage(
            page=request.page.page_number,
            total=page.total_item_count,
            items=page.items,
        )
