"""Aggregate every page of an artist's songs or albums into one collection.

Hey future me - this is the one piece of real logic in the service. The catalog never tells
us its page size or page count up front; we only find out after page 1 arrives
(page_size = items on page 1, total_pages = ceil(total / page_size)). So this is a
read-then-decide loop, not a precomputed fan-out.

Rules that keep the loop honest:
- Page 1 empty → done, empty result. No division by zero, no 404 (that's the client's call).
- Page size and grand total are pinned by page 1. If a later page disagrees (different total,
  oversized page, short page that isn't the last one, empty last page) we bail out with
  UpstreamShapeMismatch instead of recomputing - recomputing is how you get truncated
  collections or fetch loops that never end.
- Any fetch error aborts the whole thing. There is no partial result.
- sort_by/sort_order go to every page unchanged. We never re-sort; order is the catalog's job.

Prefetch: once page 1 told us how many pages exist, pages 2..N may be fetched in batches of
prefetch_concurrency. Default 1 = strictly sequential. Items are still appended in page order.
"""

import asyncio
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from tunegate.application.use_cases import UseCase
from tunegate.domain.dtos import AggregatedResult, CatalogItem, PageRequest, PageResponse
from tunegate.domain.exceptions import UpstreamShapeMismatch
from tunegate.domain.ports import ICatalogPageFetcher
from tunegate.domain.value_objects import ResourceKind, SortBy, SortOrder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateCatalogRequest:
    """One logical query: all songs (or albums) of an artist in a given order."""

    kind: ResourceKind
    resource_id: str
    sort_by: SortBy = SortBy.POPULARITY
    sort_order: SortOrder = SortOrder.DESC

    def page(self, page_number: int) -> PageRequest:
        return PageRequest(
            resource_id=self.resource_id,
            page_number=page_number,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
        )


class AggregateArtistCatalogUseCase(
    UseCase[AggregateCatalogRequest, AggregatedResult]
):
    """Walk all catalog pages of one query and merge them.

    Stateless between calls: holds the fetcher and two limits, nothing else.
    """

    def __init__(
        self,
        fetcher: ICatalogPageFetcher,
        max_pages: int = 200,
        prefetch_concurrency: int = 1,
    ) -> None:
        """
        Args:
            fetcher: Port used to fetch single pages
            max_pages: Refuse queries whose page count exceeds this
            prefetch_concurrency: Pages fetched concurrently after page 1 (1 = sequential)
        """
        self._fetcher = fetcher
        self._max_pages = max_pages
        self._prefetch_concurrency = max(1, prefetch_concurrency)

    async def execute(self, request: AggregateCatalogRequest) -> AggregatedResult:
        """
        Fetch and merge all pages for the request.

        Returns:
            AggregatedResult with items in catalog order

        Raises:
            UpstreamUnavailable: A page fetch failed at transport/HTTP level
            UpstreamShapeMismatch: A page didn't decode, or pages disagree with each other
            ResourceNotFound: The catalog says the artist doesn't exist
        """
        first = await self._fetch(request, 1)

        if first.items_on_this_page == 0:
            if first.total_item_count > 0:
                logger.warning(
                    "Catalog reported %d %s for artist %s but page 1 is empty - returning nothing",
                    first.total_item_count,
                    request.kind.value,
                    request.resource_id,
                )
            return AggregatedResult()

        page_size = first.items_on_this_page
        expected_total = first.total_item_count
        total_pages = math.ceil(expected_total / page_size)

        if expected_total < page_size:
            logger.warning(
                "Catalog total (%d) is smaller than page 1 (%d items) for artist %s %s",
                expected_total,
                page_size,
                request.resource_id,
                request.kind.value,
            )

        if total_pages > self._max_pages:
            raise UpstreamShapeMismatch(
                f"catalog reports {total_pages} pages of {request.kind.value} for artist "
                f"{request.resource_id}, limit is {self._max_pages}"
            )

        accumulated: list[CatalogItem] = list(first.items)
        page_number = 2
        while page_number <= total_pages:
            batch = range(
                page_number,
                min(page_number + self._prefetch_concurrency, total_pages + 1),
            )
            pages = await self._fetch_batch(request, batch)
            for number, page in zip(batch, pages, strict=True):
                self._check_consistency(
                    request, number, page, page_size, expected_total, total_pages
                )
                accumulated.extend(page.items)
            page_number = batch.stop

        logger.info(
            "Aggregated %d %s for artist %s over %d page(s)",
            len(accumulated),
            request.kind.value,
            request.resource_id,
            max(total_pages, 1),
        )
        return AggregatedResult(items=tuple(accumulated))

    async def _fetch(
        self, request: AggregateCatalogRequest, page_number: int
    ) -> PageResponse:
        return await self._fetcher.fetch_page(request.kind, request.page(page_number))

    async def _fetch_batch(
        self, request: AggregateCatalogRequest, page_numbers: Sequence[int]
    ) -> list[PageResponse]:
        if len(page_numbers) == 1:
            return [await self._fetch(request, page_numbers[0])]

        tasks = [
            asyncio.ensure_future(self._fetch(request, number))
            for number in page_numbers
        ]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            # gather() leaves siblings running when one fails
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    def _check_consistency(
        self,
        request: AggregateCatalogRequest,
        page_number: int,
        page: PageResponse,
        page_size: int,
        expected_total: int,
        total_pages: int,
    ) -> None:
        where = f"{request.kind.value} page {page_number} of artist {request.resource_id}"

        if page.total_item_count != expected_total:
            raise UpstreamShapeMismatch(
                f"catalog total changed mid-sequence ({expected_total} -> "
                f"{page.total_item_count}) at {where}"
            )
        if page.items_on_this_page > page_size:
            raise UpstreamShapeMismatch(
                f"catalog page size grew from {page_size} to "
                f"{page.items_on_this_page} at {where}"
            )

        is_last = page_number == total_pages
        if not is_last and page.items_on_this_page != page_size:
            raise UpstreamShapeMismatch(
                f"short page ({page.items_on_this_page} of {page_size} items) before the "
                f"last page at {where}"
            )
        if is_last and page.items_on_this_page == 0:
            raise UpstreamShapeMismatch(f"last page is empty at {where}")

        if is_last:
            remainder = expected_total - page_size * (total_pages - 1)
            if page.items_on_this_page != remainder:
                logger.warning(
                    "Last page holds %d items, expected %d (%s)",
                    page.items_on_this_page,
                    remainder,
                    where,
                )
