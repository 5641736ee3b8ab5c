"""Tests for the catalog pagination aggregator."""

import asyncio
import math

import pytest

from tunegate.application.use_cases import (
    AggregateArtistCatalogUseCase,
    AggregateCatalogRequest,
)
from tunegate.domain.dtos import CatalogItem, PageRequest, PageResponse
from tunegate.domain.exceptions import (
    ResourceNotFound,
    UpstreamShapeMismatch,
    UpstreamUnavailable,
)
from tunegate.domain.ports import ICatalogPageFetcher
from tunegate.domain.value_objects import ResourceKind, SortBy, SortOrder


class FakeCatalog(ICatalogPageFetcher):
    """In-memory catalog serving fixed-size pages and recording every call.

    failures maps page number → exception raised instead of serving that page.
    overrides maps page number → PageResponse served instead of the computed page.
    """

    def __init__(
        self,
        total: int,
        page_size: int,
        failures: dict[int, Exception] | None = None,
        overrides: dict[int, PageResponse] | None = None,
    ) -> None:
        self.items = [CatalogItem(id=f"s{i}", name=f"Song {i}") for i in range(total)]
        self.page_size = page_size
        self.failures = failures or {}
        self.overrides = overrides or {}
        self.calls: list[tuple[ResourceKind, PageRequest]] = []

    @property
    def pages_fetched(self) -> list[int]:
        return [request.page_number for _, request in self.calls]

    async def fetch_page(self, kind: ResourceKind, request: PageRequest) -> PageResponse:
        self.calls.append((kind, request))
        number = request.page_number
        if number in self.failures:
            raise self.failures[number]
        if number in self.overrides:
            return self.overrides[number]
        start = (number - 1) * self.page_size
        return PageResponse(
            items=tuple(self.items[start : start + self.page_size]),
            total_item_count=len(self.items),
        )


def songs_of(artist: str, **kwargs) -> AggregateCatalogRequest:
    return AggregateCatalogRequest(kind=ResourceKind.SONGS, resource_id=artist, **kwargs)


class TestAggregationTotals:
    """N items over pages of size P always come back complete."""

    @pytest.mark.parametrize(
        ("total", "page_size"),
        [(1, 1), (10, 10), (11, 10), (120, 50), (99, 7), (250, 100)],
    )
    async def test_returns_every_item(self, total: int, page_size: int) -> None:
        catalog = FakeCatalog(total=total, page_size=page_size)

        result = await AggregateArtistCatalogUseCase(catalog).execute(songs_of("a1"))

        assert result.total == total
        assert list(result.items) == catalog.items
        assert catalog.pages_fetched == list(range(1, math.ceil(total / page_size) + 1))

    async def test_1274170_fetches_three_pages(self) -> None:
        catalog = FakeCatalog(total=120, page_size=50)

        result = await AggregateArtistCatalogUseCase(catalog).execute(songs_of("1274170"))

        assert catalog.pages_fetched == [1, 2, 3]
        assert result.total == 120
        assert len(result.items) == 120

    async def test_unknown_artist_with_zero_total_fetches_once(self) -> None:
        catalog = FakeCatalog(total=0, page_size=50)

        result = await AggregateArtistCatalogUseCase(catalog).execute(songs_of("unknown"))

        assert catalog.pages_fetched == [1]
        assert result.total == 0
        assert result.items == ()

    async def test_empty_first_page_with_positive_total_terminates(self) -> None:
        catalog = FakeCatalog(
            total=0,
            page_size=50,
            overrides={1: PageResponse(items=(), total_item_count=30)},
        )

        result = await AggregateArtistCatalogUseCase(catalog).execute(songs_of("a1"))

        assert catalog.pages_fetched == [1]
        assert result.total == 0


class TestPassThrough:
    """Sort criteria and resource kind reach every page fetch unchanged."""

    async def test_sort_parameters_forwarded_to_every_page(self) -> None:
        catalog = FakeCatalog(total=25, page_size=10)

        await AggregateArtistCatalogUseCase(catalog).execute(
            songs_of("a1", sort_by=SortBy.ALPHABETICAL, sort_order=SortOrder.ASC)
        )

        assert len(catalog.calls) == 3
        for kind, request in catalog.calls:
            assert kind == ResourceKind.SONGS
            assert request.resource_id == "a1"
            assert request.sort_by == SortBy.ALPHABETICAL
            assert request.sort_order == SortOrder.ASC

    async def test_albums_kind_forwarded(self) -> None:
        catalog = FakeCatalog(total=3, page_size=2)

        await AggregateArtistCatalogUseCase(catalog).execute(
            AggregateCatalogRequest(kind=ResourceKind.ALBUMS, resource_id="a1")
        )

        assert {kind for kind, _ in catalog.calls} == {ResourceKind.ALBUMS}

    async def test_repeated_calls_are_identical(self) -> None:
        catalog = FakeCatalog(total=57, page_size=20)
        use_case = AggregateArtistCatalogUseCase(catalog)

        first = await use_case.execute(songs_of("a1"))
        second = await use_case.execute(songs_of("a1"))

        assert first == second
        assert catalog.pages_fetched == [1, 2, 3, 1, 2, 3]


class TestFailurePropagation:
    """Any failing page aborts the whole aggregation."""

    async def test_page_two_timeout_returns_nothing(self) -> None:
        catalog = FakeCatalog(
            total=120,
            page_size=50,
            failures={2: UpstreamUnavailable("catalog request timed out")},
        )

        with pytest.raises(UpstreamUnavailable):
            await AggregateArtistCatalogUseCase(catalog).execute(songs_of("1274170"))

        assert catalog.pages_fetched == [1, 2]

    async def test_not_found_on_first_page_propagates(self) -> None:
        catalog = FakeCatalog(
            total=0, page_size=50, failures={1: ResourceNotFound("songs", "x")}
        )

        with pytest.raises(ResourceNotFound):
            await AggregateArtistCatalogUseCase(catalog).execute(songs_of("x"))

    async def test_shape_mismatch_on_later_page_propagates(self) -> None:
        catalog = FakeCatalog(
            total=30, page_size=10, failures={3: UpstreamShapeMismatch("bad page")}
        )

        with pytest.raises(UpstreamShapeMismatch, match="bad page"):
            await AggregateArtistCatalogUseCase(catalog).execute(songs_of("a1"))

    async def test_cancelling_request_stops_at_in_flight_page(self) -> None:
        """Cancelling the caller cancels the pending fetch and no later page starts."""
        page_two_started = asyncio.Event()
        cancelled: list[int] = []

        class BlockingCatalog(FakeCatalog):
            async def fetch_page(self, kind, request):
                if request.page_number == 2:
                    self.calls.append((kind, request))
                    page_two_started.set()
                    try:
                        await asyncio.sleep(10)
                    except asyncio.CancelledError:
                        cancelled.append(request.page_number)
                        raise
                return await super().fetch_page(kind, request)

        catalog = BlockingCatalog(total=30, page_size=10)
        task = asyncio.create_task(
            AggregateArtistCatalogUseCase(catalog).execute(songs_of("a1"))
        )
        await page_two_started.wait()

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert catalog.pages_fetched == [1, 2]
        assert cancelled == [2]


class TestInconsistentPages:
    """Pages that disagree with page 1 are fatal instead of silently recomputed."""

    async def test_total_change_mid_sequence(self) -> None:
        catalog = FakeCatalog(total=30, page_size=10)
        catalog.overrides[2] = PageResponse(
            items=tuple(catalog.items[10:20]), total_item_count=45
        )

        with pytest.raises(UpstreamShapeMismatch, match="total changed"):
            await AggregateArtistCatalogUseCase(catalog).execute(songs_of("a1"))

        assert catalog.pages_fetched == [1, 2]

    async def test_page_size_grows(self) -> None:
        catalog = FakeCatalog(total=30, page_size=10)
        catalog.overrides[2] = PageResponse(
            items=tuple(catalog.items[10:22]), total_item_count=30
        )

        with pytest.raises(UpstreamShapeMismatch, match="page size grew"):
            await AggregateArtistCatalogUseCase(catalog).execute(songs_of("a1"))

    async def test_short_page_before_last(self) -> None:
        catalog = FakeCatalog(total=30, page_size=10)
        catalog.overrides[2] = PageResponse(
            items=tuple(catalog.items[10:15]), total_item_count=30
        )

        with pytest.raises(UpstreamShapeMismatch, match="short page"):
            await AggregateArtistCatalogUseCase(catalog).execute(songs_of("a1"))

    async def test_empty_last_page(self) -> None:
        catalog = FakeCatalog(total=30, page_size=10)
        catalog.overrides[3] = PageResponse(items=(), total_item_count=30)

        with pytest.raises(UpstreamShapeMismatch, match="last page is empty"):
            await AggregateArtistCatalogUseCase(catalog).execute(songs_of("a1"))

    async def test_short_last_page_is_accepted(self) -> None:
        catalog = FakeCatalog(total=30, page_size=10)
        catalog.overrides[3] = PageResponse(
            items=tuple(catalog.items[20:25]), total_item_count=30
        )

        result = await AggregateArtistCatalogUseCase(catalog).execute(songs_of("a1"))

        assert result.total == 25

    async def test_page_count_over_limit(self) -> None:
        catalog = FakeCatalog(total=1000, page_size=1)

        with pytest.raises(UpstreamShapeMismatch, match="limit is 50"):
            await AggregateArtistCatalogUseCase(catalog, max_pages=50).execute(
                songs_of("a1")
            )

        assert catalog.pages_fetched == [1]


class TestPrefetch:
    """Concurrent fetching of known pages keeps order and failure semantics."""

    async def test_prefetch_preserves_order(self) -> None:
        catalog = FakeCatalog(total=95, page_size=10)

        result = await AggregateArtistCatalogUseCase(
            catalog, prefetch_concurrency=4
        ).execute(songs_of("a1"))

        assert list(result.items) == catalog.items
        assert sorted(catalog.pages_fetched) == list(range(1, 11))
        assert catalog.pages_fetched[0] == 1

    async def test_prefetch_failure_cancels_batch(self) -> None:
        started: list[int] = []
        cancelled: list[int] = []

        class SlowCatalog(FakeCatalog):
            async def fetch_page(self, kind, request):
                if request.page_number == 1:
                    return await super().fetch_page(kind, request)
                started.append(request.page_number)
                if request.page_number == 2:
                    raise UpstreamUnavailable("boom")
                try:
                    await asyncio.sleep(10)
                except asyncio.CancelledError:
                    cancelled.append(request.page_number)
                    raise
                return await super().fetch_page(kind, request)

        catalog = SlowCatalog(total=40, page_size=10)

        with pytest.raises(UpstreamUnavailable, match="boom"):
            await AggregateArtistCatalogUseCase(
                catalog, prefetch_concurrency=3
            ).execute(songs_of("a1"))

        assert sorted(started) == [2, 3, 4]
        assert sorted(cancelled) == [3, 4]
