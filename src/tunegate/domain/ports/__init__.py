"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod

from tunegate.domain.dtos import PageRequest, PageResponse
from tunegate.domain.value_objects import ResourceKind


class ICatalogPageFetcher(ABC):
    """Port for fetching one page of an artist's catalog collection."""

    @abstractmethod
    async def fetch_page(
        self, kind: ResourceKind, request: PageRequest
    ) -> PageResponse:
        """
        Fetch a single page from the catalog.

        Exactly one outbound request per call, no retries.

        Args:
            kind: Which collection to read (songs or albums)
            request: Artist id, 1-based page number and sort criteria

        Returns:
            Decoded page

        Raises:
            UpstreamUnavailable: Transport failure or non-success status
            UpstreamShapeMismatch: Body doesn't decode into a page
            ResourceNotFound: Catalog says the artist doesn't exist
        """
        pass


__all__ = ["ICatalogPageFetcher"]
