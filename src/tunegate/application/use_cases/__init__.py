"""Application use cases - Business logic orchestration."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

# Type variables for generic use case pattern
TRequest = TypeVar("TRequest")
TResponse = TypeVar("TResponse")


class UseCase(ABC, Generic[TRequest, TResponse]):
    """Base class for all use cases following command pattern."""

    @abstractmethod
    async def execute(self, request: TRequest) -> TResponse:
        """Execute the use case with the given request."""
        pass


# Import concrete use cases (after UseCase definition to avoid circular imports)
from tunegate.application.use_cases.aggregate_artist_catalog import (  # noqa: E402
    AggregateArtistCatalogUseCase,
    AggregateCatalogRequest,
)
from tunegate.application.use_cases.get_catalog_page import (  # noqa: E402
    GetCatalogPageRequest,
    GetCatalogPageUseCase,
)

__all__ = [
    "UseCase",
    "AggregateArtistCatalogUseCase",
    "AggregateCatalogRequest",
    "GetCatalogPageRequest",
    "GetCatalogPageUseCase",
]
