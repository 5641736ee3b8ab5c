"""
Data Transfer Objects passed between the catalog client, the use cases and the API.

Hey future me – these are created per request and thrown away after the response is
rendered. They're frozen on purpose: two concurrent aggregations never share one, and
nothing downstream may patch a page after the aggregator has checked it.

Flow: catalog JSON → PageResponse (client) → AggregatedResult (use case) → public shape (router)
"""

from dataclasses import dataclass, field

from tunegate.domain.exceptions import ValidationError
from tunegate.domain.value_objects import SortBy, SortOrder


@dataclass(frozen=True)
class CatalogItem:
    """One song or album, narrowed to the fields we keep."""

    id: str
    name: str


@dataclass(frozen=True)
class PageRequest:
    """Parameters for a single catalog page fetch (page numbers are 1-based)."""

    resource_id: str
    page_number: int = 1
    sort_by: SortBy = SortBy.POPULARITY
    sort_order: SortOrder = SortOrder.DESC

    def __post_init__(self) -> None:
        """Validate essential fields."""
        if not self.resource_id or not self.resource_id.strip():
            raise ValidationError("resource_id cannot be empty")
        if self.page_number < 1:
            raise ValidationError(
                f"page_number must be >= 1, got {self.page_number}"
            )


@dataclass(frozen=True)
class PageResponse:
    """One decoded catalog page.

    total_item_count is the catalog's grand total across ALL pages, not this page.
    """

    items: tuple[CatalogItem, ...]
    total_item_count: int

    @property
    def items_on_this_page(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class AggregatedResult:
    """All pages of one logical query merged in catalog order.

    total is len(items) - what we actually collected, which is not necessarily what
    the catalog claimed.
    """

    items: tuple[CatalogItem, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class CatalogPage:
    """A single catalog page as returned by the single-page mode of the API."""

    page: int
    total: int
    items: tuple[CatalogItem, ...]


__all__ = [
    "AggregatedResult",
    "CatalogItem",
    "CatalogPage",
    "PageRequest",
    "PageResponse",
]
