"""HTTP client for the upstream music catalog.

Hey future me - the catalog is a single ``api.php`` endpoint multiplexed by the ``__call``
query parameter (JioSaavn style). Artist songs and albums are paginated server-side, but
the page size is never announced - we only learn it by looking at how many items page 1
returned. That's why this client stays dumb: ONE request, ONE decoded page, no loops. The
looping lives in the aggregate use case.

Response shapes we rely on:
    songs:  {"topSongs":  {"songs":  [{"id": "...", "name"|"title": "...", ...}], "total": 120}}
    albums: {"topAlbums": {"albums": [{"id": "...", "name"|"title": "...", ...}], "total": 35}}

Unknown artists come back as 200 with an empty body (``[]``, ``{}`` or ``null``) - that's the
catalog's way of saying "not found". A valid container with zero items is NOT "not found",
it's just an empty collection.
"""

import json
import logging
from typing import Any

import httpx
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError as PydanticValidationError,
    field_validator,
)

from tunegate.config import CatalogSettings
from tunegate.domain.dtos import CatalogItem, PageRequest, PageResponse
from tunegate.domain.exceptions import (
    ResourceNotFound,
    UpstreamShapeMismatch,
    UpstreamUnavailable,
)
from tunegate.domain.ports import ICatalogPageFetcher
from tunegate.domain.value_objects import ResourceKind
from tunegate.infrastructure.integrations.http_pool import HttpClientPool

logger = logging.getLogger(__name__)

# Fixed query parameters every catalog call needs
_BASE_PARAMS: dict[str, str] = {
    "_format": "json",
    "_marker": "0",
    "api_version": "4",
    "ctx": "web6dot0",
}


class _CatalogItemPayload(BaseModel):
    """Raw song/album entry. Everything except id and name is dropped."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    name: str = Field(validation_alias=AliasChoices("name", "title"))

    @field_validator("id", mode="before")
    @classmethod
    def coerce_numeric_id(cls, v: Any) -> Any:
        # Some catalog mirrors send numeric ids
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class _CatalogPagePayload(BaseModel):
    """Container contents: item list plus the grand total across all pages."""

    model_config = ConfigDict(extra="ignore")

    items: list[_CatalogItemPayload]
    total: int = Field(ge=0)


class CatalogClient(ICatalogPageFetcher):
    """Fetches single pages of an artist's songs or albums from the catalog.

    Holds configuration and (optionally) an injected httpx client - nothing that
    changes between calls, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        settings: CatalogSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize catalog client.

        Args:
            settings: Catalog configuration (base URL, timeout, limits)
            client: Optional httpx client. If omitted, the shared HttpClientPool is used.
        """
        self.settings = settings
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return await HttpClientPool.get_client(self.settings)

    def build_params(self, kind: ResourceKind, request: PageRequest) -> dict[str, str]:
        """Build the catalog query string for one page (page numbers are 1-based)."""
        return {
            "__call": kind.call_name,
            **_BASE_PARAMS,
            "artistId": request.resource_id,
            "page": str(request.page_number),
            "sort_order": request.sort_order.value,
            "category": request.sort_by.value,
        }

    async def fetch_page(
        self, kind: ResourceKind, request: PageRequest
    ) -> PageResponse:
        """
        Fetch and decode one catalog page.

        Args:
            kind: Songs or albums
            request: Artist id, page number and sort criteria

        Returns:
            Decoded PageResponse

        Raises:
            UpstreamUnavailable: Transport failure, timeout or non-2xx status (except 404)
            ResourceNotFound: 404, or the empty-body "unknown artist" convention
            UpstreamShapeMismatch: Body isn't JSON or doesn't match the expected shape
        """
        response = await self._request(kind, request)

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info(
                "Catalog returned 404 for artist %s (%s)", request.resource_id, kind.value
            )
            raise ResourceNotFound(kind.value, request.resource_id)

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning(
                "Catalog %s page %d for artist %s failed with HTTP %d%s",
                kind.value,
                request.page_number,
                request.resource_id,
                response.status_code,
                f": {detail}" if detail else "",
            )
            message = f"catalog answered HTTP {response.status_code}"
            if detail:
                message = f"{message}: {detail}"
            raise UpstreamUnavailable(message, status_code=response.status_code)

        page = self._decode(kind, request, response)
        logger.debug(
            "Fetched catalog %s page %d for artist %s: %d items (total %d)",
            kind.value,
            request.page_number,
            request.resource_id,
            page.items_on_this_page,
            page.total_item_count,
        )
        return page

    async def _request(
        self, kind: ResourceKind, request: PageRequest
    ) -> httpx.Response:
        client = await self._get_client()
        where = f"{kind.value} page {request.page_number} of artist {request.resource_id}"
        try:
            return await client.get(
                self.settings.base_url,
                params=self.build_params(kind, request),
                timeout=self.settings.timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning("Catalog request timed out: %s", where)
            raise UpstreamUnavailable(f"catalog request timed out ({where})") from e
        except httpx.TransportError as e:
            logger.warning("Catalog unreachable: %s (%s)", where, e)
            raise UpstreamUnavailable(
                f"catalog unreachable ({where}): {type(e).__name__}"
            ) from e

    def _decode(
        self, kind: ResourceKind, request: PageRequest, response: httpx.Response
    ) -> PageResponse:
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UpstreamShapeMismatch(
                f"catalog {kind.value} page {request.page_number} is not valid JSON"
            ) from e

        if data is None or data == [] or data == {}:
            logger.info(
                "Catalog returned empty body for artist %s (%s)",
                request.resource_id,
                kind.value,
            )
            raise ResourceNotFound(kind.value, request.resource_id)

        if not isinstance(data, dict):
            raise UpstreamShapeMismatch(
                f"catalog {kind.value} page {request.page_number}: expected object, "
                f"got {type(data).__name__}"
            )

        container = data.get(kind.container_key)
        if not isinstance(container, dict):
            raise UpstreamShapeMismatch(
                f"catalog {kind.value} page {request.page_number}: "
                f"missing '{kind.container_key}' object"
            )

        try:
            payload = _CatalogPagePayload.model_validate(
                {"items": container.get(kind.items_key), "total": container.get("total")}
            )
        except PydanticValidationError as e:
            raise UpstreamShapeMismatch(
                f"catalog {kind.value} page {request.page_number} has unexpected shape: "
                f"{e.error_count()} validation error(s)"
            ) from e

        return PageResponse(
            items=tuple(CatalogItem(id=item.id, name=item.name) for item in payload.items),
            total_item_count=payload.total,
        )


def _error_detail(response: httpx.Response) -> str | None:
    """Best-effort message from an error body, None if there isn't a usable one."""
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if isinstance(body, dict):
        error = body.get("error") or body.get("message")
        if isinstance(error, dict):
            error = error.get("msg") or error.get("message")
        if isinstance(error, str) and error:
            return error[:200]
    return None
