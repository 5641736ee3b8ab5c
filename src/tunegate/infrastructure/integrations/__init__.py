"""External integration client implementations."""

from tunegate.infrastructure.integrations.catalog_client import CatalogClient
from tunegate.infrastructure.integrations.http_pool import HttpClientPool

__all__ = ["CatalogClient", "HttpClientPool"]
