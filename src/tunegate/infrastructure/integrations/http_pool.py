"""Shared HTTP client pool for connection reuse across requests.

Hey future me - one aggregation can mean dozens of catalog page fetches, and many artists
get aggregated concurrently. Creating an httpx.AsyncClient per request would throw away
keep-alive every time. Everything goes through this one pooled client instead; the
lifespan closes it at shutdown (see lifecycle.py).

Usage:
    client = await HttpClientPool.get_client(settings.catalog)
    response = await client.get(url, params=...)
"""

import asyncio
import logging
from typing import ClassVar

import httpx

from tunegate.config import CatalogSettings

logger = logging.getLogger(__name__)


class HttpClientPool:
    """Process-wide pooled ``httpx.AsyncClient``.

    Lazily created on first use; configuration only applies on that first call.
    The client itself is safe to share between concurrent requests - it holds
    connections, never per-request data.
    """

    _client: ClassVar[httpx.AsyncClient | None] = None
    _lock: ClassVar[asyncio.Lock | None] = None

    @classmethod
    def _ensure_lock(cls) -> asyncio.Lock:
        # Created lazily so it's bound to the running loop, not import time
        if cls._lock is None:
            cls._lock = asyncio.Lock()
        return cls._lock

    @classmethod
    async def get_client(cls, settings: CatalogSettings) -> httpx.AsyncClient:
        """Get the shared HTTP client, creating it on first call.

        Args:
            settings: Catalog settings (timeout, connection limits, HTTP/2, UA)

        Returns:
            Shared httpx.AsyncClient instance
        """
        async with cls._ensure_lock():
            if cls._client is None:
                cls._client = httpx.AsyncClient(
                    timeout=httpx.Timeout(settings.timeout),
                    limits=httpx.Limits(
                        max_keepalive_connections=settings.max_keepalive,
                        max_connections=settings.max_connections,
                    ),
                    headers={
                        "User-Agent": settings.user_agent,
                        "Accept": "application/json",
                    },
                    http2=settings.http2,
                    follow_redirects=True,
                )
                logger.info(
                    "HTTP client pool initialized (timeout=%.1fs, keepalive=%d, max_conn=%d, http2=%s)",
                    settings.timeout,
                    settings.max_keepalive,
                    settings.max_connections,
                    settings.http2,
                )
            return cls._client

    @classmethod
    async def close(cls) -> None:
        """Close the shared client and release all connections.

        After close(), get_client() creates a fresh client.
        """
        async with cls._ensure_lock():
            if cls._client is not None:
                await cls._client.aclose()
                cls._client = None
                logger.info("HTTP client pool closed")
        cls._lock = None

    @classmethod
    def is_initialized(cls) -> bool:
        """Check if the pooled client exists (used by the health endpoint)."""
        return cls._client is not None
