"""Application lifecycle management for startup and shutdown tasks.

Startup: configure logging from settings. Shutdown: close the shared HTTP pool so
keep-alive connections to the catalog are released. There are no workers and no
database - the service is stateless per request.
"""

import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastapi import FastAPI

from tunegate.config import Settings
from tunegate.infrastructure.integrations import HttpClientPool
from tunegate.infrastructure.observability import configure_logging

logger = logging.getLogger(__name__)


def build_lifespan(
    settings: Settings,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Create the lifespan context manager bound to the given settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        configure_logging(
            log_level=settings.observability.level,
            json_format=settings.observability.json_format,
            app_name=settings.app_name,
        )
        logger.info(
            "Starting %s %s (catalog=%s, timeout=%.1fs)",
            settings.app_name,
            settings.app_version,
            settings.catalog.base_url,
            settings.catalog.timeout,
        )
        try:
            yield
        finally:
            await HttpClientPool.close()
            logger.info("Shutdown complete")

    return lifespan
