"""FastAPI application factory and server entry point."""

import uvicorn
from fastapi import FastAPI

from tunegate.api import api_router, health
from tunegate.api.exception_handlers import register_exception_handlers
from tunegate.config import Settings, get_settings
from tunegate.infrastructure.lifecycle import build_lifespan
from tunegate.infrastructure.observability import RequestLoggingMiddleware


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="tunegate",
        version=settings.app_version,
        description=(
            "Artist songs and albums from the music catalog, all pages merged into "
            "one response (or a single page with ?page=N)."
        ),
        debug=settings.debug,
        lifespan=build_lifespan(settings),
        docs_url="/docs" if settings.api.docs_enabled else None,
        redoc_url="/redoc" if settings.api.docs_enabled else None,
    )

    # Request dependencies resolve get_settings, so they see the same instance.
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "tunegate.main:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
