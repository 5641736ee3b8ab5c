"""API module for tunegate.

Layout:
- routers/: HTTP endpoints (artists, health)
- schemas/: Pydantic response models
- dependencies.py: Dependency injection (catalog client, use cases)
- exception_handlers.py: Global error handlers
"""

from tunegate.api.routers import api_router, artists, health

__all__ = ["api_router", "artists", "health"]
