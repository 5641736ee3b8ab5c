"""Liveness endpoint."""

from fastapi import APIRouter, Depends

from tunegate.config import Settings, get_settings
from tunegate.infrastructure.integrations import HttpClientPool

router = APIRouter(tags=["Health"])


# Liveness only. The catalog is not probed here.
@router.get("/health")
async def health(settings: Settings = Depends(get_settings)) -> dict:
    return {
        "status": "ok",
        "app": settings.app_name,
        "version": settings.app_version,
        "http_pool_initialized": HttpClientPool.is_initialized(),
    }
