"""Custom exception handlers for the FastAPI application.

Converts domain exceptions into the API's failure envelope
``{"success": false, "message": "..."}`` with the matching status code:

- EntityNotFoundException / ResourceNotFound → 404
- ValidationError (domain) and request validation → 422
- UpstreamUnavailable → 503
- UpstreamShapeMismatch / other ExternalServiceError → 502

Never a partially filled result - a failed aggregation is a failed request.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tunegate.domain.exceptions import (
    EntityNotFoundException,
    ExternalServiceError,
    UpstreamShapeMismatch,
    UpstreamUnavailable,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str, **extra: Any) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": message}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


# Hey future me, register these during app setup (create_app does it) - handlers added after
# startup are ignored. FastAPI picks the handler of the most specific class in the exception's
# MRO, so UpstreamUnavailable wins over the generic ExternalServiceError one.
def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain and validation exceptions.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(EntityNotFoundException)
    async def entity_not_found_exception_handler(
        request: Request, exc: EntityNotFoundException
    ) -> JSONResponse:
        """Handle not found with 404."""
        logger.info(
            "Entity not found at %s: %s %s",
            request.url.path,
            exc.entity_type,
            exc.entity_id,
            extra={
                "path": request.url.path,
                "entity_type": exc.entity_type,
                "entity_id": str(exc.entity_id),
            },
        )
        return _failure(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle domain validation errors with 422."""
        logger.warning(
            "Validation error at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "error": exc.message},
        )
        return _failure(status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle invalid query/path parameters with 422."""
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        logger.warning(
            "Request validation error at %s: %s",
            request.url.path,
            errors,
            extra={"path": request.url.path, "errors": errors},
        )
        return _failure(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "invalid request parameters",
            errors=errors,
        )

    @app.exception_handler(UpstreamUnavailable)
    async def upstream_unavailable_handler(
        request: Request, exc: UpstreamUnavailable
    ) -> JSONResponse:
        """Catalog unreachable or failing - 503."""
        logger.error(
            "Catalog unavailable at %s: %s",
            request.url.path,
            exc.message,
            extra={
                "path": request.url.path,
                "error": exc.message,
                "upstream_status": exc.status_code,
            },
        )
        return _failure(status.HTTP_503_SERVICE_UNAVAILABLE, exc.message)

    @app.exception_handler(UpstreamShapeMismatch)
    async def upstream_shape_mismatch_handler(
        request: Request, exc: UpstreamShapeMismatch
    ) -> JSONResponse:
        """Catalog answered with something we can't use - 502."""
        logger.error(
            "Catalog shape mismatch at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "error": exc.message},
        )
        return _failure(status.HTTP_502_BAD_GATEWAY, exc.message)

    @app.exception_handler(ExternalServiceError)
    async def external_service_error_handler(
        request: Request, exc: ExternalServiceError
    ) -> JSONResponse:
        """Handle other external service errors with 502."""
        logger.error(
            "External service error at %s: %s",
            request.url.path,
            exc.message,
            extra={"path": request.url.path, "error": exc.message},
        )
        return _failure(status.HTTP_502_BAD_GATEWAY, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Keep the failure envelope for plain HTTP errors (unknown routes etc)."""
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "HTTP error %d at %s: %s",
            exc.status_code,
            request.url.path,
            exc.detail,
            extra={
                "path": request.url.path,
                "status_code": exc.status_code,
            },
        )
        return _failure(exc.status_code, str(exc.detail))
