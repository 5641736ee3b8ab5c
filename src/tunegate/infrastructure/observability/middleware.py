"""Middleware for observability: request/response logging."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from tunegate.infrastructure.observability.logging import (
    get_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


# Hey future me, this runs before every route handler. It binds the correlation ID for the
# request (taken from the caller's header or freshly generated) so the catalog client's page
# logs can be tied back to the request that triggered them. Stateless - safe for concurrency.
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        set_correlation_id(request.headers.get(CORRELATION_HEADER))

        method = request.method
        path = request.url.path

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.exception(
                f"Request failed: {method} {path}",
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": int(duration * 1000),
                    "error_type": type(e).__name__,
                },
            )
            raise

        duration = time.perf_counter() - start_time
        status_mark = "✓" if response.status_code < 400 else "✗"
        logger.info(
            f"{status_mark} {method} {path} → {response.status_code} ({duration * 1000:.0f}ms)",
            extra={
                "method": method,
                "path": path,
                "query_params": str(request.query_params),
                "client_ip": request.client.host if request.client else "unknown",
                "status_code": response.status_code,
                "duration_ms": int(duration * 1000),
            },
        )

        response.headers[CORRELATION_HEADER] = get_correlation_id()
        return response
