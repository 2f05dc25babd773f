"""Request/response logging middleware with timing and HTTP metrics."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from credit_assessor.core.config import settings
from credit_assessor.core.metrics import record_http_request

logger = structlog.get_logger(__name__)

# Paths excluded from request logging and HTTP metrics
_QUIET_PATHS = frozenset({"/metrics", "/v1/health"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion and duration, and records HTTP metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in _QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        log = logger.bind(method=method, path=path)

        log.info("request_started")

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.perf_counter() - start_time
            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            if settings.metrics_enabled:
                record_http_request(method, path, 500, duration)
            raise

        duration = time.perf_counter() - start_time
        log.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        if settings.metrics_enabled:
            record_http_request(method, path, response.status_code, duration)
        return response
