"""
FastAPI middleware for observability.

CorrelationMiddleware binds a correlation ID to the request context and
echoes it back; RequestLoggingMiddleware writes one completion line per
request. Health probes are logged at DEBUG so that uptime checks do not
drown the cron and activity traffic.

Dependencies: starlette, firefli.observability
System role: Request/response observability injection
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from firefli.observability.correlation import clear_correlation_id, set_correlation_id
from firefli.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
QUIET_PATH_MARKER = "/health"


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's correlation ID or mint one, and return it in the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{request.method} {path} - Unhandled exception",
                e,
                method=request.method,
                path=path,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise

        if response.status_code >= 500:
            level = logging.WARNING
        elif QUIET_PATH_MARKER in path:
            level = logging.DEBUG
        else:
            level = logging.INFO

        log_with_context(
            logger,
            level,
            f"{request.method} {path} - {response.status_code}",
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            client_host=request.client.host if request.client else None,
        )
        return response
