"""
Snippet Summarizer Backend — Request Logging Middleware
========================================================

What:  One access-log line per HTTP request.
Why:   Latency and error-rate visibility per route; status-based levels
       let alerting key off ERROR lines alone.
Who:   Applied to every request via Starlette middleware.
When:  After RequestIDMiddleware (uses request ID for correlation).

Line format:
    POST /snippets 201 812.4ms 57B [a1b2c3d4]

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, response size, request ID
    ❌ Don't log: request body (snippet text may contain anything), headers,
       client address
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("snippets.access")

# Polled by orchestrators every few seconds
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Times each request and logs the outcome on the `snippets.access` logger.

    Typical durations:
        - GET /snippets/{id}: 1-20ms (primary key lookup)
        - POST /snippets: 500-3000ms (Gemini call dominates)
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        # Absent for streamed bodies
        size = response.headers.get("content-length", "-")

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms %sB [%s]",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            size,
            request_id_var.get(""),
        )
        return response
