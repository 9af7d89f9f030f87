"""
Snippet Summarizer Backend — Request ID Middleware
===================================================

What:  Assigns a unique ID to each incoming request and adds it to the response.
Why:   Error bodies are fixed strings with no detail; the X-Request-ID header
       is how a client report gets matched to the server-side log entry.
How:   Uses the client's X-Request-ID if present, otherwise a short UUID.
       Stored in a ContextVar for loggers and in request.state for handlers.
When:  Outermost middleware (runs before all other processing).
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# ContextVar: each concurrent request (coroutine) sees its own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a unique ID to each request for tracing.

    Behavior:
        1. Use the client's X-Request-ID header if sent
        2. Otherwise generate an 8-character UUID prefix
        3. Store in ContextVar and request.state
        4. Echo in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
