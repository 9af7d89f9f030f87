"""
Snippet Summarizer Backend — Custom Exception Hierarchy
========================================================

What:  Defines application-specific exceptions for each failure kind.
Why:   Each kind maps to one HTTP status and one fixed, client-safe message.
       Raw upstream or database error text never reaches the client.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) render
       {"error": message} with the class's status code. The context is
       logged server-side only.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    SnippetError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── UpstreamThrottledError   → 503 Service Unavailable (retry after backoff)
    ├── UpstreamFailureError     → 500 Internal Server Error
    ├── DatabaseError            → 500 Internal Server Error
    └── ConfigurationError       → never rendered; fatal at startup or
                                   classified as an upstream failure
"""

from typing import Any, Dict, Optional


class SnippetError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:      Client-facing error text (safe to return in an API response)
        context:      Additional debug info (logged but NOT returned to client)
        status_code:  HTTP status the global handler responds with
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(SnippetError):
    """
    Raised when client input fails validation.

    When:    `text` is missing, null, not a string, or blank after trimming.
    HTTP:    400 Bad Request
    """

    status_code = 400
    default_message = "Text is required"

    def __init__(
        self,
        message: Optional[str] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(SnippetError):
    """
    Raised when a requested resource does not exist.

    Two messages are used by the HTTP surface:
        "Not found"          identifier is malformed, or the route does not exist
        "Snippet not found"  identifier is well-formed but no record matches
    HTTP:    404 Not Found
    """

    status_code = 404
    default_message = "Not found"


class UpstreamThrottledError(SnippetError):
    """
    Raised when the AI service reports its rate/quota limit was hit (429).

    HTTP:    503 Service Unavailable. The caller may retry after backoff.
    """

    status_code = 503
    default_message = "AI service rate limit reached. Please try again later."


class UpstreamFailureError(SnippetError):
    """
    Raised for any other failure while calling the AI service.

    When:    Network failure, auth failure, 5xx from the upstream, missing
             credentials on first use.
    HTTP:    500 Internal Server Error
    """

    status_code = 500
    default_message = "Failed to generate summary."


class DatabaseError(SnippetError):
    """
    Raised when the snippet store fails or is unreachable.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always a fixed string chosen by
        the service. Driver errors may contain the connection URL (with the
        password) and are logged server-side only.
    """

    status_code = 500
    default_message = "Failed to retrieve snippets."


class ConfigurationError(SnippetError):
    """
    Raised when a required setting is missing.

    When:    DATABASE_URL empty at startup; GEMINI_API_KEY empty on first
             summarization.
    """

    default_message = "Required configuration is missing"
