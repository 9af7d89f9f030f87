"""
Snippet Summarizer Backend — Snippet Service (Business Logic Orchestrator)
===========================================================================

What:  Coordinates validate → summarize → persist for snippet creation, and
       serves the two read operations.
Why:   Encapsulates all business logic and error classification in one place,
       independent of HTTP concerns.
How:   Composes the Gemini summarization client and the snippet store.
Who:   Called by route handlers.

Orchestration Flow (POST /snippets):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  Validate   │───▶│  Gemini API  │───▶│  Store   │
    │          │    │  (trim)     │    │  (summarize) │    │  (DB)    │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    Validation fails  → ValidationError (400), Gemini never called
    Empty summary     → UpstreamFailureError (500), nothing is written
    Gemini fails      → UpstreamThrottledError (503) or UpstreamFailureError (500)
    Store fails       → DatabaseError (500), nothing was written
    A snippet row only ever exists for text that was summarized successfully.

Design Decision:
    Exactly one Gemini attempt per request. A retry would bill the upstream
    twice for one snippet, and since nothing is persisted before the call
    succeeds there is no partial state to recover.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    DatabaseError,
    NotFoundError,
    UpstreamFailureError,
    UpstreamThrottledError,
    ValidationError,
)
from app.schemas.snippet import SnippetCreated, SnippetResponse
from app.services.gemini_service import gemini_service
from app.services.snippet_store import snippet_store

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = 429

# Attribute names that may hold an HTTP-like status on SDK/transport errors
_STATUS_ATTRS = ("status", "status_code", "code")


def _has_status(obj: object, status: int) -> bool:
    for attr in _STATUS_ATTRS:
        value = getattr(obj, attr, None)
        # bool is an int subclass; HTTPStatus is accepted
        if isinstance(value, int) and not isinstance(value, bool) and value == status:
            return True
    return False


def is_throttled(exc: BaseException) -> bool:
    """
    True when the error carries a 429 status, directly or on `exc.response`.

    Only those two places are checked. Message text is never parsed.
    """
    if _has_status(exc, TOO_MANY_REQUESTS):
        return True
    response = getattr(exc, "response", None)
    return response is not None and _has_status(response, TOO_MANY_REQUESTS)


def classify_upstream_error(exc: BaseException):
    """Map a summarization failure to UpstreamThrottledError or UpstreamFailureError."""
    context = {"error_type": type(exc).__name__}
    if is_throttled(exc):
        return UpstreamThrottledError(context=context)
    return UpstreamFailureError(context=context)


def _is_utf8_encodable(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _to_response(snippet) -> SnippetResponse:
    return SnippetResponse(id=str(snippet.id), text=snippet.text, summary=snippet.summary)


class SnippetService:
    """
    Business logic layer for snippet operations.

    Responsibilities:
        - create_snippet(): validate, summarize, persist
        - get_snippet(): single lookup; every failure is NotFoundError
        - list_snippets(): full listing; store failure is DatabaseError
    """

    async def create_snippet(self, db: AsyncSession, raw_text: Optional[str]) -> SnippetCreated:
        """
        Create a snippet from raw client text.

        Args:
            db: Async database session (injected by FastAPI)
            raw_text: Text as received; may be None

        Returns:
            SnippetCreated with the new id and the summary

        Raises:
            ValidationError: text missing or blank, or not valid Unicode
            UpstreamThrottledError: Gemini reported 429
            UpstreamFailureError: any other Gemini failure, or an empty summary
            DatabaseError: insert failed
        """
        if raw_text is None or not raw_text.strip():
            raise ValidationError(field="text")
        if not _is_utf8_encodable(raw_text):
            # Lone surrogates from JSON escapes can never be rendered back out
            raise ValidationError(field="text", context={"reason": "unpaired surrogate"})

        # The untrimmed text goes to the model so it sees the original formatting
        try:
            summary = await gemini_service.summarize(raw_text)
        except Exception as e:
            error = classify_upstream_error(e)
            logger.error(
                "Summarization failed (%s): %s",
                type(error).__name__,
                str(e),
                exc_info=not isinstance(error, UpstreamThrottledError),
            )
            raise error from e

        if not summary:
            logger.error("Summarization returned no content for %d chars of text", len(raw_text))
            raise UpstreamFailureError(context={"reason": "empty summary"})

        try:
            snippet = await snippet_store.create(db, text=raw_text, summary=summary)
        except DatabaseError as e:
            raise DatabaseError(message=UpstreamFailureError.default_message, context=e.context) from e

        return SnippetCreated(id=str(snippet.id), summary=snippet.summary)

    async def get_snippet(self, db: AsyncSession, snippet_id: str) -> SnippetResponse:
        """
        Retrieve one snippet.

        Raises:
            NotFoundError: malformed id, no match, or store failure
        """
        try:
            snippet = await snippet_store.find_by_id(db, snippet_id)
        except DatabaseError as e:
            logger.error("Lookup of snippet %r failed: %s", snippet_id, e.context)
            snippet = None

        if snippet is None:
            raise NotFoundError(message="Snippet not found", context={"snippet_id": snippet_id})
        return _to_response(snippet)

    async def list_snippets(self, db: AsyncSession) -> List[SnippetResponse]:
        """
        Retrieve every snippet.

        Raises:
            DatabaseError: store failure (an empty store returns [])
        """
        snippets = await snippet_store.find_all(db)
        return [_to_response(snippet) for snippet in snippets]


# ── Singleton Instance ────────────────────────────────────────────────────
snippet_service = SnippetService()
