"""
Snippet Summarizer Backend — Pydantic Request/Response Schemas
===============================================================

What:  Pydantic models defining the API contract between clients and backend.
Why:   Input parsing, response serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies and shape responses.

Design Decision:
    Schemas are separate from SQLAlchemy models because the API exposes a
    projection ({id, text, summary}) and never the store's timestamps.
    `id` is rendered as a string so clients treat it as opaque.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SnippetCreate(BaseModel):
    """
    Body of POST /snippets.

    `text` is optional at the schema level on purpose: missing, null, and
    blank text all produce the same 400 from the service, rather than
    FastAPI's 422. Unknown fields are ignored.
    """
    text: Optional[str] = Field(default=None, description="Text to summarize")

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SnippetCreated(BaseModel):
    """Returned by POST /snippets with HTTP 201. The full text is not echoed."""
    id: str = Field(description="Opaque snippet identifier")
    summary: str = Field(description="AI-generated summary")


class SnippetResponse(BaseModel):
    """Returned by GET /snippets/{id} and as items of GET /snippets."""
    id: str = Field(description="Opaque snippet identifier")
    text: str = Field(description="Original submitted text, verbatim")
    summary: str = Field(description="AI-generated summary")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(default="ok")


class ErrorResponse(BaseModel):
    """
    Body of every error response.

    Example:
        {"error": "Text is required"}
    """
    error: str = Field(description="Fixed, client-safe error message")
