"""
Snippet Summarizer Backend — Snippet Route Handlers
====================================================

What:  POST /snippets (create), GET /snippets (list), GET /snippets/{id} (detail).
How:   Extracts body/path parameters, delegates to SnippetService, returns JSON.
       Errors are raised as application exceptions and rendered by the
       global handlers in main.py.

Identifier check:
    GET /snippets/{id} rejects ids that are not structurally valid with
    "Not found" before touching the service. Well-formed ids with no match
    come back from the service as "Snippet not found".
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import NotFoundError
from app.schemas.snippet import (
    ErrorResponse,
    SnippetCreate,
    SnippetCreated,
    SnippetResponse,
)
from app.services.snippet_service import snippet_service
from app.services.snippet_store import parse_snippet_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/snippets", tags=["Snippets"])


@router.post(
    "",
    status_code=201,
    response_model=SnippetCreated,
    responses={
        400: {"description": "Text missing or blank", "model": ErrorResponse},
        500: {"description": "Summarization or storage failed", "model": ErrorResponse},
        503: {"description": "AI service rate limit reached", "model": ErrorResponse},
    },
    summary="Summarize and store a text snippet",
)
async def create_snippet(
    payload: SnippetCreate,
    db: AsyncSession = Depends(get_db_session),
) -> SnippetCreated:
    """
    Summarize the submitted text and store the pair.

    Returns only the id and summary; the text is not echoed back.
    """
    logger.info(
        "Received snippet: %d chars",
        len(payload.text) if payload.text is not None else 0,
    )
    return await snippet_service.create_snippet(db=db, raw_text=payload.text)


@router.get(
    "",
    response_model=List[SnippetResponse],
    responses={
        500: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="List all snippets",
)
async def list_snippets(
    db: AsyncSession = Depends(get_db_session),
) -> List[SnippetResponse]:
    return await snippet_service.list_snippets(db=db)


@router.get(
    "/{snippet_id}",
    response_model=SnippetResponse,
    responses={
        404: {"description": "Malformed id or snippet not found", "model": ErrorResponse},
    },
    summary="Get a single snippet by id",
)
async def get_snippet(
    snippet_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> SnippetResponse:
    if parse_snippet_id(snippet_id) is None:
        raise NotFoundError(context={"snippet_id": snippet_id, "reason": "malformed id"})
    return await snippet_service.get_snippet(db=db, snippet_id=snippet_id)
