"""
Snippet Summarizer Backend — Snippet Store (Persistence Adapter)
=================================================================

What:  create / find_by_id / find_all over the `snippets` table.
Why:   Keeps SQLAlchemy out of the orchestrator and gives it exactly one
       failure type to handle: DatabaseError.
How:   Each method takes the request's AsyncSession. Driver and connection
       errors are logged and wrapped in DatabaseError.
Who:   Called by SnippetService.

Identifier handling:
    Ids are UUIDs. A string that does not parse as one is never sent to the
    database: find_by_id() returns None, the same as for a missing row.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError
from app.models.snippet import Snippet

logger = logging.getLogger(__name__)

# Connection refused / DNS failures can surface from the driver unwrapped
STORE_ERRORS = (SQLAlchemyError, OSError)


def parse_snippet_id(raw: Optional[str]) -> Optional[uuid.UUID]:
    """Parse an external identifier; None when it is not a valid UUID."""
    if not raw:
        return None
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError):
        return None


class SnippetStore:
    """Durable create/read of Snippet records."""

    async def create(self, db: AsyncSession, text: str, summary: str) -> Snippet:
        """
        Insert and commit a new snippet.

        Committed here (not by the session dependency) so the row is durable
        before the route returns 201.

        Raises:
            DatabaseError: Insert or commit failed.
        """
        snippet = Snippet(text=text, summary=summary)
        try:
            db.add(snippet)
            await db.commit()
        except STORE_ERRORS as e:
            logger.error("Failed to insert snippet: %s", type(e).__name__, exc_info=True)
            try:
                await db.rollback()
            except STORE_ERRORS:
                logger.warning("Rollback after failed insert also failed")
            raise DatabaseError(context={"operation": "create", "error_type": type(e).__name__})
        logger.info("Snippet %s stored (%d chars)", snippet.id, len(text))
        return snippet

    async def find_by_id(self, db: AsyncSession, snippet_id: str) -> Optional[Snippet]:
        """
        Fetch one snippet.

        Returns:
            The snippet, or None when the id is malformed or matches nothing.

        Raises:
            DatabaseError: Query failed.
        """
        parsed = parse_snippet_id(snippet_id)
        if parsed is None:
            return None
        try:
            result = await db.execute(select(Snippet).where(Snippet.id == parsed))
            return result.scalar_one_or_none()
        except STORE_ERRORS as e:
            logger.error("Failed to fetch snippet %s: %s", parsed, type(e).__name__, exc_info=True)
            raise DatabaseError(context={"operation": "find_by_id", "snippet_id": str(parsed)})

    async def find_all(self, db: AsyncSession) -> List[Snippet]:
        """
        Fetch every snippet, oldest first.

        Raises:
            DatabaseError: Query failed.
        """
        try:
            result = await db.execute(select(Snippet).order_by(Snippet.created_at))
            return list(result.scalars().all())
        except STORE_ERRORS as e:
            logger.error("Failed to list snippets: %s", type(e).__name__, exc_info=True)
            raise DatabaseError(context={"operation": "find_all", "error_type": type(e).__name__})


# ── Singleton Instance ────────────────────────────────────────────────────
snippet_store = SnippetStore()
