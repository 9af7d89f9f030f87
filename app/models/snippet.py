"""
Snippet Summarizer Backend — Snippet SQLAlchemy Model
======================================================

What:  ORM model representing the `snippets` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by SnippetStore for create/read and by init_db() for schema creation.

Table Design Rationale:
    - UUID primary key: generated in Python at insert, globally unique, and
      its canonical string form is the external identifier
    - text / summary: stored as UTF-8 bytes (see VerbatimText) so submitted
      content round-trips exactly, NUL bytes included
    - created_at / updated_at: UTC with timezone; informational only
    - No update or delete path exists; rows are written once
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, LargeBinary, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VerbatimText(TypeDecorator):
    """
    Unicode text persisted as UTF-8 bytes.

    PostgreSQL TEXT rejects NUL characters, and submitted snippets may contain
    them. Storing the encoded bytes keeps every code point.
    """

    impl = LargeBinary
    cache_ok = True

    def process_bind_param(self, value: Optional[str], dialect) -> Optional[bytes]:
        if value is None:
            return None
        return value.encode("utf-8")

    def process_result_value(self, value: Optional[bytes], dialect) -> Optional[str]:
        if value is None:
            return None
        return bytes(value).decode("utf-8")


class Snippet(Base):
    """
    A submitted text and its AI-generated summary.

    Lifecycle:
        Created exactly once, after summarization succeeded. Never updated,
        never deleted.
    """

    __tablename__ = "snippets"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    text: Mapped[str] = mapped_column(VerbatimText, nullable=False)

    summary: Mapped[str] = mapped_column(VerbatimText, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Listing returns rows in creation order
    __table_args__ = (
        Index("idx_snippets_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Snippet(id={self.id}, created_at='{self.created_at}')>"
