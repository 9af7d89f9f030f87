"""
Snippet Summarizer Backend — Database Session Management
=========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   init_db() builds the engine and session factory from DATABASE_URL and
       creates the schema; get_db_session() hands out one session per request.
Who:   init_db/dispose_engine are called by the application lifespan; the
       session dependency is used by route handlers.
When:  Engine is created at startup (not at import); sessions are per-request.

Why the engine is not created at import time:
    DATABASE_URL has no default. Building the engine lazily lets the app module
    be imported (tests, tooling) without a database, and lets startup fail with
    a clear ConfigurationError instead of a driver traceback.
"""

import logging
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, InterfaceError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
    before_sleep_log,
)

from app.config import settings
from app.exceptions import SnippetError

logger = logging.getLogger(__name__)

# ── Engine & Session Factory ──────────────────────────────────────────────
# Populated by init_db(); reset by dispose_engine()
engine: Optional[AsyncEngine] = None
async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so that init_db() can create every
    table from a single metadata object.
    """
    pass


def _engine_options(url: str) -> dict:
    # SQLite (aiosqlite) uses its own pool; QueuePool sizing does not apply
    if url.startswith("sqlite"):
        return {"echo": settings.log_level == "DEBUG"}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": settings.db_pool_pre_ping,
        "pool_recycle": 3600,
        "echo": settings.log_level == "DEBUG",
    }


@retry(
    # Only connection-level failures are worth waiting out
    retry=retry_if_exception_type((OperationalError, InterfaceError, OSError)),
    stop=stop_after_attempt(settings.db_connect_attempts),
    wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def _create_schema(target: AsyncEngine) -> None:
    """Verify connectivity and create missing tables."""
    async with target.begin() as conn:
        await conn.execute(text("SELECT 1"))
        await conn.run_sync(Base.metadata.create_all)


async def init_db(url: Optional[str] = None) -> AsyncEngine:
    """
    Create the engine and session factory, then create the schema.

    Args:
        url: Override for settings.database_url (used by tests).

    Raises:
        ConfigurationError: No URL configured.
        OperationalError / OSError: Store still unreachable after all attempts.
    """
    global engine, async_session_factory

    # Register models with Base.metadata before create_all
    import app.models.snippet  # noqa: F401

    database_url = url or settings.require_database_url()
    engine = create_async_engine(database_url, **_engine_options(database_url))
    # expire_on_commit=False: records stay readable after the store commits
    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    await _create_schema(engine)
    logger.info("Database initialized (%s)", engine.url.render_as_string(hide_password=True))
    return engine


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The store commits its own writes; this dependency only guarantees
    rollback on error and that the connection returns to the pool.

    Raises:
        SnippetError: init_db() has not run (500 "Internal server error").
    """
    if async_session_factory is None:
        raise SnippetError(context={"reason": "database not initialized"})

    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Close all pooled connections. Called during application shutdown."""
    global engine, async_session_factory
    if engine is not None:
        await engine.dispose()
    engine = None
    async_session_factory = None
