"""
Snippet Summarizer Backend — Test Configuration (conftest.py)
==============================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (temp database, API client,
       mocked summarizer).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh for each test):
    ├── database:          Temporary SQLite file, schema created via init_db()
    ├── db_session:        AsyncSession bound to that database
    ├── mock_summarizer:   Replaces the Gemini singleton used by SnippetService
    ├── mock_db_session:   AsyncMock session for pure unit tests
    └── test_client:       HTTPX AsyncClient wired to the FastAPI app
"""

import os
from unittest.mock import AsyncMock, MagicMock, patch

# Override settings for testing BEFORE any app imports
# Why: Prevents tests from using a real database or API key
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["GEMINI_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides an initialized, empty snippet store for one test.

    Each test gets its own SQLite file under tmp_path, so no cleanup between
    tests is needed.
    """
    from app.database import init_db, dispose_engine

    engine = await init_db(f"sqlite+aiosqlite:///{tmp_path / 'snippets.db'}")
    yield engine
    await dispose_engine()


@pytest_asyncio.fixture
async def db_session(database):
    """AsyncSession on the per-test database."""
    from app import database as db_module

    async with db_module.async_session_factory() as session:
        yield session


@pytest.fixture
def mock_summarizer():
    """
    Replaces the Gemini client seen by SnippetService.

    Usage:
        async def test_x(mock_summarizer):
            mock_summarizer.summarize.side_effect = RuntimeError("boom")
    """
    with patch("app.services.snippet_service.gemini_service") as mock:
        mock.summarize = AsyncMock(return_value="mocked summary")
        yield mock


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan; the `database` fixture does the
    store setup instead.
    """
    from app.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
