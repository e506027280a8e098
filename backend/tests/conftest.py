"""
QuickNotes Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment variables are set BEFORE any quicknotes import so the
       settings singleton and the engine pick up the test values.

Fixtures:
    ├── mock_db_session: AsyncMock session (no real DB needed)
    ├── sample_note: A Note ORM instance with all fields populated
    ├── db_tables: Creates the schema in a throwaway SQLite file, drops it after
    └── test_client: HTTPX AsyncClient talking to the app over ASGITransport
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
_test_dir = tempfile.mkdtemp(prefix="quicknotes_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_dir}/test.db"
os.environ["GEMINI_API_KEY"] = ""  # summarization disabled unless a test patches it
os.environ["DB_AUTO_CREATE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from quicknotes.database import Base, dispose_engine, engine, init_models  # noqa: E402
from quicknotes.models.note import Note  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_delete(mock_db_session):
            mock_db_session.execute.return_value = MagicMock(rowcount=1)
            await note_service.delete_note(mock_db_session, str(uuid4()))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note():
    """A fully-populated Note as it would look after an insert."""
    now = datetime.now(timezone.utc)
    return Note(
        id=uuid4(),
        title="Groceries",
        content="milk, eggs, bread",
        created_at=now,
        updated_at=now,
    )


@pytest_asyncio.fixture
async def db_tables():
    """
    Creates the notes table in the SQLite test database.

    Drops it afterwards and disposes the engine, so every test starts with
    an empty store and fresh connections bound to its own event loop.
    """
    await init_models()
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await dispose_engine()


@pytest_asyncio.fixture
async def test_client(db_tables):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so startup checks are skipped
    and the schema comes from the db_tables fixture instead.
    """
    from quicknotes.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
