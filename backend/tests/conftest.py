"""
NoteShare Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets fresh SQLite files under pytest's tmp_path. The
       apps' database dependencies are overridden to point at them, so the
       module-level databases (and their ./data files) are never touched.

Fixture Hierarchy (all function-scoped):
    ├── board_db / summary_db:           initialised temporary databases
    ├── board_client / summarizer_client: HTTPX AsyncClient over ASGITransport
    └── account_payload:                 the "Alice" signup body
"""

import os
import tempfile

# Override settings BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="noteshare_test_"), "board.db"
)
os.environ["SUMMARY_DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="noteshare_test_"), "summaries.db"
)
os.environ["GROQ_API_KEY"] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.database import (
    BOARD_TABLES,
    SUMMARY_TABLES,
    Database,
    get_board_db,
    get_summary_db,
)


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


# ══════════════════════════════════════════════════════════════════════════
# Databases
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def board_db(tmp_path):
    """A freshly created board database in a temporary file."""
    db = Database(sqlite_url(tmp_path / "board.db"), BOARD_TABLES, reset_schema=True, name="test-board")
    await db.init()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def summary_db(tmp_path):
    """A freshly created summaries database in a temporary file."""
    db = Database(
        sqlite_url(tmp_path / "summaries.db"),
        SUMMARY_TABLES,
        reset_schema=False,
        name="test-summaries",
    )
    await db.init()
    yield db
    await db.dispose()


# ══════════════════════════════════════════════════════════════════════════
# HTTP Clients
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def board_client(board_db):
    """
    Async HTTP client for the board app, bound to `board_db`.

    Usage:
        async def test_health(board_client):
            response = await board_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app

    app.dependency_overrides[get_board_db] = lambda: board_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def summarizer_client(summary_db):
    """Async HTTP client for the summarizer app, bound to `summary_db`."""
    from app.main import summarizer_app

    summarizer_app.dependency_overrides[get_summary_db] = lambda: summary_db
    transport = ASGITransport(app=summarizer_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    summarizer_app.dependency_overrides.clear()


# ══════════════════════════════════════════════════════════════════════════
# Sample Data
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def account_payload():
    return {"name": "Alice", "email": "a@x.com", "password": "secret1"}
