"""
Shared test fixtures for the Employee Manager test suite.

Each test gets its own in-memory SQLite database (aiosqlite + StaticPool).
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FIRST_ADMIN_EMAIL"] = ""

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from employee_manager.api.deps import get_db
from employee_manager.core.security import create_access_token
from employee_manager.db.session import create_tables
from employee_manager.main import app

TEST_ADMIN_ID = "0123456789abcdef0123456789abcdef"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """A fresh in-memory database with all tables created."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app and the test database."""

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with session_factory() as session:
        yield session


# ── Auth helpers ────────────────────────────────────────────────────
@pytest.fixture
def auth_headers() -> dict[str, str]:
    token = create_access_token(TEST_ADMIN_ID, "admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def employee_payload() -> dict:
    return {
        "name": "A",
        "email": "a@x.com",
        "position": "Dev",
        "department": "Eng",
        "salary": 50000,
    }
