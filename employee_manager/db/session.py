"""
Async SQLAlchemy engine & session factory.

PostgreSQL (asyncpg) gets a sized connection pool; any other backend
(aiosqlite in tests, local dev) uses SQLAlchemy's defaults.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from employee_manager.core.config import settings
from employee_manager.db.base import Base


def _engine_args(url: str) -> dict[str, Any]:
    args: dict[str, Any] = {"echo": False, "pool_pre_ping": True}
    if "postgresql" in url:
        args.update({"pool_size": 20, "max_overflow": 10, "pool_recycle": 300})
    return args


engine = create_async_engine(settings.DATABASE_URL, **_engine_args(settings.DATABASE_URL))

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create every table registered on ``Base.metadata`` (idempotent)."""
    # Register the mapped classes before touching metadata
    from employee_manager.models import admin, employee  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
