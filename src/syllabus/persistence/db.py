"""Async database engine and session factory.

Provides PostgreSQL async connectivity using SQLAlchemy 2.0 asyncio
extension with asyncpg driver. The engine and session factory are created at
application startup and kept on the application state.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from syllabus.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async database engine from settings."""
    if settings.database_url.startswith("sqlite"):
        # SQLite pools do not accept sizing arguments
        return create_async_engine(settings.database_url)

    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,  # Recycle connections after 30 minutes
        pool_pre_ping=True,  # Verify connection health
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory bound to engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_context(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Provide a session that is rolled back on error and always closed.

    Commits are left to the caller so that cache invalidation can follow
    the commit directly.
    """
    session = session_factory()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def init_db(engine: AsyncEngine) -> None:
    """Create tables if they do not exist."""
    from syllabus.persistence.tables import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def health_check(session_factory: async_sessionmaker[AsyncSession]) -> bool:
    """Check database connectivity."""
    try:
        async with session_context(session_factory) as session:
            await session.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
