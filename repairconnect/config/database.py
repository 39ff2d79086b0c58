"""
Engine and session wiring.

The API, the in-process workers and the Celery sweep task all share one
process-wide session factory; tests swap it for one bound to SQLite.
"""

from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from repairconnect.config.settings import settings

_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Build the async engine for ``database_url`` (defaults to settings)."""
    url = database_url or str(settings.DATABASE_URL)

    if url.startswith("sqlite"):
        # One connection per checkout; SQLite file locks do the rest
        engine = create_async_engine(url, echo=settings.DATABASE_ECHO, poolclass=NullPool)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        echo=settings.DATABASE_ECHO,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
    )


def get_async_session_factory(
    database_url: Optional[str] = None,
) -> async_sessionmaker[AsyncSession]:
    # Entities are built from rows right after commit
    return async_sessionmaker(
        create_engine(database_url),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating it on first use."""
    global _session_factory
    if _session_factory is None:
        _session_factory = get_async_session_factory()
    return _session_factory


def set_session_factory(factory: Optional[async_sessionmaker[AsyncSession]]) -> None:
    global _session_factory
    _session_factory = factory


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; anything left uncommitted is rolled back."""
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
