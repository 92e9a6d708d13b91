"""Database configuration and session management.

This module provides the core database functionality including:
1. Async SQLAlchemy engine setup (pooled for server databases)
2. Session management and the FastAPI session dependency
3. Serialized write transactions shared by every mutating service call
4. Startup schema creation and shutdown disposal
"""
import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from lifematch.core.config import settings
from lifematch.core.exceptions import DatabaseError
from lifematch.core.logging import get_logger

logger = get_logger(__name__)


# Create async engine with connection pooling
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_DEBUG,
    pool_pre_ping=True,  # Ensure connections are valid before use
    **settings.get_db_pool_settings(),
)

# Create async session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Don't expire objects after commit
    autoflush=False,  # Don't auto-flush - explicit is better than implicit
)

# One lock per running event loop
_write_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = (
    weakref.WeakKeyDictionary()
)


def write_lock() -> asyncio.Lock:
    """Return the process-wide write lock for the running event loop."""
    loop = asyncio.get_running_loop()
    lock = _write_locks.get(loop)
    if lock is None:
        lock = asyncio.Lock()
        _write_locks[loop] = lock
    return lock


@asynccontextmanager
async def serialized_transaction(session: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """Run a unit of work under the write lock.

    Authorization, checks and writes performed inside the block are observed
    atomically by other callers: the work commits on success and rolls back
    on any exception.

    Args:
        session: Session the unit of work runs on

    Yields:
        AsyncSession: The same session

    Raises:
        DatabaseError: If the commit fails
    """
    async with write_lock():
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise DatabaseError("Failed to commit transaction", original_error=e) from e


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    This context manager ensures proper cleanup of the session.

    Yields:
        AsyncSession: Database session
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions.

    Each request gets its own database session.

    Yields:
        AsyncSession: Database session
    """
    async with get_session() as session:
        yield session


async def init_db() -> None:
    """Initialize database connection.

    Verifies connectivity and, when ``AUTO_CREATE_TABLES`` is set, creates
    any missing tables.

    Raises:
        DatabaseError: If database connection fails
    """
    # Register every table on the metadata
    from lifematch.models import Base

    try:
        logger.debug("Testing database connection")
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            if settings.AUTO_CREATE_TABLES:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Database connection successful", create_tables=settings.AUTO_CREATE_TABLES)
    except SQLAlchemyError as e:
        logger.error("Failed to initialize database", exc_info=True)
        raise DatabaseError("Failed to initialize database", original_error=e) from e


async def close_db() -> None:
    """Close database connections.

    Called during application shutdown.
    """
    try:
        logger.debug("Closing database connections")
        await engine.dispose()
        logger.info("Database connections closed")
    except SQLAlchemyError as e:
        logger.error("Error closing database connections", exc_info=True)
        raise DatabaseError("Failed to close database connections", original_error=e) from e
