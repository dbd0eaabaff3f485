"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations (app/infrastructure/persistence/migrations).

Engine and session factory are created lazily on first use (get_db /
get_db_transactional / get_session_factory) so import does not trigger
Settings validation.

Every store call made on behalf of a request is bounded by
settings.store_timeout_seconds (see bounded()). Cancellation of the request
task propagates into the driver and aborts the in-flight statement.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import get_settings
from app.domain.exceptions import PersistenceException

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    engine_kwargs: dict[str, Any] = {"echo": settings.database_echo}
    connect_args: dict[str, Any] = {}
    if settings.database_url.startswith("postgresql"):
        engine_kwargs["pool_pre_ping"] = True
        engine_kwargs["pool_size"] = (
            settings.db_pool_size if settings.db_pool_size is not None else 20
        )
        engine_kwargs["max_overflow"] = (
            settings.db_max_overflow if settings.db_max_overflow is not None else 30
        )
        engine_kwargs["pool_recycle"] = 3600
        connect_args["command_timeout"] = settings.store_timeout_seconds
    engine = create_async_engine(
        settings.database_url,
        connect_args=connect_args,
        **engine_kwargs,
    )
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


async def dispose_engine() -> None:
    """Dispose the engine pool (application shutdown)."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating the engine if needed.

    Used by services that own their transaction boundaries (e.g. the
    invitation workflow commits before mail is sent, and compensates in a
    separate transaction).
    """
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def bounded(awaitable: Awaitable[T], timeout: float | None = None) -> T:
    """Await a store call under the configured store timeout.

    Raises PersistenceException when the bound elapses; the awaited
    operation is cancelled.
    """
    limit = timeout if timeout is not None else get_settings().store_timeout_seconds
    try:
        async with asyncio.timeout(limit):
            return await awaitable
    except TimeoutError as e:
        raise PersistenceException("store call", "timeout") from e


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession], operation: str
) -> AsyncIterator[AsyncSession]:
    """Open a session and a single transaction; commit on success, roll back on error.

    Database driver errors and timeouts surface as PersistenceException.
    Domain exceptions raised inside the block propagate unchanged (after rollback).
    """
    try:
        async with session_factory() as session:
            async with session.begin():
                yield session
    except SQLAlchemyError as e:
        logger.warning("Transaction failed during %s: %s", operation, e)
        raise PersistenceException(operation, type(e).__name__) from e
    except TimeoutError as e:
        raise PersistenceException(operation, "timeout") from e


async def get_db():
    """Database session dependency for read operations.

    Does not commit; use get_db_transactional for writes.
    Yields a session and closes it on exit.
    """
    factory = get_session_factory()
    async with factory() as session:
        yield session


async def get_db_transactional():
    """Database session dependency for write operations.

    Begins a transaction, commits on success, rolls back on exception.
    Use for POST, PUT, PATCH, DELETE endpoints.
    """
    factory = get_session_factory()
    async with factory() as session:
        async with session.begin():
            yield session
