"""
Catalog Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependencies.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine with connection pooling, provides a session
       dependency that auto-commits on success and auto-rolls-back on error,
       and a helper that runs independent reads concurrently.
Who:   Used by route handlers via FastAPI's dependency injection system and
       by services that fan out reads.
When:  Engine is created at module import; sessions are created per-request.

Concurrent reads:
    An AsyncSession is not safe to share between tasks that run at the same
    time, so read_concurrently() opens one short-lived session per read from
    the same factory and awaits them together with asyncio.gather.
    The reads see no common snapshot; callers must not rely on ordering
    between them.
"""

import asyncio
from typing import Any, AsyncGenerator, Awaitable, Callable, List

from fastapi import Depends
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from catalog.config import settings

Reader = Callable[[AsyncSession], Awaitable[Any]]


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **settings.engine_options)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: objects stay readable by templates after the
# session that loaded them has been committed and closed
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they share a single metadata
    object, which Alembic reads for migrations and tests use for create_all.
    """
    pass


# ── Dependencies ──────────────────────────────────────────────────────────
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    FastAPI dependency returning the session factory.

    Tests override this dependency to bind every session (request sessions
    and concurrent read sessions alike) to a throwaway database.
    """
    return async_session_factory


async def get_db_session(
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Raises:
        Any database exceptions are propagated to the global error handler.
    """
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def read_concurrently(
    factory: async_sessionmaker[AsyncSession],
    *readers: Reader,
) -> List[Any]:
    """
    Run independent reads at the same time, each on its own session.

    Args:
        factory: Session factory the read sessions are opened from
        readers: Coroutine functions taking a session and returning loaded data

    Returns:
        The readers' results, in the order the readers were given.

    The first failing read propagates its exception once all reads settle
    their sessions; no partial result is returned.
    """

    async def _run(reader: Reader) -> Any:
        async with factory() as session:
            return await reader(session)

    return list(await asyncio.gather(*(_run(reader) for reader in readers)))


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Close all pooled connections. Called during application shutdown."""
    await engine.dispose()
