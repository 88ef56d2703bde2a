"""
Catalog Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (real SQLite database, mocked
       sessions, seeded records, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── session_factory: async_sessionmaker bound to a fresh SQLite file
    ├── db_session: one session from that factory
    ├── empty_session_factory: factory bound to a SQLite file with no tables
    ├── seed: helper that inserts artists, genres and albums
    ├── mock_db_session: AsyncMock session for call-level assertions
    ├── test_client: HTTPX AsyncClient talking to a fresh app instance whose
        session factory points at the test database
    └── broken_client: same, bound to the table-less database
"""

import os
import tempfile

# Must run before anything imports catalog.config
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='catalog_test_')}/catalog.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Optional  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import delete, event, func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from catalog.database import Base, get_session_factory  # noqa: E402
from catalog.models import Album, Artist, Genre  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """
    Session factory bound to a throwaway SQLite database.

    A file (not :memory:) database is used so the concurrent reads of the
    genre pages each get a real connection of their own.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


class CatalogSeeder:
    """Inserts records, each in its own committed session."""

    def __init__(self, factory: async_sessionmaker[AsyncSession]):
        self.factory = factory

    async def _save(self, instance):
        async with self.factory() as session:
            session.add(instance)
            await session.commit()
        return instance

    async def artist(self, name: str = "Nina Simone") -> Artist:
        return await self._save(Artist(name=name))

    async def genre(self, name: str) -> Genre:
        return await self._save(Genre(name=name))

    async def album(
        self,
        title: str,
        artist: Artist,
        genre: Optional[Genre] = None,
        summary: Optional[str] = None,
    ) -> Album:
        return await self._save(
            Album(
                title=title,
                artist_id=artist.id,
                genre_id=genre.id if genre is not None else None,
                summary=summary,
            )
        )

    async def remove(self, model, record_id) -> None:
        async with self.factory() as session:
            await session.execute(delete(model).where(model.id == record_id))
            await session.commit()

    async def count_genres_named(self, name: str) -> int:
        async with self.factory() as session:
            result = await session.execute(
                select(func.count(Genre.id)).where(Genre.name == name)
            )
            return result.scalar_one()


@pytest_asyncio.fixture
async def empty_session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """
    Session factory bound to a SQLite file with no tables.

    Every query fails with OperationalError ("no such table"), which stands
    in for a database that is reachable but broken.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def seed(session_factory) -> CatalogSeeder:
    return CatalogSeeder(session_factory)


# ══════════════════════════════════════════════════════════════════════════
# Mocks
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_invalid_name(mock_db_session):
            await genre_service.create_genre(mock_db_session, "Ro")
            mock_db_session.execute.assert_not_awaited()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for page testing.

    Redirects are NOT followed so tests can assert on 302 + Location.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/genres")
            assert response.status_code == 200
    """
    from catalog.main import create_app

    app = create_app()
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def broken_client(empty_session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Like test_client, but every database query fails."""
    from catalog.main import create_app

    app = create_app()
    app.dependency_overrides[get_session_factory] = lambda: empty_session_factory
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
