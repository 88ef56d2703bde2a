"""
Catalog Backend — Genre Service Tests
=======================================

What:  Tests for GenreService (list, detail, create, delete).
How:   Mostly against a real per-test SQLite database; a few use the mock
       session where only the calls matter.

What we test:
    ✅ Genres are listed in ascending, case-sensitive name order
    ✅ Create inserts once and returns the existing genre for a repeated name
    ✅ Invalid names produce errors without touching the database
    ✅ Detail populates album artists and 404s on unknown/malformed ids
    ✅ Delete is refused while albums reference the genre
    ✅ Driver errors are wrapped in DatabaseError
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from catalog.database import read_concurrently
from catalog.exceptions import DatabaseError, GenreInUseError, NotFoundError
from catalog.models import Genre
from catalog.schemas.genre import GENRE_NAME_MESSAGE
from catalog.services.genre_service import GenreService, parse_identifier


class TestParseIdentifier:

    def test_accepts_uuid_string(self):
        value = uuid.uuid4()
        assert parse_identifier(str(value)) == value

    def test_rejects_garbage(self):
        assert parse_identifier("not-an-id") is None
        assert parse_identifier("") is None
        assert parse_identifier(None) is None


class TestGenreServiceList:

    def setup_method(self):
        self.service = GenreService()

    @pytest.mark.asyncio
    async def test_list_sorted_by_name(self, seed, db_session):
        for name in ("rock", "Jazz", "ambient", "Blues"):
            await seed.genre(name)

        genres = await self.service.list_genres(db_session)

        # Upper case sorts before lower case
        assert [g.name for g in genres] == ["Blues", "Jazz", "ambient", "rock"]

    @pytest.mark.asyncio
    async def test_list_empty(self, db_session):
        assert await self.service.list_genres(db_session) == []

    @pytest.mark.asyncio
    async def test_list_wraps_driver_errors(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError):
            await self.service.list_genres(mock_db_session)


class TestGenreServiceCreate:

    def setup_method(self):
        self.service = GenreService()

    @pytest.mark.asyncio
    async def test_create_new_genre(self, session_factory, seed):
        async with session_factory() as db:
            submission = await self.service.create_genre(db, "  Rock ")
            await db.commit()

        assert submission.is_valid
        assert submission.created is True
        assert submission.genre.name == "Rock"
        assert submission.genre.url == f"/genre/{submission.genre.id}"
        assert await seed.count_genres_named("Rock") == 1

    @pytest.mark.asyncio
    async def test_repeated_name_returns_existing(self, session_factory, seed):
        existing = await seed.genre("Rock")

        async with session_factory() as db:
            submission = await self.service.create_genre(db, "Rock")
            await db.commit()

        assert submission.is_valid
        assert submission.created is False
        assert submission.genre.id == existing.id
        assert await seed.count_genres_named("Rock") == 1

    @pytest.mark.asyncio
    async def test_name_match_is_exact(self, session_factory, seed):
        await seed.genre("Rock")

        async with session_factory() as db:
            submission = await self.service.create_genre(db, "rock")
            await db.commit()

        assert submission.created is True
        assert await seed.count_genres_named("rock") == 1

    @pytest.mark.asyncio
    async def test_invalid_name_writes_nothing(self, mock_db_session):
        submission = await self.service.create_genre(mock_db_session, "Ro")

        assert not submission.is_valid
        assert submission.created is False
        assert submission.genre.name == "Ro"
        assert [e.message for e in submission.errors] == [GENRE_NAME_MESSAGE]
        mock_db_session.execute.assert_not_awaited()
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_wraps_driver_errors(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("timeout"))
        )

        with pytest.raises(DatabaseError):
            await self.service.create_genre(mock_db_session, "Rock")


class TestGenreServiceDetail:

    def setup_method(self):
        self.service = GenreService()

    @pytest.mark.asyncio
    async def test_detail_with_albums(self, session_factory, seed):
        genre = await seed.genre("Jazz")
        other = await seed.genre("Soul")
        artist = await seed.artist("John Coltrane")
        await seed.album("Blue Train", artist, genre)
        await seed.album("Giant Steps", artist, genre)
        await seed.album("Unrelated", artist, other)

        found, albums = await self.service.get_genre_detail(session_factory, str(genre.id))

        assert found.id == genre.id
        assert sorted(a.title for a in albums) == ["Blue Train", "Giant Steps"]
        # Artist is populated and readable after the sessions have closed
        assert {a.artist.name for a in albums} == {"John Coltrane"}

    @pytest.mark.asyncio
    async def test_detail_unknown_genre(self, session_factory):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_genre_detail(session_factory, str(uuid.uuid4()))
        assert exc_info.value.message == "Genre not found"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_detail_malformed_id(self, session_factory):
        with pytest.raises(NotFoundError):
            await self.service.get_genre_detail(session_factory, "12345")


class TestGenreServiceDelete:

    def setup_method(self):
        self.service = GenreService()

    async def _genre_exists(self, factory, genre_id) -> bool:
        async with factory() as session:
            return await session.get(Genre, genre_id) is not None

    @pytest.mark.asyncio
    async def test_delete_unreferenced_genre(self, session_factory, seed):
        genre = await seed.genre("Polka")

        async with session_factory() as db:
            await self.service.delete_genre(db, session_factory, str(genre.id))
            await db.commit()

        assert not await self._genre_exists(session_factory, genre.id)

    @pytest.mark.asyncio
    async def test_delete_blocked_by_albums(self, session_factory, seed):
        genre = await seed.genre("Jazz")
        artist = await seed.artist("Miles Davis")
        album = await seed.album("Kind of Blue", artist, genre)

        async with session_factory() as db:
            with pytest.raises(GenreInUseError) as exc_info:
                await self.service.delete_genre(db, session_factory, str(genre.id))
            await db.commit()

        blocked = exc_info.value
        assert blocked.genre.id == genre.id
        assert [a.id for a in blocked.albums] == [album.id]
        assert blocked.albums[0].title == "Kind of Blue"
        assert blocked.albums[0].artist.name == "Miles Davis"
        assert await self._genre_exists(session_factory, genre.id)

    @pytest.mark.asyncio
    async def test_delete_unknown_genre_raises_not_found(self, session_factory):
        async with session_factory() as db:
            with pytest.raises(NotFoundError):
                await self.service.delete_genre(db, session_factory, str(uuid.uuid4()))

    @pytest.mark.asyncio
    async def test_form_delete_of_unknown_genre_is_a_no_op(self, session_factory, seed):
        survivor = await seed.genre("Folk")

        async with session_factory() as db:
            await self.service.delete_genre(
                db, session_factory, str(uuid.uuid4()), require_existing=False
            )
            await db.commit()

        assert await self._genre_exists(session_factory, survivor.id)

    @pytest.mark.asyncio
    async def test_form_delete_of_unknown_genre_with_albums_is_blocked(
        self, session_factory, seed
    ):
        """Albums pointing at a vanished genre id still block the delete."""
        genre = await seed.genre("Ghost")
        artist = await seed.artist()
        await seed.album("Haunted", artist, genre)

        # Simulate a stale id: the albums reference an id with no genre row.
        # The pragma must run before the DELETE opens a transaction.
        async with session_factory() as session:
            await session.execute(text("PRAGMA foreign_keys=OFF"))
            await session.execute(Genre.__table__.delete().where(Genre.id == genre.id))
            await session.commit()

        async with session_factory() as db:
            with pytest.raises(GenreInUseError) as exc_info:
                await self.service.delete_genre(
                    db, session_factory, str(genre.id), require_existing=False
                )

        assert exc_info.value.genre is None
        assert [a.title for a in exc_info.value.albums] == ["Haunted"]


class TestReadConcurrently:

    @pytest.mark.asyncio
    async def test_each_read_gets_its_own_session(self, session_factory):
        seen = []

        def reader(label):
            async def read(session):
                seen.append(id(session))
                return label
            return read

        results = await read_concurrently(
            session_factory, reader("first"), reader("second")
        )

        assert results == ["first", "second"]
        assert len(set(seen)) == 2

    @pytest.mark.asyncio
    async def test_failing_read_propagates(self, session_factory):
        async def ok(session):
            return "fine"

        async def broken(session):
            raise OperationalError("SELECT", {}, Exception("disk I/O error"))

        with pytest.raises(OperationalError):
            await read_concurrently(session_factory, ok, broken)


class TestGenreServiceReadFailures:
    """Reads that fan out over read_concurrently wrap driver errors."""

    def setup_method(self):
        self.service = GenreService()

    @pytest.mark.asyncio
    async def test_detail_wraps_driver_errors(self, empty_session_factory):
        with pytest.raises(DatabaseError) as exc_info:
            await self.service.get_genre_detail(empty_session_factory, str(uuid.uuid4()))
        assert exc_info.value.status_code == 500
        assert exc_info.value.context["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_delete_wraps_driver_errors(self, empty_session_factory, mock_db_session):
        with pytest.raises(DatabaseError):
            await self.service.delete_genre(
                mock_db_session, empty_session_factory, str(uuid.uuid4()),
                require_existing=False,
            )
        mock_db_session.execute.assert_not_awaited()
