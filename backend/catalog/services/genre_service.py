"""
Catalog Backend — Genre Service (Business Logic)
==================================================

What:  Lookups, creation and guarded deletion of genres.
Why:   Keeps query and dependency-check logic out of the route handlers.
How:   Plain async methods taking the request session (writes, simple reads)
       and, where two independent reads are needed, the session factory so
       both reads can run at the same time on separate sessions.
Who:   Called by the /genres and /genre/... route handlers.

Operation Flow:
    list    → SELECT genres ORDER BY name
    detail  → [genre by id ‖ albums of genre + artist] → NotFoundError | data
    create  → validate → (errors) | existing by name → existing | INSERT
    delete  → [genre by id ‖ albums of genre (title, artist)]
              → NotFoundError | GenreInUseError | DELETE

Known races (left as they are):
    - create: two identical submissions can both miss the existence check
      and both insert, producing two genres with the same name.
    - delete: an album added between the dependency check and the DELETE
      is not noticed.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import joinedload, load_only

from catalog.database import read_concurrently
from catalog.exceptions import DatabaseError, GenreInUseError, NotFoundError
from catalog.models import Album, Genre
from catalog.schemas.genre import FieldError, validate_genre_form

logger = logging.getLogger(__name__)


def parse_identifier(raw: Optional[str]) -> Optional[uuid.UUID]:
    """
    Parse a record identifier from a path or form value.

    Returns None for anything that is not a UUID; callers treat that the
    same as an identifier that matches no row.
    """
    if not raw:
        return None
    try:
        return uuid.UUID(str(raw).strip())
    except ValueError:
        return None


@dataclass
class GenreSubmission:
    """
    Outcome of a create-form submission.

    Attributes:
        genre:   The created or existing genre, or the unsaved sanitized
                 genre when validation failed
        errors:  Field errors; non-empty means nothing was written
        created: True only when a new row was inserted
    """
    genre: Genre
    errors: List[FieldError] = field(default_factory=list)
    created: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.errors


class GenreService:
    """
    Business logic for the genre pages.

    Error Handling Strategy:
        Missing genres become NotFoundError (404 page). Deleting a genre
        that albums still reference raises GenreInUseError, which the
        delete routes turn into the blocking page. Driver failures are
        wrapped in DatabaseError so the user sees a generic message while
        the details are logged.
    """

    async def list_genres(self, db: AsyncSession) -> List[Genre]:
        """All genres, sorted ascending by name."""
        try:
            result = await db.execute(select(Genre).order_by(Genre.name))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing genres: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve genres. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_genre_detail(
        self,
        factory: async_sessionmaker[AsyncSession],
        raw_id: str,
    ) -> Tuple[Genre, List[Album]]:
        """
        A genre and every album filed under it, artists populated.

        Raises:
            NotFoundError: No genre with this identifier (→ 404)
            DatabaseError: A read failed (→ 500)
        """
        genre, albums = await self._load_genre_with_albums(
            factory, parse_identifier(raw_id), projected=False
        )
        if genre is None:
            raise NotFoundError(resource="Genre", resource_id=raw_id)
        return genre, albums

    async def create_genre(self, db: AsyncSession, name: Optional[str]) -> GenreSubmission:
        """
        Validate a submitted name and create the genre unless one exists.

        Workflow:
            1. Validate + sanitize (trim, length >= 3, HTML-escape)
            2. Invalid → return the unsaved genre and the errors; no query runs
            3. Genre with the exact sanitized name exists → return it
            4. Otherwise INSERT and return the new genre

        The existence check and the INSERT are separate statements; see the
        module docstring for the duplicate-name race this leaves open.
        """
        sanitized, errors = validate_genre_form(name)
        genre = Genre(name=sanitized)

        if errors:
            return GenreSubmission(genre=genre, errors=errors)

        try:
            result = await db.execute(
                select(Genre).where(Genre.name == sanitized).limit(1)
            )
            existing = result.scalars().first()
            if existing is not None:
                logger.info("Genre '%s' already exists: %s", sanitized, existing.id)
                return GenreSubmission(genre=existing)

            db.add(genre)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating genre '%s': %s", sanitized, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the genre. Please try again.",
                context={"name": sanitized, "error_type": type(e).__name__},
            )

        logger.info("Genre created: %s ('%s')", genre.id, sanitized)
        return GenreSubmission(genre=genre, created=True)

    async def delete_genre(
        self,
        db: AsyncSession,
        factory: async_sessionmaker[AsyncSession],
        raw_id: Optional[str],
        require_existing: bool = True,
    ) -> None:
        """
        Delete a genre that no album references.

        Args:
            db:               Request session the DELETE runs on
            factory:          Session factory for the concurrent reads
            raw_id:           Identifier from the path or the delete form
            require_existing: Raise NotFoundError for an unknown genre. The
                              form-driven delete passes False: an unknown
                              genre with no albums goes straight to the
                              (no-op) DELETE.

        Raises:
            NotFoundError:   Unknown genre and require_existing is set
            GenreInUseError: At least one album references the genre
            DatabaseError:   A read or the DELETE failed
        """
        genre_id = parse_identifier(raw_id)
        genre, albums = await self._load_genre_with_albums(factory, genre_id, projected=True)

        if genre is None and require_existing:
            raise NotFoundError(resource="Genre", resource_id=raw_id)

        if albums:
            logger.info(
                "Refusing to delete genre %s: referenced by %d album(s)", raw_id, len(albums)
            )
            raise GenreInUseError(genre=genre, albums=albums)

        if genre_id is None:
            return

        try:
            await db.execute(delete(Genre).where(Genre.id == genre_id))
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting genre %s: %s", genre_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the genre. Please try again.",
                context={"genre_id": str(genre_id), "error_type": type(e).__name__},
            )
        logger.info("Genre deleted: %s", genre_id)

    async def _load_genre_with_albums(
        self,
        factory: async_sessionmaker[AsyncSession],
        genre_id: Optional[uuid.UUID],
        projected: bool,
    ) -> Tuple[Optional[Genre], List[Album]]:
        """
        Fetch a genre and its albums concurrently.

        projected=True loads only each album's title and artist (what the
        delete page shows); otherwise full album rows are loaded. The
        artist is always populated.
        """
        if genre_id is None:
            return None, []

        async def read_genre(session: AsyncSession) -> Optional[Genre]:
            return await session.get(Genre, genre_id)

        async def read_albums(session: AsyncSession) -> List[Album]:
            query = (
                select(Album)
                .where(Album.genre_id == genre_id)
                .options(joinedload(Album.artist))
            )
            if projected:
                query = query.options(load_only(Album.title, Album.artist_id))
            result = await session.execute(query)
            return list(result.scalars().all())

        try:
            genre, albums = await read_concurrently(factory, read_genre, read_albums)
        except SQLAlchemyError as e:
            logger.error("Database error loading genre %s: %s", genre_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the genre. Please try again.",
                context={"genre_id": str(genre_id), "error_type": type(e).__name__},
            )
        return genre, albums


# ── Singleton Instance ────────────────────────────────────────────────────
# GenreService is stateless; sessions are passed in per call
genre_service = GenreService()
