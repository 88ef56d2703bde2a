"""
Catalog Backend — Song Service
================================

What:  Writes songs from a validated SongCreate.
Why:   Song rows are produced by importers and album tooling rather than by
       a page of this application; this is the single place they are built.

References are stored as given. The foreign keys are the only check that
the artist, album and featured artists exist.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.exceptions import DatabaseError
from catalog.models import Song, SongFeaturedArtist
from catalog.schemas.song import SongCreate

logger = logging.getLogger(__name__)


class SongService:
    """
    Business logic for writing songs.

    Error Handling Strategy:
        Input rules are enforced by SongCreate before this runs. Anything
        the database rejects (a dangling artist or album id, the index
        CHECK) is wrapped in DatabaseError with the title as context.
    """

    async def create_song(self, db: AsyncSession, data: SongCreate) -> Song:
        """
        Insert a song with its featured artists in the submitted order.

        Raises:
            DatabaseError: The INSERT failed (e.g. an id references no row)
        """
        song = Song(
            title=data.title,
            artist_id=data.artist,
            album_id=data.album,
            art=data.art,
            index=data.index,
        )
        # append() lets ordering_list number the positions
        for artist_id in data.ft:
            song.featured_links.append(SongFeaturedArtist(artist_id=artist_id))
        try:
            db.add(song)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating song '%s': %s", data.title, str(e))
            raise DatabaseError(
                message="Could not save the song. Please try again.",
                context={"title": data.title, "error_type": type(e).__name__},
            )
        logger.info("Song created: %s ('%s', %d featured)", song.id, song.title, len(data.ft))
        return song


song_service = SongService()
