"""
Catalog Backend — ORM Models
==============================

Importing this package registers every table with Base.metadata, which is
what Alembic autogenerate and the test suite's create_all rely on.
"""

from catalog.models.artist import Artist
from catalog.models.genre import Genre
from catalog.models.album import Album
from catalog.models.song import Song, SongFeaturedArtist

__all__ = ["Artist", "Genre", "Album", "Song", "SongFeaturedArtist"]
