"""
Catalog Backend — Song SQLAlchemy Models
==========================================

What:  ORM models for the `songs` table and its featured-artist links.
Why:   A song credits one primary artist, belongs to one album, and may
       feature any number of further artists in a meaningful order.
How:   Featured artists live in `song_featured_artists`, one row per credit,
       keyed by (song_id, position). `Song.ft` is an association proxy over
       those rows, so callers read and assign a plain ordered list of Artist
       objects; ordering_list keeps `position` in step with list order.

Invariants:
    - title, artist_id and album_id are required
    - index, when present, is >= 1 (CHECK constraint + SongCreate schema)
    - the same artist may be featured twice; nothing deduplicates ft
    - references are not re-validated after write: removing an artist or
      album elsewhere is not cascaded here
"""

import uuid
from typing import List, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Uuid
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.models.album import Album
from catalog.models.artist import Artist


class SongFeaturedArtist(Base):
    """One featured-artist credit on a song, at a fixed position."""

    __tablename__ = "song_featured_artists"

    song_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("songs.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    artist_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("artists.id"),
        nullable=False,
    )

    artist: Mapped[Artist] = relationship(lazy="selectin")


class Song(Base):
    """
    A track on an album.

    Attributes:
        title:  Song title (required)
        artist: Primary artist (required)
        album:  Album the song appears on (required)
        ft:     Featured artists, in credit order
        art:    Optional artwork reference (path or URL)
        index:  Optional 1-based track number
    """

    __tablename__ = "songs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String, nullable=False)

    artist_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("artists.id"), nullable=False)
    album_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("albums.id"), nullable=False)

    art: Mapped[Optional[str]] = mapped_column(String, nullable=True, default=None)
    index: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=None)

    artist: Mapped[Artist] = relationship(lazy="raise")
    album: Mapped[Album] = relationship(lazy="raise")

    featured_links: Mapped[List[SongFeaturedArtist]] = relationship(
        order_by=SongFeaturedArtist.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    ft: AssociationProxy[List[Artist]] = association_proxy(
        "featured_links",
        "artist",
        creator=lambda artist: SongFeaturedArtist(artist=artist),
    )

    __table_args__ = (
        CheckConstraint('"index" >= 1', name="ck_songs_index_positive"),
    )

    @property
    def url(self) -> str:
        return f"/song/{self.id}"

    def __repr__(self) -> str:
        return f"<Song(id={self.id}, title='{self.title}', index={self.index})>"
