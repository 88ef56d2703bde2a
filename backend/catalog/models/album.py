"""
Catalog Backend — Album SQLAlchemy Model
==========================================

What:  ORM model for the `albums` table.
Why:   Albums reference a genre; that reference is what blocks genre
       deletion and what the genre detail page lists.

Query Patterns:
    - Albums of a genre: SELECT ... WHERE genre_id = :id
      → Uses idx_albums_genre_id
    - Artist is loaded eagerly (joinedload) wherever albums are displayed,
      because templates render after the loading session has closed.
"""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base
from catalog.models.artist import Artist
from catalog.models.genre import Genre


class Album(Base):
    """An album by one artist, optionally filed under one genre."""

    __tablename__ = "albums"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String, nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    artist_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("artists.id"),
        nullable=False,
    )

    # No ON DELETE rule: the genre delete flow refuses while albums remain
    genre_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("genres.id"),
        nullable=True,
    )

    artist: Mapped[Artist] = relationship(lazy="raise")
    genre: Mapped[Optional[Genre]] = relationship(lazy="raise")

    __table_args__ = (
        Index("idx_albums_genre_id", "genre_id"),
    )

    @property
    def url(self) -> str:
        return f"/album/{self.id}"

    def __repr__(self) -> str:
        return f"<Album(id={self.id}, title='{self.title}')>"
