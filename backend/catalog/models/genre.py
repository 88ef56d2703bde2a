"""
Catalog Backend — Genre SQLAlchemy Model
==========================================

What:  ORM model representing the `genres` table.
Who:   Used by GenreService for list/detail/create/delete and by Alembic.

Table Design Rationale:
    - UUID primary key, generated in Python so new rows know their URL
      before the INSERT is flushed.
    - name: stored already trimmed and HTML-escaped by the create form.
      There is deliberately no UNIQUE constraint: the create flow checks
      for an existing genre with the same name before inserting, and two
      concurrent submissions may both pass that check.
    - The Postgres migration declares the column with the "C" collation so
      ORDER BY name is case-sensitive code-point order.
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Genre(Base):
    """
    A named category that albums belong to.

    Lifecycle:
        1. Created from the create form (name trimmed, escaped, >= 3 chars)
        2. Read by the list and detail pages
        3. Deleted only while no album references it
    """

    __tablename__ = "genres"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(
        String,
        nullable=False,
        index=True,
        comment="Trimmed, HTML-escaped genre name; uniqueness checked by the application",
    )

    @property
    def url(self) -> str:
        """Path of this genre's detail page."""
        return f"/genre/{self.id}"

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, name='{self.name}')>"
