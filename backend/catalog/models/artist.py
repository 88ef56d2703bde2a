"""
Catalog Backend — Artist SQLAlchemy Model
===========================================

What:  ORM model for the `artists` table.
Who:   Referenced by Album (primary artist) and Song (primary and featured
       artists); populated into album listings on genre pages.
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Artist(Base):
    """A performer credited on albums and songs."""

    __tablename__ = "artists"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)

    @property
    def url(self) -> str:
        return f"/artist/{self.id}"

    def __repr__(self) -> str:
        return f"<Artist(id={self.id}, name='{self.name}')>"
