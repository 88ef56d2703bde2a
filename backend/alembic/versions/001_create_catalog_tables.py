"""Create catalog tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates artists, genres, albums, songs and song_featured_artists.
How:   PostgreSQL-specific: UUID keys with gen_random_uuid() defaults and a
       "C" collation on genres.name so ORDER BY name is case-sensitive
       code-point order.

Rollback: downgrade() drops every table (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
        primary_key=True,
    )


def upgrade() -> None:
    op.create_table(
        "artists",
        _uuid_pk(),
        sa.Column("name", sa.String(), nullable=False),
    )

    # No UNIQUE on name: duplicates are prevented by the create flow only
    op.create_table(
        "genres",
        _uuid_pk(),
        sa.Column(
            "name",
            sa.String(collation="C"),
            nullable=False,
            comment="Trimmed, HTML-escaped genre name; uniqueness checked by the application",
        ),
    )
    op.create_index("ix_genres_name", "genres", ["name"])

    op.create_table(
        "albums",
        _uuid_pk(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column(
            "artist_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("artists.id"),
            nullable=False,
        ),
        sa.Column(
            "genre_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("genres.id"),
            nullable=True,
        ),
    )
    op.create_index("idx_albums_genre_id", "albums", ["genre_id"])

    op.create_table(
        "songs",
        _uuid_pk(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column(
            "artist_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("artists.id"),
            nullable=False,
        ),
        sa.Column(
            "album_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("albums.id"),
            nullable=False,
        ),
        sa.Column("art", sa.String(), nullable=True),
        sa.Column("index", sa.Integer(), nullable=True),
        sa.CheckConstraint('"index" >= 1', name="ck_songs_index_positive"),
    )

    op.create_table(
        "song_featured_artists",
        sa.Column(
            "song_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("songs.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column(
            "artist_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("artists.id"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("song_id", "position"),
    )


def downgrade() -> None:
    op.drop_table("song_featured_artists")
    op.drop_table("songs")
    op.drop_index("idx_albums_genre_id", table_name="albums")
    op.drop_table("albums")
    op.drop_index("ix_genres_name", table_name="genres")
    op.drop_table("genres")
    op.drop_table("artists")
