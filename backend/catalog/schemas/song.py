"""
Catalog Backend — Song Write Schema
=====================================

What:  Validated shape of a song before it is written.
Why:   Mirrors the rules of the `songs` table so bad input is rejected with a
       field-level message instead of an IntegrityError.

Rules:
    - title:  required, non-empty after trimming
    - artist: required Artist id
    - album:  required Album id
    - ft:     featured Artist ids, order preserved, duplicates allowed
    - art:    optional artwork reference
    - index:  optional track number, >= 1
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SongCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, description="Song title")
    artist: uuid.UUID = Field(description="Primary artist id")
    album: uuid.UUID = Field(description="Album id")
    ft: List[uuid.UUID] = Field(default_factory=list, description="Featured artist ids, in credit order")
    art: Optional[str] = Field(default=None, description="Artwork reference")
    index: Optional[int] = Field(default=None, ge=1, description="1-based track number")
