"""
Catalog Backend — Application Package Initializer
==================================================

What: Marks the `catalog` directory as a Python package.
Why:  Enables module imports like `from catalog.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is a server-rendered catalog of genres, albums, songs and artists,
    split into the same layers for every resource:

    ┌─────────────────────────────────────┐
    │     Routes + Templates (HTML)       │  ← HTTP concerns, rendering, redirects
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Lookups, dependency checks, writes
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic forms
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
