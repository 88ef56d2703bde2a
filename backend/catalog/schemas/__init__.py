# Schemas package init
"""
Catalog Backend — Pydantic Schemas
====================================

What:  Input validation and response models, kept separate from the ORM.

Schema Inventory:
    - genre.py:  GenreForm (create form rules), FieldError, validate_genre_form()
    - song.py:   SongCreate (song write rules)
    - health.py: HealthResponse (GET /health)
"""
