# Services package init
"""
Catalog Backend — Services Layer
==================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Routes handle HTTP and rendering; services handle lookups, checks and writes.

Service Inventory:
    - GenreService: list, detail, create (with duplicate-name check),
      delete (with album dependency check)
    - SongService: song creation from a validated SongCreate
"""
