"""
Catalog Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly error pages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       render the error page with the right status code.
Who:   Raised by services; caught by global handlers or by routes that
       recover locally.

Exception Hierarchy:
    CatalogError (base)
    ├── NotFoundError      → 404 error page
    ├── GenreInUseError    → caught by the delete routes (blocking page)
    └── DatabaseError      → 500 error page (generic message)

Form validation failures are not exceptions: the create route re-renders the
form with the collected field errors.
"""

from typing import Any, Dict, Optional, Sequence


class CatalogError(Exception):
    """
    Base exception for all catalog application errors.

    Attributes:
        message:  User-facing error description (safe to render)
        context:  Additional debug info (logged but NOT rendered)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(CatalogError):
    """
    Raised when a requested record does not exist.

    When:    GET /genre/{id} or GET /genre/{id}/delete with an unknown or
             malformed identifier.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the service layer converts
    that None into this exception so the error page gets the 404 status.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Record",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class GenreInUseError(CatalogError):
    """
    Raised when a genre cannot be deleted because albums still reference it.

    The delete routes catch this and render the blocking page listing
    `albums`; it never reaches the global handlers during normal routing.
    `genre` may be None when the delete form named a genre that no longer
    exists but albums still point at its identifier.
    """

    status_code = 409

    def __init__(self, genre: Any, albums: Sequence[Any]):
        self.genre = genre
        self.albums = list(albums)
        super().__init__(
            message="Genre is referenced by albums and cannot be deleted",
            context={
                "genre_id": str(genre.id) if genre is not None else None,
                "album_count": len(self.albums),
            },
        )


class DatabaseError(CatalogError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, timeout, constraint violation.
    HTTP:    500 Internal Server Error

    The message rendered to the user is always generic; the underlying
    driver error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
