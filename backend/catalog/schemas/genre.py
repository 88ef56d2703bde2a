"""
Catalog Backend — Genre Form Schema
=====================================

What:  Validation and sanitization rules for the genre create form.
Why:   Submitted names are checked and made safe for HTML before any query
       runs, and the form needs every failure at once to re-render.
How:   GenreForm declares the rules; validate_genre_form() runs them and
       converts a pydantic ValidationError into FieldError entries instead
       of raising, returning the sanitized value either way.

Rules for `name` (applied in this order):
    1. strip leading/trailing whitespace
    2. require at least 3 characters
    3. escape HTML special characters (& < > " ' / \ `), using the same
       entities as express-validator's escape() so names stored by either
       application compare equal

The sanitized value is produced even when validation fails so the form
can be redisplayed with what the user typed, made safe.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

GENRE_NAME_MIN_LENGTH = 3
GENRE_NAME_MESSAGE = "Genre name must contain at least 3 characters"

_HTML_ENTITIES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})


def escape_html(value: str) -> str:
    """Replace HTML special characters with entities in a single pass."""
    return value.translate(_HTML_ENTITIES)


class FieldError(BaseModel):
    """
    What:  One failed rule on one submitted form field.
    Who:   Rendered next to the form by genre_form.html.
    """
    field: str = Field(description="Name of the form field that failed")
    message: str = Field(description="Human-readable explanation of the failure")
    value: str = Field(default="", description="Sanitized value that was submitted")


def sanitize_genre_name(raw: Optional[str]) -> str:
    """Trim and HTML-escape a submitted name. None is treated as empty."""
    return escape_html((raw or "").strip())


class GenreForm(BaseModel):
    """
    What:  Validated body of POST /genre/create.
    How:   str_strip_whitespace trims before the length rule runs; the
           validator escapes after it, so "R&B" passes and is stored as
           "R&amp;B".
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if len(v) < GENRE_NAME_MIN_LENGTH:
            raise PydanticCustomError("genre_name_too_short", GENRE_NAME_MESSAGE)
        return escape_html(v)


def validate_genre_form(name: Optional[str]) -> Tuple[str, List[FieldError]]:
    """
    Run the genre form rules without raising.

    Args:
        name: Raw `name` form value (None when the field was omitted)

    Returns:
        (sanitized_name, errors) — errors is empty when the form is valid.
    """
    sanitized = sanitize_genre_name(name)
    try:
        form = GenreForm(name=name or "")
    except ValidationError as exc:
        errors = [
            FieldError(
                field=".".join(str(part) for part in err["loc"]) or "name",
                message=err["msg"],
                value=sanitized,
            )
            for err in exc.errors()
        ]
        return sanitized, errors
    return form.name, []
