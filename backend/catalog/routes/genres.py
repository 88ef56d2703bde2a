"""
Catalog Backend — Genre Route Handlers
========================================

What:  Server-rendered pages for listing, viewing, creating and deleting genres.
How:   Each handler reads path/form values, delegates to GenreService, and
       either renders a template or answers with a 302 redirect.
Who:   Browsers following the catalog's links and submitting its forms.

Template Context (names are part of the page contract):
    genre_list.html    title, genre_list
    genre_detail.html  title, genre, genre_albums
    genre_form.html    title, [genre], [errors]
    genre_delete.html  title, genre, genre_albums

Routing Note:
    /genre/create is declared before /genre/{genre_id} so the literal path
    is matched first.
"""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.database import get_db_session, get_session_factory
from catalog.exceptions import GenreInUseError
from catalog.services.genre_service import genre_service
from catalog.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Genres"])

GENRE_LIST_URL = "/genres"


def _render_delete_page(request: Request, genre: Any, albums: List[Any]) -> Response:
    """The page shown instead of deleting while albums reference the genre."""
    return templates.TemplateResponse(
        request,
        "genre_delete.html",
        {
            "title": "Delete Genre",
            "genre": genre,
            "genre_albums": albums,
        },
    )


@router.get("/genres", response_class=HTMLResponse, summary="List all genres")
async def genre_list(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    genres = await genre_service.list_genres(db)
    return templates.TemplateResponse(
        request,
        "genre_list.html",
        {"title": "Genre List", "genre_list": genres},
    )


@router.get("/genre/create", response_class=HTMLResponse, summary="Genre create form")
async def genre_create_get(request: Request) -> Response:
    return templates.TemplateResponse(request, "genre_form.html", {"title": "Create Genre"})


@router.post(
    "/genre/create",
    response_class=HTMLResponse,
    summary="Create a genre",
    responses={
        200: {"description": "Form re-rendered with validation errors"},
        302: {"description": "Redirect to the new or already existing genre"},
    },
)
async def genre_create_post(
    request: Request,
    name: Optional[str] = Form(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Handle the create form.

    Invalid input re-renders the form (HTTP 200) with the sanitized value and
    every field error. Valid input redirects to the genre's page, whether it
    was just created or already existed under the same name.
    """
    submission = await genre_service.create_genre(db, name)

    if not submission.is_valid:
        return templates.TemplateResponse(
            request,
            "genre_form.html",
            {
                "title": "Create Genre",
                "genre": submission.genre,
                "errors": submission.errors,
            },
        )

    return RedirectResponse(url=submission.genre.url, status_code=302)


@router.get(
    "/genre/{genre_id}",
    response_class=HTMLResponse,
    summary="Genre detail",
    responses={404: {"description": "Genre not found"}},
)
async def genre_detail(
    request: Request,
    genre_id: str,
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> Response:
    genre, albums = await genre_service.get_genre_detail(factory, genre_id)
    return templates.TemplateResponse(
        request,
        "genre_detail.html",
        {
            "title": "Genre Detail",
            "genre": genre,
            "genre_albums": albums,
        },
    )


@router.get(
    "/genre/{genre_id}/delete",
    response_class=HTMLResponse,
    summary="Delete a genre, or show what blocks it",
    responses={
        200: {"description": "Albums still reference the genre; nothing deleted"},
        302: {"description": "Genre deleted; redirect to the genre list"},
        404: {"description": "Genre not found"},
    },
)
async def genre_delete_get(
    request: Request,
    genre_id: str,
    db: AsyncSession = Depends(get_db_session),
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> Response:
    """
    Delete the genre straight away when no album references it.

    This GET mutates: links to /genre/{id}/delete remove unreferenced genres
    without a confirmation step. The behaviour is kept so existing links
    keep working.
    """
    try:
        await genre_service.delete_genre(db, factory, genre_id)
    except GenreInUseError as blocked:
        return _render_delete_page(request, blocked.genre, blocked.albums)
    return RedirectResponse(url=GENRE_LIST_URL, status_code=302)


@router.post(
    "/genre/delete",
    response_class=HTMLResponse,
    summary="Delete a genre from the delete form",
    responses={
        200: {"description": "Albums still reference the genre; nothing deleted"},
        302: {"description": "Genre deleted; redirect to the genre list"},
    },
)
async def genre_delete_post(
    request: Request,
    genreid: Optional[str] = Form(default=None),
    db: AsyncSession = Depends(get_db_session),
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> Response:
    """Same check as the GET variant, keyed on the submitted `genreid`."""
    try:
        await genre_service.delete_genre(db, factory, genreid, require_existing=False)
    except GenreInUseError as blocked:
        return _render_delete_page(request, blocked.genre, blocked.albums)
    return RedirectResponse(url=GENRE_LIST_URL, status_code=302)
