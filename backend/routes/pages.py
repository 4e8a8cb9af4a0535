"""Server-rendered gallery pages.

Every page except /login requires a session; without one the browser is
redirected to /login. Pages fetch the full collection, run the query
engine against the request's search parameters, and render the result.
"""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import UUID

import asyncpg
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from backend.auth import get_optional_user
from backend.config import settings
from backend.models.user import User
from backend.repos.character_repo import CharacterRepo
from backend.repos.tag_repo import TagRepo
from engine.gallery.query import run_query
from engine.gallery.renderer import (
    render_character_page,
    render_error_page,
    render_gallery_page,
    render_login_page,
    render_not_found_page,
    render_tag_index_page,
    render_tag_page,
)
from engine.gallery.types import QueryDescriptor, RenderOptions

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])
character_repo = CharacterRepo()
tag_repo = TagRepo()

# Failures raised by the store while fetching a page's data
_FETCH_ERRORS = (asyncpg.PostgresError, OSError)


def _options() -> RenderOptions:
    return RenderOptions(asset_base_url=settings.ASSET_BASE_URL, site_title=settings.SITE_TITLE)


def _to_login() -> RedirectResponse:
    return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)


def _error_page(title: str) -> HTMLResponse:
    return HTMLResponse(
        content=render_error_page(title, _options()),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _query(q: str | None, tag: list[str] | None, sort: str | None) -> QueryDescriptor:
    return QueryDescriptor.from_params(q=q, tags=tag, sort=sort)


@router.get("/login", response_class=HTMLResponse)
async def login_page() -> HTMLResponse:
    return HTMLResponse(content=render_login_page(_options()))


@router.get("/", response_class=HTMLResponse)
async def gallery_page(
    user: Annotated[User | None, Depends(get_optional_user)],
    q: str | None = None,
    tag: Annotated[list[str] | None, Query()] = None,
    sort: str | None = None,
) -> Response:
    """Character gallery filtered by `q` and `tag`, ranked by likes (`sort=desc|asc`)."""
    if user is None:
        return _to_login()

    query = _query(q, tag, sort)
    try:
        characters = await character_repo.list_all(user.id)
        all_tags = await tag_repo.list_all(user.id)
    except _FETCH_ERRORS:
        logger.exception("Failed to load gallery for user %s", user.id)
        html = render_gallery_page([], query, [], state="error", options=_options())
        return HTMLResponse(content=html, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    results = run_query(characters, query)
    html = render_gallery_page(results, query, all_tags, total=len(characters), options=_options())
    return HTMLResponse(content=html)


@router.get("/tags", response_class=HTMLResponse)
async def tag_index_page(
    user: Annotated[User | None, Depends(get_optional_user)],
    q: str | None = None,
    sort: str | None = None,
) -> Response:
    """All tags filtered by name, ranked by how many characters carry them."""
    if user is None:
        return _to_login()

    query = _query(q, None, sort)
    try:
        tags = await tag_repo.list_all(user.id)
    except _FETCH_ERRORS:
        logger.exception("Failed to load tags for user %s", user.id)
        html = render_tag_index_page([], query, state="error", options=_options())
        return HTMLResponse(content=html, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    results = run_query(tags, query)
    html = render_tag_index_page(results, query, total=len(tags), options=_options())
    return HTMLResponse(content=html)


@router.get("/character/{character_id}", response_class=HTMLResponse)
async def character_page(
    character_id: UUID,
    user: Annotated[User | None, Depends(get_optional_user)],
) -> Response:
    if user is None:
        return _to_login()

    try:
        character = await character_repo.get(user.id, character_id)
    except _FETCH_ERRORS:
        logger.exception("Failed to load character %s for user %s", character_id, user.id)
        return _error_page("Character")

    if character is None:
        return HTMLResponse(
            content=render_not_found_page("Character", _options()),
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return HTMLResponse(content=render_character_page(character, _options()))


@router.get("/tag/{tag_id}", response_class=HTMLResponse)
async def tag_page(
    tag_id: UUID,
    user: Annotated[User | None, Depends(get_optional_user)],
    sort: str | None = None,
) -> Response:
    """One tag and the characters carrying it, most liked first."""
    if user is None:
        return _to_login()

    try:
        tag = await tag_repo.get(user.id, tag_id)
        tagged = await character_repo.list_for_tag(user.id, tag_id) if tag is not None else []
    except _FETCH_ERRORS:
        logger.exception("Failed to load tag %s for user %s", tag_id, user.id)
        return _error_page("Tag")

    if tag is None:
        return HTMLResponse(
            content=render_not_found_page("Tag", _options()),
            status_code=status.HTTP_404_NOT_FOUND,
        )

    query = QueryDescriptor(tags=frozenset({tag.id}), sort=_query(None, None, sort).sort)
    characters = run_query(tagged, query)
    return HTMLResponse(content=render_tag_page(tag, characters, query, _options()))
