"""Character routes — list, get, create, edit."""

from __future__ import annotations

from uuid import UUID

import asyncpg
from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth import get_current_user
from backend.config import settings
from backend.models.character import (
    CharacterResponse,
    CreateCharacterRequest,
    EditCharacterRequest,
)
from backend.models.user import User
from backend.repos.character_repo import CharacterRepo

router = APIRouter(prefix="/api/characters", tags=["characters"])
character_repo = CharacterRepo()


def _unknown_tag() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=[{"loc": ["body", "tags"], "msg": "unknown tag", "type": "value_error"}],
    )


@router.get("", status_code=200)
async def list_characters(user: User = Depends(get_current_user)) -> list[CharacterResponse]:
    """List every character, in creation order. Filtering and ranking happen in the pages."""
    characters = await character_repo.list_all(user.id)
    return [CharacterResponse.from_entity(c, settings.ASSET_BASE_URL, user.id) for c in characters]


@router.get("/{character_id}", status_code=200)
async def get_character(
    character_id: UUID,
    user: User = Depends(get_current_user),
) -> CharacterResponse:
    """Get a single character by ID."""
    character = await character_repo.get(user.id, character_id)
    if not character:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Character not found.")
    return CharacterResponse.from_entity(character, settings.ASSET_BASE_URL, user.id)


@router.post("", status_code=201)
async def create_character(
    req: CreateCharacterRequest,
    user: User = Depends(get_current_user),
) -> CharacterResponse:
    """Create a character authored by the current user. No session answers 401 before validation runs."""
    try:
        character = await character_repo.create(user.id, req)
    except asyncpg.ForeignKeyViolationError as e:
        raise _unknown_tag() from e
    return CharacterResponse.from_entity(character, settings.ASSET_BASE_URL, user.id)


@router.patch("/{character_id}", status_code=200)
async def edit_character(
    character_id: UUID,
    req: EditCharacterRequest,
    user: User = Depends(get_current_user),
) -> CharacterResponse:
    """Replace a character's name, description and tags."""
    try:
        character = await character_repo.edit(user.id, character_id, req)
    except asyncpg.ForeignKeyViolationError as e:
        raise _unknown_tag() from e
    if not character:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Character not found.")
    return CharacterResponse.from_entity(character, settings.ASSET_BASE_URL, user.id)
