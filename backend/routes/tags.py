"""Tag routes — list, get, create."""

from __future__ import annotations

from uuid import UUID

import asyncpg
from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth import get_current_user
from backend.config import settings
from backend.models.tag import CreateTagRequest, TagResponse
from backend.models.user import User
from backend.repos.tag_repo import TagRepo

router = APIRouter(prefix="/api/tags", tags=["tags"])
tag_repo = TagRepo()


@router.get("", status_code=200)
async def list_tags(user: User = Depends(get_current_user)) -> list[TagResponse]:
    """List every tag. Feeds the gallery's tag filter."""
    tags = await tag_repo.list_all(user.id)
    return [TagResponse.from_entity(t, settings.ASSET_BASE_URL) for t in tags]


@router.get("/{tag_id}", status_code=200)
async def get_tag(
    tag_id: UUID,
    user: User = Depends(get_current_user),
) -> TagResponse:
    tag = await tag_repo.get(user.id, tag_id)
    if not tag:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tag not found.")
    return TagResponse.from_entity(tag, settings.ASSET_BASE_URL)


@router.post("", status_code=201)
async def create_tag(
    req: CreateTagRequest,
    user: User = Depends(get_current_user),
) -> TagResponse:
    """Create a tag. Names are unique."""
    try:
        tag = await tag_repo.create(user.id, req)
    except asyncpg.UniqueViolationError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Tag already exists.") from e
    return TagResponse.from_entity(tag, settings.ASSET_BASE_URL)
