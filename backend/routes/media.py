"""Media routes — like toggling and removal."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth import get_current_user
from backend.config import settings
from backend.models.media import MediaResponse
from backend.models.user import User
from backend.repos.media_repo import MediaRepo
from backend.services.cdn import cdn_service

router = APIRouter(prefix="/api/media", tags=["media"])
media_repo = MediaRepo()


@router.post("/{media_id}/like", status_code=200)
async def toggle_like(
    media_id: UUID,
    user: User = Depends(get_current_user),
) -> MediaResponse:
    """Like a media file, or take the like back."""
    media = await media_repo.toggle_like(user.id, media_id)
    if not media:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found.")
    return MediaResponse.from_entity(media, settings.ASSET_BASE_URL, user.id)


@router.delete("/{media_id}", status_code=200)
async def delete_media(
    media_id: UUID,
    user: User = Depends(get_current_user),
) -> dict[str, str]:
    """Delete a media file of one of the user's characters, row first, then the CDN object."""
    media = await media_repo.delete(user.id, media_id)
    if not media:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found.")
    await cdn_service.delete_asset(media)
    return {"message": "Media deleted."}
