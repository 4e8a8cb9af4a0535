"""Media models — files on the CDN and their likes."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel

from engine.gallery.renderer import asset_url
from engine.gallery.types import Media


class MediaResponse(BaseModel):
    """What the API returns for a media file."""

    id: UUID
    file_name: str
    file_extension: str
    mimetype: str
    url: str
    like_ids: list[UUID]
    like_count: int
    liked: bool = False

    @classmethod
    def from_entity(cls, media: Media, base_url: str, viewer_id: UUID | None = None) -> MediaResponse:
        """Convert a Media entity to an API response, resolving its CDN URL."""
        return cls(
            id=media.id,
            file_name=media.file_name,
            file_extension=media.file_extension,
            mimetype=media.mimetype,
            url=asset_url(base_url, media.id, media.file_extension),
            like_ids=sorted(media.like_ids, key=str),
            like_count=media.like_count,
            liked=viewer_id is not None and viewer_id in media.like_ids,
        )
