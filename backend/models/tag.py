"""Tag models."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from backend.models.fields import NameField
from backend.models.media import MediaResponse
from engine.gallery.types import Tag


class CreateTagRequest(BaseModel):
    """What the client sends to create a tag."""

    model_config = ConfigDict(extra="forbid")

    name: NameField


class TagResponse(BaseModel):
    """What the API returns."""

    id: UUID
    name: str
    character_ids: list[UUID]
    character_count: int
    cover: MediaResponse | None

    @classmethod
    def from_entity(cls, tag: Tag, base_url: str) -> TagResponse:
        return cls(
            id=tag.id,
            name=tag.name,
            character_ids=sorted(tag.character_ids, key=str),
            character_count=len(tag.character_ids),
            cover=MediaResponse.from_entity(tag.cover, base_url) if tag.cover else None,
        )
