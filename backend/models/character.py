"""Character models — create/edit requests and API responses."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from backend.models.fields import DescriptionField, NameField
from backend.models.media import MediaResponse
from engine.gallery.query import popularity
from engine.gallery.types import Character


class CreateCharacterRequest(BaseModel):
    """What the client sends to create a character. Tags may be omitted or null."""

    model_config = ConfigDict(extra="forbid")

    name: NameField
    description: DescriptionField
    tags: list[UUID] | None = None


class EditCharacterRequest(BaseModel):
    """What the client sends to edit a character. The tag list replaces the old one."""

    model_config = ConfigDict(extra="forbid")

    name: NameField
    description: DescriptionField
    tags: list[UUID]


class TagRefResponse(BaseModel):
    id: UUID
    name: str


class AuthorResponse(BaseModel):
    id: UUID
    username: str | None


class CharacterResponse(BaseModel):
    """What the API returns."""

    id: UUID
    name: str
    description: str | None
    author: AuthorResponse
    tags: list[TagRefResponse]
    media: list[MediaResponse]
    cover: MediaResponse | None
    likes: int

    @classmethod
    def from_entity(cls, character: Character, base_url: str, viewer_id: UUID | None = None) -> CharacterResponse:
        """Convert a Character entity to a public API response."""
        return cls(
            id=character.id,
            name=character.name,
            description=character.description,
            author=AuthorResponse(id=character.author_id, username=character.author_name),
            tags=[TagRefResponse(id=t.id, name=t.name) for t in character.tags],
            media=[MediaResponse.from_entity(m, base_url, viewer_id) for m in character.media],
            cover=MediaResponse.from_entity(character.cover, base_url, viewer_id) if character.cover else None,
            likes=popularity(character),
        )
