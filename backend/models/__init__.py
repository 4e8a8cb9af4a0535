"""
Pydantic models for the gallery API.

Request validation and response shapes live here. No imports from db,
repos, or routes. Domain entities live in engine.gallery.types.
"""

from backend.models.character import (
    CharacterResponse,
    CreateCharacterRequest,
    EditCharacterRequest,
)
from backend.models.media import MediaResponse
from backend.models.tag import CreateTagRequest, TagResponse
from backend.models.user import User, UserPublic

__all__ = [
    # User models
    "User",
    "UserPublic",
    # Character models
    "CreateCharacterRequest",
    "EditCharacterRequest",
    "CharacterResponse",
    # Tag models
    "CreateTagRequest",
    "TagResponse",
    # Media models
    "MediaResponse",
]
