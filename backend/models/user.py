"""Users as the gallery sees them: character authors and media likers."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr


class User(BaseModel):
    """A row in the users table, loaded when a session is verified."""

    id: UUID
    username: str
    email: EmailStr | None = None
    created_at: datetime


class UserPublic(BaseModel):
    """What /auth/me returns. The email stays private."""

    id: UUID
    username: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> UserPublic:
        """Strip the private fields."""
        return cls(
            id=user.id,
            username=user.username,
            created_at=user.created_at,
        )
