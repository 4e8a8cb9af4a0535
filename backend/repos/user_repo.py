"""Repository for looking up gallery users (character authors and likers)."""

from __future__ import annotations

from uuid import UUID

import asyncpg

from backend.db import system_conn
from backend.models.user import User


def _row_to_user(row: asyncpg.Record) -> User:
    return User(
        id=row["id"],
        username=row["username"],
        email=row["email"],
        created_at=row["created_at"],
    )


class UserRepo:
    """
    Read-only user lookups.

    Accounts are created by the identity provider, so there is no create
    here. Lookups run on a system connection because they happen while a
    session is being verified, before there is an acting user.
    """

    async def get(self, user_id: UUID) -> User | None:
        async with system_conn() as conn:
            row = await conn.fetchrow("SELECT id, username, email, created_at FROM users WHERE id = $1", user_id)
        return _row_to_user(row) if row else None
