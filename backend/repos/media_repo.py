"""Repository for media operations (likes and removal)."""

from __future__ import annotations

from uuid import UUID

import asyncpg

from backend.db import user_conn
from engine.gallery.types import Media


def row_to_media(row: asyncpg.Record) -> Media:
    """Convert a database row to a Media entity."""
    return Media(
        id=row["id"],
        file_name=row["file_name"],
        file_extension=row["file_extension"],
        mimetype=row["mimetype"],
        like_ids=frozenset(row["like_ids"] or ()),
    )


async def fetch_media_by_ids(conn: asyncpg.Connection, media_ids: list[UUID]) -> dict[UUID, Media]:
    """Load media rows by id, keyed by id. Used for covers."""
    if not media_ids:
        return {}
    rows = await conn.fetch(
        "SELECT * FROM media WHERE id = ANY($1::uuid[])",
        media_ids,
    )
    return {row["id"]: row_to_media(row) for row in rows}


class MediaRepo:
    """All media-related database operations."""

    async def toggle_like(self, user_id: UUID, media_id: UUID) -> Media | None:
        """
        Like a media file, or remove the like if the user already liked it.

        Args:
            user_id: Acting user UUID
            media_id: Media UUID

        Returns:
            Updated Media, None if it does not exist
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                """
                UPDATE media
                SET like_ids = CASE
                    WHEN $2::uuid = ANY(like_ids) THEN array_remove(like_ids, $2::uuid)
                    ELSE array_append(like_ids, $2::uuid)
                END
                WHERE id = $1
                RETURNING *
                """,
                media_id,
                user_id,
            )
            return row_to_media(row) if row else None

    async def delete(self, user_id: UUID, media_id: UUID) -> Media | None:
        """
        Delete a media row. Only the author of the owning character may.

        The caller removes the file from the CDN afterwards.

        Args:
            user_id: Acting user UUID
            media_id: Media UUID

        Returns:
            The deleted Media, None if not found or not owned by the user
        """
        async with user_conn(user_id) as conn:
            row = await conn.fetchrow(
                """
                DELETE FROM media m
                USING characters c
                WHERE m.id = $1 AND m.character_id = c.id AND c.author_id = $2
                RETURNING m.*
                """,
                media_id,
                user_id,
            )
            return row_to_media(row) if row else None
