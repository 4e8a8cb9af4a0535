"""Repository for tag operations."""

from __future__ import annotations

from uuid import UUID

import asyncpg

from backend.db import user_conn
from backend.models.tag import CreateTagRequest
from backend.repos.media_repo import fetch_media_by_ids
from engine.gallery.types import Media, Tag

_SELECT_TAGS = """
    SELECT t.id, t.name, t.cover_id, t.created_at,
           COALESCE(
               array_agg(ct.character_id) FILTER (WHERE ct.character_id IS NOT NULL),
               '{}'
           ) AS character_ids
    FROM tags t
    LEFT JOIN character_tags ct ON ct.tag_id = t.id
"""


def _row_to_tag(row: asyncpg.Record, covers: dict[UUID, Media]) -> Tag:
    """Convert a database row to a Tag entity."""
    return Tag(
        id=row["id"],
        name=row["name"],
        character_ids=frozenset(row["character_ids"]),
        cover=covers.get(row["cover_id"]) if row["cover_id"] else None,
    )


async def _fetch_tags(conn: asyncpg.Connection, where: str = "", *args) -> list[Tag]:
    # where is a fixed clause chosen by this module, never user input
    rows = await conn.fetch(
        f"{_SELECT_TAGS} {where} GROUP BY t.id ORDER BY t.created_at, t.id",  # nosec B608
        *args,
    )
    covers = await fetch_media_by_ids(conn, [row["cover_id"] for row in rows if row["cover_id"]])
    return [_row_to_tag(row, covers) for row in rows]


class TagRepo:
    """All tag-related database operations."""

    async def list_all(self, user_id: UUID) -> list[Tag]:
        """
        List every tag with the ids of the characters carrying it.

        Args:
            user_id: Acting user UUID (gates access via RLS)

        Returns:
            List of Tag entities in creation order
        """
        async with user_conn(user_id) as conn:
            return await _fetch_tags(conn)

    async def get(self, user_id: UUID, tag_id: UUID) -> Tag | None:
        async with user_conn(user_id) as conn:
            found = await _fetch_tags(conn, "WHERE t.id = $1", tag_id)
            return found[0] if found else None

    async def create(self, user_id: UUID, req: CreateTagRequest) -> Tag:
        """
        Create a tag.

        Raises:
            asyncpg.UniqueViolationError: If a tag with this name exists
        """
        async with user_conn(user_id) as conn:
            tag_id = await conn.fetchval(
                "INSERT INTO tags (name) VALUES ($1) RETURNING id",
                req.name,
            )
            found = await _fetch_tags(conn, "WHERE t.id = $1", tag_id)
            return found[0]
