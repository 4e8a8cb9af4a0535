"""Repository for character operations."""

from __future__ import annotations

from collections import defaultdict
from uuid import UUID, uuid4

import asyncpg

from backend.db import user_conn
from backend.models.character import CreateCharacterRequest, EditCharacterRequest
from backend.repos.media_repo import fetch_media_by_ids, row_to_media
from engine.gallery.types import Character, Media, TagRef

_SELECT_CHARACTERS = """
    SELECT c.*, u.username AS author_name
    FROM characters c
    LEFT JOIN users u ON u.id = c.author_id
"""


async def _fetch_characters(conn: asyncpg.Connection, where: str = "", *args) -> list[Character]:
    """
    Load characters with their tags, media and cover.

    Three queries on one connection: characters, tag links, media. Rows are
    returned in creation order, which is the tie-break order the gallery
    keeps when popularity is equal.
    """
    # where is a fixed clause chosen by this module, never user input
    rows = await conn.fetch(
        f"{_SELECT_CHARACTERS} {where} ORDER BY c.created_at, c.id",  # nosec B608
        *args,
    )
    if not rows:
        return []

    ids = [row["id"] for row in rows]

    tags_by_character: dict[UUID, list[TagRef]] = defaultdict(list)
    tag_rows = await conn.fetch(
        """
        SELECT ct.character_id, t.id, t.name
        FROM character_tags ct
        JOIN tags t ON t.id = ct.tag_id
        WHERE ct.character_id = ANY($1::uuid[])
        ORDER BY t.name
        """,
        ids,
    )
    for tag_row in tag_rows:
        tags_by_character[tag_row["character_id"]].append(TagRef(id=tag_row["id"], name=tag_row["name"]))

    media_by_character: dict[UUID, list[Media]] = defaultdict(list)
    media_rows = await conn.fetch(
        """
        SELECT * FROM media
        WHERE character_id = ANY($1::uuid[])
        ORDER BY created_at, id
        """,
        ids,
    )
    media_by_id: dict[UUID, Media] = {}
    for media_row in media_rows:
        media = row_to_media(media_row)
        media_by_character[media_row["character_id"]].append(media)
        media_by_id[media.id] = media

    missing_covers = [row["cover_id"] for row in rows if row["cover_id"] and row["cover_id"] not in media_by_id]
    media_by_id.update(await fetch_media_by_ids(conn, missing_covers))

    return [
        Character(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            author_id=row["author_id"],
            author_name=row["author_name"],
            tags=tuple(tags_by_character[row["id"]]),
            media=tuple(media_by_character[row["id"]]),
            cover=media_by_id.get(row["cover_id"]) if row["cover_id"] else None,
        )
        for row in rows
    ]


async def _replace_tags(conn: asyncpg.Connection, character_id: UUID, tag_ids: list[UUID]) -> None:
    await conn.execute("DELETE FROM character_tags WHERE character_id = $1", character_id)
    if tag_ids:
        await conn.executemany(
            "INSERT INTO character_tags (character_id, tag_id) VALUES ($1, $2) ON CONFLICT DO NOTHING",
            [(character_id, tag_id) for tag_id in dict.fromkeys(tag_ids)],
        )


class CharacterRepo:
    """All character-related database operations."""

    async def list_all(self, user_id: UUID) -> list[Character]:
        """
        List every character in the gallery, in creation order.

        Args:
            user_id: Acting user UUID (gates access via RLS)

        Returns:
            List of Character entities with tags, media and cover
        """
        async with user_conn(user_id) as conn:
            return await _fetch_characters(conn)

    async def list_for_tag(self, user_id: UUID, tag_id: UUID) -> list[Character]:
        """List characters carrying a tag, in creation order."""
        async with user_conn(user_id) as conn:
            return await _fetch_characters(
                conn,
                "WHERE c.id IN (SELECT character_id FROM character_tags WHERE tag_id = $1)",
                tag_id,
            )

    async def get(self, user_id: UUID, character_id: UUID) -> Character | None:
        """
        Get a single character by ID.

        Returns:
            Character if found, None otherwise
        """
        async with user_conn(user_id) as conn:
            found = await _fetch_characters(conn, "WHERE c.id = $1", character_id)
            return found[0] if found else None

    async def create(self, author_id: UUID, req: CreateCharacterRequest) -> Character:
        """
        Create a character authored by the acting user.

        Args:
            author_id: Acting user UUID, recorded as author
            req: Validated CreateCharacterRequest

        Returns:
            Newly created Character

        Raises:
            asyncpg.ForeignKeyViolationError: If a tag id does not exist
        """
        character_id = uuid4()

        async with user_conn(author_id) as conn:
            await conn.execute(
                """
                INSERT INTO characters (id, name, description, author_id)
                VALUES ($1, $2, $3, $4)
                """,
                character_id,
                req.name,
                req.description,
                author_id,
            )
            await _replace_tags(conn, character_id, req.tags or [])
            found = await _fetch_characters(conn, "WHERE c.id = $1", character_id)
            return found[0]

    async def edit(self, user_id: UUID, character_id: UUID, req: EditCharacterRequest) -> Character | None:
        """
        Replace a character's name, description and tag list.

        Args:
            user_id: Acting user UUID
            character_id: Character UUID
            req: Validated EditCharacterRequest

        Returns:
            Updated Character, None if not found

        Raises:
            asyncpg.ForeignKeyViolationError: If a tag id does not exist
        """
        async with user_conn(user_id) as conn:
            result = await conn.execute(
                """
                UPDATE characters
                SET name = $2, description = $3, updated_at = now()
                WHERE id = $1
                """,
                character_id,
                req.name,
                req.description,
            )
            if result != "UPDATE 1":
                return None

            await _replace_tags(conn, character_id, req.tags)
            found = await _fetch_characters(conn, "WHERE c.id = $1", character_id)
            return found[0]
