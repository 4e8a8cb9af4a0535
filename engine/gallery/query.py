"""
Gallery — Query Engine

Pure function: (entities, query) → filtered, ranked list.
No IO. Deterministic: same input → same output, always.

Filtering:
  - name or description contains query.text (both lower-cased)
  - entity tag ids are a superset of query.tags (AND, not OR)

Ranking:
  - characters: likes across media plus cover likes (cover counted once)
  - tags: number of characters carrying the tag

Ties keep fetch order in both directions.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from engine.gallery.types import Character, Entity, QueryDescriptor, Tag

E = TypeVar("E", Character, Tag)


def popularity(entity: Entity) -> int:
    """Derived like count used as the rank key."""
    if isinstance(entity, Tag):
        return len(entity.character_ids)

    total = sum(m.like_count for m in entity.media)
    cover = entity.cover
    if cover is not None and cover.id not in {m.id for m in entity.media}:
        total += cover.like_count
    return total


def matches(entity: Entity, query: QueryDescriptor) -> bool:
    """True if the entity passes both the text and the tag filter."""
    if isinstance(entity, Tag):
        # Tags have no description and no tags of their own
        return query.text in entity.name.lower() and not query.tags

    text_hit = query.text in entity.name.lower() or (
        bool(entity.description) and query.text in entity.description.lower()
    )
    return text_hit and query.tags <= entity.tag_ids


def run_query(entities: Sequence[E], query: QueryDescriptor) -> list[E]:
    """
    Filter and order entities for display.

    Returns the full filtered set, most popular first when query.sort is
    True. The key is negated instead of passing reverse=True so equal
    scores never swap places.
    """
    kept = [e for e in entities if matches(e, query)]
    sign = -1 if query.sort else 1
    return sorted(kept, key=lambda e: sign * popularity(e))
