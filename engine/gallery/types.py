"""
Gallery — Shared Types

Data classes used by the query engine, the page renderer and the
repositories that feed them. Likes are stored as sets of user ids, so
popularity is always derived, never stored.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from uuid import UUID

# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Media:
    """A file hosted on the CDN plus the users who liked it."""

    id: UUID
    file_name: str
    file_extension: str
    mimetype: str
    like_ids: frozenset[UUID] = field(default_factory=frozenset)

    @property
    def is_image(self) -> bool:
        return "image" in self.mimetype

    @property
    def like_count(self) -> int:
        return len(self.like_ids)


@dataclass(frozen=True)
class TagRef:
    """A tag as embedded in a character (id + name only)."""

    id: UUID
    name: str


@dataclass(frozen=True)
class Character:
    id: UUID
    name: str
    author_id: UUID
    description: str | None = None
    author_name: str | None = None
    tags: tuple[TagRef, ...] = ()
    media: tuple[Media, ...] = ()
    cover: Media | None = None

    @property
    def tag_ids(self) -> frozenset[UUID]:
        return frozenset(t.id for t in self.tags)


@dataclass(frozen=True)
class Tag:
    id: UUID
    name: str
    character_ids: frozenset[UUID] = field(default_factory=frozenset)
    cover: Media | None = None

    @property
    def tag_ids(self) -> frozenset[UUID]:
        # Tags never carry tags themselves
        return frozenset()


Entity = Character | Tag


# ---------------------------------------------------------------------------
# Query descriptor
# ---------------------------------------------------------------------------

SORT_DESC = "desc"
SORT_ASC = "asc"


@dataclass(frozen=True)
class QueryDescriptor:
    """
    Search, tag filter and sort direction for one gallery view.

    Immutable: every update returns a new descriptor. `text` is always
    lower-cased. `sort=True` means most popular first.
    """

    text: str = ""
    tags: frozenset[UUID] = field(default_factory=frozenset)
    sort: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", self.text.lower())
        object.__setattr__(self, "tags", frozenset(self.tags))

    @classmethod
    def from_params(
        cls,
        q: str | None = None,
        tags: Iterable[str] | None = None,
        sort: str | None = None,
    ) -> QueryDescriptor:
        """
        Build a descriptor from raw request parameters.

        Unparseable tag ids are dropped rather than rejected so a stale
        bookmark still renders the gallery.
        """
        tag_ids: set[UUID] = set()
        for raw in tags or ():
            try:
                tag_ids.add(UUID(raw))
            except (ValueError, TypeError):
                continue
        return cls(
            text=q or "",
            tags=frozenset(tag_ids),
            sort=(sort or SORT_DESC).lower() != SORT_ASC,
        )

    def with_text(self, text: str) -> QueryDescriptor:
        return replace(self, text=text)

    def toggle_tag(self, tag_id: UUID) -> QueryDescriptor:
        if tag_id in self.tags:
            return replace(self, tags=self.tags - {tag_id})
        return replace(self, tags=self.tags | {tag_id})

    def toggle_sort(self) -> QueryDescriptor:
        return replace(self, sort=not self.sort)

    def cleared(self) -> QueryDescriptor:
        """Reset to the default descriptor. Replaces every field."""
        return QueryDescriptor()

    @property
    def is_default(self) -> bool:
        return self == QueryDescriptor()

    def to_params(self) -> list[tuple[str, str]]:
        """Serialise back to query-string pairs (tags sorted for stable URLs)."""
        params: list[tuple[str, str]] = []
        if self.text:
            params.append(("q", self.text))
        params.extend(("tag", str(t)) for t in sorted(self.tags, key=str))
        params.append(("sort", SORT_DESC if self.sort else SORT_ASC))
        return params


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@dataclass
class RenderOptions:
    """Options controlling what the page renderer includes in output."""

    asset_base_url: str = "https://gallery.b-cdn.net"
    site_title: str = "Character Gallery"
    footer: str | None = None
