"""
Gallery — the pure engine.

Two components:
  query     — (entities, descriptor) → filtered, ranked list
  renderer  — ranked entities → HTML pages

Nothing here performs IO. Repositories in `backend` build the entity
types; routes run the query and hand the result to the renderer.
"""

from engine.gallery.query import matches, popularity, run_query
from engine.gallery.renderer import (
    asset_url,
    render_character_page,
    render_error_page,
    render_gallery_page,
    render_login_page,
    render_tag_index_page,
    render_tag_page,
)
from engine.gallery.types import Character, Media, QueryDescriptor, RenderOptions, Tag, TagRef

__all__ = [
    "run_query",
    "matches",
    "popularity",
    "asset_url",
    "render_gallery_page",
    "render_tag_index_page",
    "render_character_page",
    "render_error_page",
    "render_tag_page",
    "render_login_page",
    "Character",
    "Media",
    "Tag",
    "TagRef",
    "QueryDescriptor",
    "RenderOptions",
]
