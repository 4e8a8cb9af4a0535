"""
Gallery — Page Renderer

Pure functions: (entities, query, options) → HTML string.
No IO. Deterministic: same input → same output, always.

Page chrome is assembled line by line; cards and badges use mustache
templates rendered with chevron, which HTML-escapes every {{field}}.
Callers run the query engine first and pass the ordered result in.
"""

from __future__ import annotations

from html import escape as _html_escape
from typing import Any, Literal
from urllib.parse import urlencode
from uuid import UUID

import chevron

from engine.gallery.query import popularity
from engine.gallery.types import (
    Character,
    Media,
    QueryDescriptor,
    RenderOptions,
    Tag,
)

FetchState = Literal["success", "error"]

EMPTY_MESSAGE = "Pretty empty in here"
ERROR_MESSAGE = "Something went wrong"
NO_MATCH_MESSAGE = "Nothing matches this search"

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

CHARACTER_CARD = """\
<article class="card">
  {{#cover}}<img class="card-media" src="{{url}}" alt="{{alt}}">{{/cover}}
  <div class="card-body">
    <h2 class="card-title"><a href="/character/{{id}}">{{name}}</a></h2>
    <p class="truncate">{{description}}</p>
    <p class="badges">{{#tags}}<a href="/tag/{{id}}" class="badge{{#selected}} badge-selected{{/selected}}">{{name}}</a>{{/tags}}</p>
    <span class="likes" title="Likes">&hearts; {{likes}}</span>
  </div>
</article>"""

TAG_CARD = """\
<article class="card">
  {{#cover}}<img class="card-media" src="{{url}}" alt="{{alt}}">{{/cover}}
  {{^cover}}<div class="card-media card-placeholder"></div>{{/cover}}
  <div class="card-body">
    <h2 class="card-title"><a href="/tag/{{id}}">{{name}}</a></h2>
    <span class="likes" title="Characters">&hearts; {{count}}</span>
  </div>
</article>"""

MEDIA_ITEM = """\
<figure class="media">
  {{#image}}<img src="{{url}}" alt="{{alt}}">{{/image}}
  {{^image}}<a href="{{url}}">{{alt}}</a>{{/image}}
  <figcaption>&hearts; {{likes}}</figcaption>
</figure>"""

TAG_FILTER = """\
<label class="filter"><input type="checkbox" name="tag" value="{{id}}"{{#checked}} checked{{/checked}}> {{name}}</label>"""

_CSS = """\
    body { font-family: system-ui, sans-serif; margin: 0; background: #fafaf9; color: #1a1a1a; }
    nav { display: flex; gap: 1rem; padding: 1rem 2rem; background: #1f2937; }
    nav a { color: #f9fafb; text-decoration: none; }
    main { padding: 1rem 2rem; max-width: 80rem; margin: 0 auto; }
    .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(14rem, 1fr)); gap: 1rem; }
    .card { background: #fff; border: 1px solid #e5e7eb; border-radius: 0.75rem; overflow: hidden; }
    .card-media { width: 100%; display: block; }
    .card-placeholder { height: 8rem; background: #e5e7eb; }
    .card-body { padding: 0.75rem; }
    .truncate { white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }
    .badge { display: inline-block; padding: 0.1rem 0.5rem; margin: 0 0.25rem 0.25rem 0;
             border-radius: 999px; background: #e5e7eb; font-weight: 600; color: inherit; text-decoration: none; }
    .badge-selected { background: #16a34a; color: #fff; }
    .likes { color: #dc2626; }
    .notice { text-align: center; padding: 4rem 0; color: #6b7280; }
    .search { display: flex; flex-wrap: wrap; gap: 0.5rem; align-items: center; margin-bottom: 1rem; }
    .filters { display: grid; grid-template-columns: repeat(2, minmax(0, 1fr)); gap: 0.25rem; }
    .media-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(12rem, 1fr)); gap: 1rem; }
    .media img { width: 100%; }"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def asset_url(base_url: str, media_id: UUID | str, file_extension: str) -> str:
    """CDN URL for a media file. String composition only, no network."""
    return f"{base_url.rstrip('/')}/{media_id}.{file_extension}"


def query_href(path: str, query: QueryDescriptor) -> str:
    """Link to `path` carrying the descriptor as query parameters."""
    params = query.to_params()
    return f"{path}?{urlencode(params)}" if params else path


def render_gallery_page(
    characters: list[Character],
    query: QueryDescriptor,
    all_tags: list[Tag],
    state: FetchState = "success",
    total: int | None = None,
    options: RenderOptions | None = None,
) -> str:
    """
    Render the character gallery.

    `characters` is the already filtered and ordered result. `total` is the
    size of the unfiltered collection; it separates an empty gallery from a
    search that matched nothing.
    """
    opts = options or RenderOptions()
    parts: list[str] = []
    parts.append('    <h1>Characters</h1>')
    parts.append(_render_search_form("/", query, all_tags))
    parts.append(_render_state_or_grid(
        state,
        total if total is not None else len(characters),
        [_character_card(c, query, opts) for c in characters],
    ))
    return _render_document("Characters", "\n".join(parts), opts)


def render_tag_index_page(
    tags: list[Tag],
    query: QueryDescriptor,
    state: FetchState = "success",
    total: int | None = None,
    options: RenderOptions | None = None,
) -> str:
    """Render the tag index. Tags are ranked by how many characters carry them."""
    opts = options or RenderOptions()
    parts: list[str] = []
    parts.append('    <h1>Tags</h1>')
    parts.append(_render_search_form("/tags", query, []))
    parts.append(_render_state_or_grid(
        state,
        total if total is not None else len(tags),
        [_tag_card(t, opts) for t in tags],
    ))
    return _render_document("Tags", "\n".join(parts), opts)


def render_character_page(character: Character, options: RenderOptions | None = None) -> str:
    opts = options or RenderOptions()
    parts: list[str] = []
    parts.append(f"    <h1>{escape(character.name)}</h1>")
    if character.author_name:
        parts.append(f'    <p class="author">by {escape(character.author_name)}</p>')
    if character.description:
        parts.append(f"    <p>{escape(character.description)}</p>")
    parts.append(f'    <p class="likes">&hearts; {popularity(character)}</p>')

    badges = "".join(
        chevron.render('<a href="/tag/{{id}}" class="badge">{{name}}</a>', {"id": str(t.id), "name": t.name})
        for t in character.tags
    )
    parts.append(f'    <p class="badges">{badges}</p>')

    if character.media:
        items = [_media_item(m, opts) for m in character.media]
        parts.append('    <section class="media-grid">')
        parts.append("\n".join(items))
        parts.append("    </section>")
    else:
        parts.append(f'    <p class="notice">{EMPTY_MESSAGE}</p>')

    return _render_document(character.name, "\n".join(parts), opts)


def render_tag_page(
    tag: Tag,
    characters: list[Character],
    query: QueryDescriptor,
    options: RenderOptions | None = None,
) -> str:
    """Render one tag with the characters that carry it."""
    opts = options or RenderOptions()
    parts: list[str] = []
    if tag.cover is not None and tag.cover.is_image:
        parts.append(
            f'    <img class="cover" src="{escape(asset_url(opts.asset_base_url, tag.cover.id, tag.cover.file_extension))}"'
            f' alt="{escape(_media_alt(tag.cover))}">'
        )
    parts.append(f"    <h1>{escape(tag.name)}</h1>")
    parts.append(f'    <p class="likes">&hearts; {popularity(tag)}</p>')

    # The path already names the tag, so the toggle link carries sort only
    toggle_href = query_href(f"/tag/{tag.id}", QueryDescriptor(sort=not query.sort))
    sort_label = "Most liked first" if query.sort else "Least liked first"
    parts.append(f'    <a class="sort" title="Sort items" href="{escape(toggle_href)}">{sort_label}</a>')
    parts.append(_render_state_or_grid(
        "success",
        len(characters),
        [_character_card(c, query, opts) for c in characters],
    ))
    return _render_document(tag.name, "\n".join(parts), opts)


def render_login_page(options: RenderOptions | None = None) -> str:
    opts = options or RenderOptions()
    body = "\n".join([
        "    <h1>Sign in required</h1>",
        f'    <p class="notice">Sign in to browse the {escape(opts.site_title)}.</p>',
    ])
    return _render_document("Sign in", body, opts, show_nav=False)


def render_not_found_page(what: str, options: RenderOptions | None = None) -> str:
    opts = options or RenderOptions()
    body = f'    <p class="notice">{escape(what)} not found.</p>'
    return _render_document("Not found", body, opts)


def render_error_page(title: str, options: RenderOptions | None = None) -> str:
    """Fallback for detail pages whose data could not be fetched."""
    opts = options or RenderOptions()
    body = f'    <p class="notice">{ERROR_MESSAGE}</p>'
    return _render_document(title, body, opts)


def escape(text: str) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)


# ---------------------------------------------------------------------------
# Document shell
# ---------------------------------------------------------------------------


def _render_document(title: str, body: str, opts: RenderOptions, show_nav: bool = True) -> str:
    parts: list[str] = []

    parts.append("<!DOCTYPE html>")
    parts.append('<html lang="en">')
    parts.append("<head>")
    parts.append('  <meta charset="utf-8">')
    parts.append('  <meta name="viewport" content="width=device-width, initial-scale=1">')
    parts.append(f"  <title>{escape(title)} | {escape(opts.site_title)}</title>")
    parts.append("  <style>")
    parts.append(_CSS)
    parts.append("  </style>")
    parts.append("</head>")
    parts.append("<body>")

    if show_nav:
        parts.append("  <nav>")
        parts.append('    <a href="/">Characters</a>')
        parts.append('    <a href="/tags">Tags</a>')
        parts.append("  </nav>")

    parts.append("  <main>")
    parts.append(body)
    parts.append("  </main>")

    if opts.footer:
        parts.append(f"  <footer>{escape(opts.footer)}</footer>")

    parts.append("</body>")
    parts.append("</html>")

    return "\n".join(parts)


def _render_search_form(action: str, query: QueryDescriptor, all_tags: list[Tag]) -> str:
    """Search box, tag filter checkboxes, sort toggle and clear link."""
    parts: list[str] = []
    parts.append(f'    <form class="search" method="get" action="{escape(action)}">')
    parts.append(
        f'      <input type="text" name="q" value="{escape(query.text)}" placeholder="Search..." aria-label="Search">'
    )
    if all_tags:
        filters = "\n".join(
            "        " + chevron.render(TAG_FILTER, {"id": str(t.id), "name": t.name, "checked": t.id in query.tags})
            for t in all_tags
        )
        parts.append('      <fieldset class="filters">')
        parts.append(filters)
        parts.append("      </fieldset>")
    sort_value = "desc" if query.sort else "asc"
    parts.append(f'      <input type="hidden" name="sort" value="{sort_value}">')
    parts.append('      <button type="submit">Search</button>')

    toggled = query.toggle_sort()
    sort_label = "Most liked first" if query.sort else "Least liked first"
    parts.append(f'      <a class="sort" title="Sort items" href="{escape(query_href(action, toggled))}">{sort_label}</a>')
    parts.append(f'      <a class="clear" title="Clear search parameters" href="{escape(action)}">Clear</a>')
    parts.append("    </form>")
    return "\n".join(parts)


def _render_state_or_grid(state: FetchState, total: int, cards: list[str]) -> str:
    if state == "error":
        return f'    <p class="notice">{ERROR_MESSAGE}</p>'
    if total == 0:
        return f'    <p class="notice">{EMPTY_MESSAGE}</p>'
    if not cards:
        return f'    <p class="notice">{NO_MATCH_MESSAGE}</p>'
    return '    <section class="grid">\n' + "\n".join(cards) + "\n    </section>"


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------


def _media_alt(media: Media) -> str:
    return f"{media.file_name}.{media.file_extension}"


def _cover_context(cover: Media | None, opts: RenderOptions) -> dict[str, str] | bool:
    if cover is None or not cover.is_image:
        return False
    return {
        "url": asset_url(opts.asset_base_url, cover.id, cover.file_extension),
        "alt": _media_alt(cover),
    }


def _character_card(character: Character, query: QueryDescriptor, opts: RenderOptions) -> str:
    context: dict[str, Any] = {
        "id": str(character.id),
        "name": character.name,
        "description": character.description or "",
        "cover": _cover_context(character.cover, opts),
        "tags": [
            {"id": str(t.id), "name": t.name, "selected": t.id in query.tags}
            for t in character.tags
        ],
        "likes": str(popularity(character)),
    }
    return chevron.render(CHARACTER_CARD, context)


def _tag_card(tag: Tag, opts: RenderOptions) -> str:
    context: dict[str, Any] = {
        "id": str(tag.id),
        "name": tag.name,
        "cover": _cover_context(tag.cover, opts),
        "count": str(popularity(tag)),
    }
    return chevron.render(TAG_CARD, context)


def _media_item(media: Media, opts: RenderOptions) -> str:
    context: dict[str, Any] = {
        "url": asset_url(opts.asset_base_url, media.id, media.file_extension),
        "alt": _media_alt(media),
        "image": media.is_image,
        "likes": str(media.like_count),
    }
    return chevron.render(MEDIA_ITEM, context)
