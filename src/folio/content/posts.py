"""Blog post catalog: enumerate, order by date, and render single posts"""

import logging

from folio.content.store import ContentStore
from folio.core.models import EPOCH, Post, PostSummary
from folio.core.parse import MD_EXTENSION, parse_post, slug_from_name
from folio.core.render import render
from folio.errors import NotFound


logger = logging.getLogger(__name__)


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def _order_key(post: PostSummary) -> tuple:
    """Dated posts first (newest first under reverse sort), undated last."""
    dt = post.frontmatter.parsed_date()
    return (dt is not None, dt or EPOCH)


def list_posts(store: ContentStore) -> list[PostSummary]:
    """Summaries of every .md resource, newest first; undated posts keep listing order at the end."""
    posts = []
    for name in store.list_resources():
        slug = slug_from_name(name)
        if slug is None:
            continue
        frontmatter, _ = parse_post(_decode(store.fetch_resource(name)))
        posts.append(PostSummary(slug=slug, frontmatter=frontmatter))
    # reverse sort is stable, so equal keys keep listing order
    return sorted(posts, key=_order_key, reverse=True)


def get_post(store: ContentStore, slug: str) -> Post:
    """Fetch <slug>.md and render its body; NotFound when the store has no such post."""
    if not slug or "/" in slug or "\\" in slug or ".." in slug:
        raise NotFound(f"{slug}{MD_EXTENSION}")
    raw = store.fetch_resource(f"{slug}{MD_EXTENSION}")
    frontmatter, body = parse_post(_decode(raw))
    return Post(slug=slug, frontmatter=frontmatter, html=render(body))
