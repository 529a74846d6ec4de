"""Frontmatter extraction for markdown posts"""

import logging
import re
from typing import Any

import yaml

from folio.core.models import PostFrontmatter


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'\A\ufeff?---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
MD_EXTENSION = '.md'


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with the YAML header removed.

    A header that is not valid YAML or not a mapping yields an empty dict; the
    body is still separated at the closing delimiter.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    body = text[m.end():]
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        logger.warning("Ignoring invalid YAML frontmatter: %s", e)
        return {}, body
    if not isinstance(fm, dict):
        logger.warning("Ignoring frontmatter: expected a mapping, got %s", type(fm).__name__)
        return {}, body
    return fm, body


def parse_post(text: str) -> tuple[PostFrontmatter, str]:
    """Split a post into typed frontmatter and markdown body; never raises on bad headers."""
    data, body = split_frontmatter(text)
    return PostFrontmatter.lenient(data), body


def slug_from_name(name: str) -> str | None:
    """Post slug for a resource name, or None if it is not a markdown file."""
    if not name.endswith(MD_EXTENSION):
        return None
    return name[: -len(MD_EXTENSION)]
