"""Markdown to HTML rendering: typography, linkify, heading anchors, code highlighting"""

import logging
import re

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from mdit_py_plugins.anchors import anchors_plugin
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound


logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")
_FORMATTER = HtmlFormatter(nowrap=True)


def heading_slug(text: str) -> str:
    """Anchor id for a heading: lowercase, whitespace runs collapsed to '-'."""
    return _WS_RE.sub("-", text.strip().lower())


def _wrap(body: str, lang: str | None = None) -> str:
    cls = f"highlight language-{lang}" if lang else "highlight"
    return f'<pre><code class="{cls}">{body}</code></pre>'


def _auto(code: str) -> str:
    """Best-effort highlighting with a guessed lexer; plain escaped text if guessing fails."""
    try:
        lexer: Lexer = guess_lexer(code)
        return _wrap(highlight(code, lexer, _FORMATTER))
    except Exception as e:  # a broken lexer must not abort the page
        logger.debug("Auto-highlight failed, emitting plain block: %s", e)
        return _wrap(escapeHtml(code))


def highlight_code(code: str, lang: str, attrs: str = "") -> str:
    """Highlight a fenced block; always returns a complete <pre><code> element."""
    if lang:
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lexer = None
        if lexer is not None:
            try:
                return _wrap(highlight(code, lexer, _FORMATTER), lang)
            except Exception as e:
                logger.debug("Highlighting as %r failed, falling back to auto-detect: %s", lang, e)
    return _auto(code)


def make_renderer(preset: str = "gfm-like") -> MarkdownIt:
    """Build a MarkdownIt instance with raw HTML, linkify, typographer, and anchors enabled."""
    md = MarkdownIt(preset, options_update={
        "html": True,
        "linkify": True,
        "typographer": True,
        "highlight": highlight_code,
    })
    md.enable(["linkify", "replacements", "smartquotes"])
    return md.use(anchors_plugin, min_level=1, max_level=6, slug_func=heading_slug)


_renderer = make_renderer()


def render(body: str) -> str:
    """Render a markdown body (frontmatter already stripped) to HTML."""
    return _renderer.render(body)
