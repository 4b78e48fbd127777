"""
Allow-list markup sanitizer.

Overlay markup is passed through this filter before it reaches a renderer.
Only the allowed element types and attributes survive; other elements are
unwrapped with their text kept (escaped). Script and style bodies are dropped
entirely. The cleaning itself is done by ``nh3``.
"""

from __future__ import annotations

from typing import Iterable

import nh3

DEFAULT_ALLOWED_TAGS: frozenset[str] = frozenset({"span"})
DEFAULT_ALLOWED_ATTRS: frozenset[str] = frozenset(
    {"class", "data-char-key", "data-tooltip-id", "data-tooltip-content", "title"}
)

# Elements whose content is never rendered as text
DROP_CONTENT_TAGS: frozenset[str] = frozenset({"script", "style", "template", "iframe", "object"})


def sanitize(
    markup: str,
    allowed_tags: Iterable[str] | None = None,
    allowed_attrs: Iterable[str] | None = None,
) -> str:
    """Strip everything outside the allow-list from ``markup``.

    Args:
        markup: HTML fragment to clean.
        allowed_tags: Element names to keep (default: ``span``).
        allowed_attrs: Attribute names to keep on allowed elements.

    Returns:
        The cleaned fragment. Comments are removed and unclosed elements
        are closed.

    Examples:
        >>> sanitize('<span class="x" onclick="evil()">a</span><b>b</b>')
        '<span class="x">a</span>b'
    """
    tags = DEFAULT_ALLOWED_TAGS if allowed_tags is None else frozenset(allowed_tags)
    attrs = DEFAULT_ALLOWED_ATTRS if allowed_attrs is None else frozenset(allowed_attrs)
    return nh3.clean(
        markup,
        tags=set(tags),
        clean_content_tags=set(DROP_CONTENT_TAGS - tags),
        attributes={tag: set(attrs) for tag in tags},
        strip_comments=True,
        link_rel=None,
    )
