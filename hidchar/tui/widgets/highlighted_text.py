"""
Rich text renderers for scanned text and diff overlays.

The analyzer preview and the comparison panes both display text where
invisible characters are swapped for coloured glyphs. These helpers build
:class:`rich.text.Text` objects that ``Static`` widgets can show directly.
"""

from __future__ import annotations

from typing import Iterable

from rich.text import Text

from hidchar.chars.overlay import OverlaySegment
from hidchar.chars.registry import CharacterEntry, color_for
from hidchar.chars.scanner import AnnotatedToken, ScanResult
from hidchar.chars.word_diff import ADDED, REMOVED

# Segment status to background style
DIFF_STYLES: dict[str, str] = {
    ADDED: "on #1e4620",
    REMOVED: "on #5c1f1f",
}

MARKER_STYLE = "bold black on #f7dc6f"
MARKER_DIFF_STYLES: dict[str, str] = {
    ADDED: "bold black on #82e0aa",
    REMOVED: "bold black on #f1948a",
}

# Line breaks render as a glyph and then a real break
_BREAKING_CHARS = frozenset({"\n", "\u2028", "\u2029"})


def glyph_style(char: str) -> str:
    """Return the highlight style for a notable character."""
    return f"bold black on {color_for(char)}"


def render_token(token: AnnotatedToken, text: Text) -> None:
    """Append one annotated token to ``text``."""
    if not token.visible:
        text.append(token.char)
        return
    text.append(token.entry.glyph, style=glyph_style(token.char))
    if token.char in _BREAKING_CHARS:
        text.append("\n")


def render_scan(result: ScanResult) -> Text:
    """Render a scan result with visible tokens as coloured glyphs.

    Hidden tokens are emitted as their raw character so the text keeps its
    layout.
    """
    text = Text()
    for segment in result.segments:
        if isinstance(segment, AnnotatedToken):
            render_token(segment, text)
        else:
            text.append(segment.text)
    return text


def render_overlay(segments: Iterable[OverlaySegment]) -> Text:
    """Render one overlay pane.

    Removed and added segments get a red or green background. Marker pieces
    show their glyph on top of that background.
    """
    text = Text()
    for segment in segments:
        background = DIFF_STYLES.get(segment.status, "")
        for piece in segment.pieces:
            if piece.marker is None:
                text.append(piece.text, style=background)
            else:
                style = MARKER_DIFF_STYLES.get(segment.status, MARKER_STYLE)
                text.append(piece.marker.glyph, style=style)
    return text


def render_entry_label(entry: CharacterEntry) -> Text:
    """Render ``glyph  name (code)`` for lists and table cells."""
    label = Text()
    label.append(f" {entry.glyph} ", style=glyph_style(entry.char))
    label.append(f"  {entry.name} ")
    label.append(f"({entry.code})", style="dim")
    return label
