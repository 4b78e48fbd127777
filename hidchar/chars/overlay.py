"""
Diff overlay compositor.

Takes two raw texts, protects their line endings with visible placeholders,
runs a word diff, and re-annotates every diff segment so notable characters
show up as markers inside the diff output.

Pipeline:
    1. Line feeds become ``"␊\\n"`` and carriage returns become ``"␍"`` so the
       diff treats line boundaries as ordinary tokens.
    2. The word diff aligns the substituted texts into per-pane segments.
    3. Each segment is split into pieces: plain text, registry markers, and
       line-ending markers. Pieces know which raw characters they stand for,
       so every pane can be checked to rebuild its raw text exactly.
    4. Pieces render to flat markup: one ``<span>`` per marker, escaped text
       everywhere else, using only sanitizer-allowed attributes.

Placeholders are tracked by offset rather than by searching for the symbols,
so raw text that already contains ``␊`` or ``␍`` is rendered literally.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping

from hidchar.chars.registry import REGISTRY, CharacterEntry, char_key, entry_for
from hidchar.chars.similarity import similarity
from hidchar.chars.word_diff import (
    ADDED,
    NEW,
    OLD,
    REMOVED,
    UNCHANGED,
    DiffResult,
    DiffSegment,
    diff_words,
)

logger = logging.getLogger(__name__)

LF_PLACEHOLDER = "␊"  # SYMBOL FOR LINE FEED
CR_PLACEHOLDER = "␍"  # SYMBOL FOR CARRIAGE RETURN

MARKER_CLASS = "special-char-marker"
TOOLTIP_ID = "diff-special-tooltip"

# Rendered as ordinary whitespace in the diff; line endings have their own markers
SKIPPED_CHARS = frozenset({"\t", "\n", "\r"})

DiffFunction = Callable[[str, str, bool], DiffResult]


class OverlayIntegrityError(ValueError):
    """Raised when diff output cannot be mapped back onto the raw texts."""


@dataclass(frozen=True)
class Marker:
    """Display data for one rendered marker.

    Attributes:
        char: The raw character the marker stands for.
        glyph: Text shown inside the marker.
        title: Short name (hover title).
        tooltip: Tooltip content, ``"<name> (<code>)"``.
    """

    char: str
    glyph: str
    title: str
    tooltip: str

    @property
    def key(self) -> str:
        return char_key(self.char)

    def to_markup(self) -> str:
        """Render the marker as a single flat span."""
        return (
            f'<span class="{MARKER_CLASS}"'
            f' data-char-key="{self.key}"'
            f' data-tooltip-id="{TOOLTIP_ID}"'
            f' data-tooltip-content="{html.escape(self.tooltip, quote=True)}"'
            f' title="{html.escape(self.title, quote=True)}">'
            f"{html.escape(self.glyph, quote=False)}</span>"
        )


LINE_FEED_MARKER = Marker(
    char="\n", glyph="↵", title="Line Feed", tooltip="Line Feed (U+000A)"
)
CARRIAGE_RETURN_MARKER = Marker(
    char="\r", glyph="⏎", title="Carriage Return", tooltip="Carriage Return (U+000D)"
)


def marker_for_entry(entry: CharacterEntry) -> Marker:
    """Build the diff marker for a registry entry."""
    return Marker(
        char=entry.char,
        glyph=entry.glyph,
        title=entry.name,
        tooltip=f"{entry.name} ({entry.code})",
    )


@dataclass(frozen=True)
class OverlayPiece:
    """A fragment of one diff segment.

    Attributes:
        text: The fragment as it appears in the diff segment.
        source: The raw characters it stands for. A line-feed marker stands
            for nothing because the real line feed follows it as plain text.
        marker: Marker display data, or None for plain text.
    """

    text: str
    source: str
    marker: Marker | None = None

    def to_markup(self) -> str:
        if self.marker is None:
            return html.escape(self.text, quote=False)
        return self.marker.to_markup()


@dataclass
class OverlaySegment:
    """A diff segment with its annotation pieces and rendered markup."""

    status: str
    side: str
    diff_text: str
    pieces: list[OverlayPiece] = field(default_factory=list)

    @property
    def source(self) -> str:
        """The raw text this segment covers, line endings restored."""
        return "".join(piece.source for piece in self.pieces)

    @property
    def markup(self) -> str:
        return "".join(piece.to_markup() for piece in self.pieces)

    @property
    def markers(self) -> list[Marker]:
        return [piece.marker for piece in self.pieces if piece.marker is not None]


@dataclass
class OverlayResult:
    """Annotated diff for both panes plus the similarity of the raw texts."""

    old: list[OverlaySegment] = field(default_factory=list)
    new: list[OverlaySegment] = field(default_factory=list)
    similarity: float = 100.0
    elided: bool = False

    def pane(self, side: str) -> list[OverlaySegment]:
        if side == OLD:
            return self.old
        if side == NEW:
            return self.new
        raise ValueError(f"Unknown pane side: {side!r}")

    def markup(self, side: str) -> str:
        """Concatenated segment markup for one pane."""
        return "".join(segment.markup for segment in self.pane(side))

    @property
    def changed(self) -> bool:
        return any(
            segment.status in (ADDED, REMOVED) for segment in self.old + self.new
        )


def substitute_line_endings(text: str) -> tuple[str, dict[int, str]]:
    """Replace line endings with visible placeholders.

    A line feed becomes ``"␊\\n"`` and a carriage return becomes ``"␍"``.

    Returns:
        The substituted text and a map from each placeholder's offset in it
        to the line-ending character it represents.
    """
    parts: list[str] = []
    placeholders: dict[int, str] = {}
    offset = 0
    for char in text:
        if char == "\n":
            placeholders[offset] = "\n"
            parts.append(LF_PLACEHOLDER + "\n")
            offset += 2
        elif char == "\r":
            placeholders[offset] = "\r"
            parts.append(CR_PLACEHOLDER)
            offset += 1
        else:
            parts.append(char)
            offset += 1
    return "".join(parts), placeholders


def restore_line_endings(text: str, placeholders: Mapping[int, str], start: int = 0) -> str:
    """Undo :func:`substitute_line_endings` for a slice starting at ``start``."""
    restored: list[str] = []
    for index, char in enumerate(text, start=start):
        kind = placeholders.get(index)
        if kind == "\n":
            continue
        if kind == "\r":
            restored.append("\r")
        else:
            restored.append(char)
    return "".join(restored)


def annotate_segment(
    segment: DiffSegment,
    start: int,
    placeholders: Mapping[int, str],
    registry: Mapping[str, CharacterEntry] | None = None,
) -> OverlaySegment:
    """Split one diff segment into plain and marker pieces.

    Args:
        segment: Diff output for one pane.
        start: Offset of the segment within its pane's substituted text.
        placeholders: Placeholder offsets from :func:`substitute_line_endings`.
        registry: Character metadata (defaults to the built-in registry).

    Raises:
        OverlayIntegrityError: If the pieces do not rebuild the segment text.
    """
    table = REGISTRY if registry is None else registry
    pieces: list[OverlayPiece] = []
    plain: list[str] = []

    def flush() -> None:
        if plain:
            run = "".join(plain)
            pieces.append(OverlayPiece(text=run, source=run))
            plain.clear()

    for index, char in enumerate(segment.text, start=start):
        kind = placeholders.get(index)
        if kind == "\n":
            flush()
            pieces.append(OverlayPiece(text=char, source="", marker=LINE_FEED_MARKER))
        elif kind == "\r":
            flush()
            pieces.append(OverlayPiece(text=char, source="\r", marker=CARRIAGE_RETURN_MARKER))
        elif char in table and char not in SKIPPED_CHARS:
            flush()
            marker = marker_for_entry(entry_for(char, table))
            pieces.append(OverlayPiece(text=char, source=char, marker=marker))
        else:
            plain.append(char)
    flush()

    rebuilt = "".join(piece.text for piece in pieces)
    if rebuilt != segment.text:
        logger.warning("Segment failed to round-trip through annotation: %r", segment.text)
        raise OverlayIntegrityError(
            f"Annotated segment does not rebuild its text: {segment.text!r} != {rebuilt!r}"
        )
    return OverlaySegment(
        status=segment.status,
        side=segment.side,
        diff_text=segment.text,
        pieces=pieces,
    )


def _annotate_pane(
    segments: list[DiffSegment],
    raw: str,
    substituted: str,
    placeholders: Mapping[int, str],
    registry: Mapping[str, CharacterEntry] | None,
    side: str,
) -> list[OverlaySegment]:
    if substituted and not segments:
        logger.warning("Diff returned no %s segments for %d chars of input", side, len(raw))
        raise OverlayIntegrityError(f"Diff returned no {side} segments for non-empty input")

    annotated: list[OverlaySegment] = []
    offset = 0
    for segment in segments:
        annotated.append(annotate_segment(segment, offset, placeholders, registry))
        offset += len(segment.text)

    diff_text = "".join(segment.text for segment in segments)
    if diff_text != substituted:
        logger.warning("Diff %s pane does not cover its input", side)
        raise OverlayIntegrityError(f"Diff {side} segments do not reassemble the input text")
    source = "".join(segment.source for segment in annotated)
    if source != raw:
        logger.warning("Restored %s pane differs from the raw text", side)
        raise OverlayIntegrityError(f"Restored {side} text differs from the original")
    return annotated


def compose(
    old: str,
    new: str,
    registry: Mapping[str, CharacterEntry] | None = None,
    diff: DiffFunction | None = None,
    elide_unchanged: bool = False,
) -> OverlayResult:
    """Build the annotated diff of two raw texts.

    Args:
        old: Original text (left pane).
        new: Comparison text (right pane).
        registry: Character metadata (defaults to the built-in registry).
        diff: Word diff function ``(old, new, elide_unchanged) -> DiffResult``.
            It is always called without elision because placeholder offsets
            need the full alignment; elision is applied afterwards.
        elide_unchanged: Drop unchanged segments from the result.

    Returns:
        An :class:`OverlayResult` with annotated segments for both panes.

    Raises:
        OverlayIntegrityError: If the diff output cannot be mapped back onto
            the raw texts.

    Examples:
        >>> result = compose("a\\u00a0b", "a b")
        >>> [s.status for s in result.old]
        ['unchanged', 'removed', 'unchanged']
    """
    diff_fn = diff_words if diff is None else diff
    old_sub, old_placeholders = substitute_line_endings(old)
    new_sub, new_placeholders = substitute_line_endings(new)

    diff_result = diff_fn(old_sub, new_sub, False)
    old_segments = _annotate_pane(diff_result.old, old, old_sub, old_placeholders, registry, OLD)
    new_segments = _annotate_pane(diff_result.new, new, new_sub, new_placeholders, registry, NEW)

    if elide_unchanged:
        old_segments = [seg for seg in old_segments if seg.status != UNCHANGED]
        new_segments = [seg for seg in new_segments if seg.status != UNCHANGED]

    return OverlayResult(
        old=old_segments,
        new=new_segments,
        similarity=similarity(old, new),
        elided=elide_unchanged,
    )


def resolve_char_key(key: str) -> str:
    """Map a marker's ``data-char-key`` back to its character.

    Raises:
        ValueError: If ``key`` is not a valid hex code point.
    """
    try:
        code_point = int(key, 16)
    except ValueError:
        raise ValueError(f"Invalid character key: {key!r}") from None
    if not 0 <= code_point <= 0x10FFFF:
        raise ValueError(f"Character key out of range: {key!r}")
    return chr(code_point)
