"""
Scanner that partitions text into plain runs and annotated characters.

The scan walks the string once by code point. Every character found in the
registry closes the current plain run and becomes an annotated token; all
other characters accumulate into runs. Concatenating the segments' source
characters in order reproduces the input exactly.

Visibility only affects how tokens are rendered, never the partition or the
frequency table.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Union

from hidchar.chars.registry import REGISTRY, CharacterEntry, entry_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextRun:
    """A maximal, non-empty run of ordinary characters."""

    text: str

    @property
    def source(self) -> str:
        return self.text


@dataclass(frozen=True)
class AnnotatedToken:
    """One notable character with its metadata and visibility flag.

    Attributes:
        char: The notable character.
        entry: Registry entry, or a synthesized fallback entry.
        visible: Whether the renderer should show the annotation.
        offset: Code point offset of the character in the scanned text.
    """

    char: str
    entry: CharacterEntry
    visible: bool = True
    offset: int = 0

    @property
    def source(self) -> str:
        return self.char

    @property
    def rendered(self) -> str:
        """Return the glyph when visible, otherwise the raw character."""
        return self.entry.glyph if self.visible else self.char


Segment = Union[TextRun, AnnotatedToken]


class VisibilityMap:
    """Immutable per-character visibility flags.

    Characters are visible unless explicitly hidden. Two maps are equal when
    they hide the same characters, so an explicit ``True`` flag and an absent
    key are the same state.
    """

    __slots__ = ("_hidden",)

    def __init__(self, hidden: Iterable[str] = ()) -> None:
        self._hidden = frozenset(hidden)

    @classmethod
    def from_flags(cls, flags: Mapping[str, bool]) -> VisibilityMap:
        """Build a map from a ``{char: visible}`` mapping."""
        return cls(char for char, visible in flags.items() if not visible)

    @property
    def hidden(self) -> frozenset[str]:
        return self._hidden

    def is_visible(self, char: str) -> bool:
        return char not in self._hidden

    def toggled(self, char: str) -> VisibilityMap:
        """Return a new map with the flag for ``char`` flipped."""
        if char in self._hidden:
            return VisibilityMap(self._hidden - {char})
        return VisibilityMap(self._hidden | {char})

    def to_flags(self) -> dict[str, bool]:
        return {char: False for char in sorted(self._hidden)}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VisibilityMap):
            return NotImplemented
        return self._hidden == other._hidden

    def __hash__(self) -> int:
        return hash(self._hidden)

    def __repr__(self) -> str:
        hidden = ", ".join(f"U+{ord(char):04X}" for char in sorted(self._hidden))
        return f"VisibilityMap(hidden=[{hidden}])"


ALL_VISIBLE = VisibilityMap()


@dataclass(frozen=True)
class ScanResult:
    """Output of :func:`scan`: ordered segments plus occurrence counts."""

    segments: list[Segment] = field(default_factory=list)
    frequencies: dict[str, int] = field(default_factory=dict)

    @property
    def tokens(self) -> list[AnnotatedToken]:
        return [seg for seg in self.segments if isinstance(seg, AnnotatedToken)]

    @property
    def source(self) -> str:
        """Reassemble the scanned text from the segments."""
        return "".join(seg.source for seg in self.segments)

    @property
    def rendered(self) -> str:
        """Return the text with visible annotations replaced by their glyphs."""
        parts = []
        for seg in self.segments:
            parts.append(seg.rendered if isinstance(seg, AnnotatedToken) else seg.text)
        return "".join(parts)

    @property
    def distinct_count(self) -> int:
        return len(self.frequencies)


def count_notable(
    text: str,
    registry: Mapping[str, CharacterEntry] | None = None,
) -> dict[str, int]:
    """Count occurrences of registry characters in ``text``.

    Only characters present in the registry appear in the result.
    """
    table = REGISTRY if registry is None else registry
    return dict(Counter(char for char in text if char in table))


def scan(
    text: str,
    registry: Mapping[str, CharacterEntry] | None = None,
    visibility: VisibilityMap | Mapping[str, bool] | None = None,
    notable: Iterable[str] | None = None,
) -> ScanResult:
    """Partition ``text`` into text runs and annotated tokens.

    Args:
        text: The text to scan.
        registry: Character metadata (defaults to the built-in registry).
        visibility: Visibility flags; absent characters are visible.
        notable: Characters to annotate. Defaults to the registry's keys.
            Characters in this set but missing from the registry receive a
            synthesized fallback entry.

    Returns:
        A :class:`ScanResult`. Empty input yields no segments.

    Examples:
        >>> result = scan("Hello\\u200bWorld")
        >>> [type(s).__name__ for s in result.segments]
        ['TextRun', 'AnnotatedToken', 'TextRun']
        >>> result.frequencies
        {'\\u200b': 1}
    """
    table = REGISTRY if registry is None else registry
    matched = frozenset(table) if notable is None else frozenset(notable)
    if visibility is None:
        flags = ALL_VISIBLE
    elif isinstance(visibility, VisibilityMap):
        flags = visibility
    else:
        flags = VisibilityMap.from_flags(visibility)

    segments: list[Segment] = []
    run: list[str] = []

    # Python strings index by code point, so astral characters are never split
    for offset, char in enumerate(text):
        if char not in matched:
            run.append(char)
            continue
        if run:
            segments.append(TextRun("".join(run)))
            run = []
        segments.append(
            AnnotatedToken(
                char=char,
                entry=entry_for(char, table),
                visible=flags.is_visible(char),
                offset=offset,
            )
        )
    if run:
        segments.append(TextRun("".join(run)))

    frequencies = dict(Counter(seg.char for seg in segments if isinstance(seg, AnnotatedToken)))
    logger.debug(
        "Scanned %d chars into %d segments (%d distinct notable)",
        len(text),
        len(segments),
        len(frequencies),
    )
    return ScanResult(segments=segments, frequencies=frequencies)
