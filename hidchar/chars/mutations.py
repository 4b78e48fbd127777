"""
Pure text and visibility transformations.

These functions never touch session state; :class:`hidchar.chars.session.EditorSession`
applies them and records the results in its history.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from hidchar.chars.registry import REGISTRY, CharacterEntry, iter_entries
from hidchar.chars.scanner import VisibilityMap, count_notable

# Labelled replacement choices offered next to free-form input
REPLACEMENT_PRESETS: tuple[tuple[str, str], ...] = (
    ("Regular Space", " "),
    ("Delete (empty)", ""),
)


@dataclass(frozen=True)
class ReplaceResult:
    """Outcome of :func:`replace_all`."""

    text: str
    count: int

    @property
    def message(self) -> str:
        noun = "occurrence" if self.count == 1 else "occurrences"
        return f"Replaced {self.count} {noun}"


def insert_at(text: str, offset: int, char: str) -> str:
    """Splice ``char`` into ``text`` at ``offset``.

    Args:
        text: The current text.
        offset: Insertion point, ``0 <= offset <= len(text)``.
        char: The character (or string) to insert.

    Raises:
        IndexError: If ``offset`` is outside the text. Callers clamp first.
    """
    if not 0 <= offset <= len(text):
        raise IndexError(f"Insert offset {offset} out of range (0-{len(text)})")
    return text[:offset] + char + text[offset:]


def replace_all(
    text: str,
    target: str,
    replacement: str,
    registry: Mapping[str, CharacterEntry] | None = None,
) -> ReplaceResult:
    """Replace every literal occurrence of ``target``.

    The count comes from the frequency table of the text before replacing,
    falling back to a direct count for characters outside the registry.
    Replacement is a single pass, so a replacement containing ``target``
    does not recurse.

    Examples:
        >>> replace_all("A\\tB\\tC", "\\t", "")
        ReplaceResult(text='ABC', count=2)
    """
    if not target:
        raise ValueError("Replacement target must not be empty")
    counts = count_notable(text, registry)
    count = counts[target] if target in counts else text.count(target)
    return ReplaceResult(text=text.replace(target, replacement), count=count)


def toggle_visibility(visibility: VisibilityMap | Mapping[str, bool], char: str) -> VisibilityMap:
    """Flip the visibility flag for ``char``; absent flags count as visible."""
    if not isinstance(visibility, VisibilityMap):
        visibility = VisibilityMap.from_flags(visibility)
    return visibility.toggled(char)


def copy_plain(text: str) -> str:
    """Return the literal text for the clipboard."""
    return text


def copy_marked(text: str, registry: Mapping[str, CharacterEntry] | None = None) -> str:
    """Return ``text`` with every notable character replaced by ``[glyph]``.

    Examples:
        >>> copy_marked("a\\tb")
        'a[→]b'
    """
    table = REGISTRY if registry is None else registry
    return "".join(f"[{table[char].glyph}]" if char in table else char for char in text)


def replacement_choices(
    registry: Mapping[str, CharacterEntry] | None = None,
) -> list[tuple[str, str]]:
    """Return (label, replacement) pairs: presets, then every registry character."""
    choices = list(REPLACEMENT_PRESETS)
    for entry in iter_entries(registry):
        choices.append((f"{entry.glyph} - {entry.name}", entry.char))
    return choices
