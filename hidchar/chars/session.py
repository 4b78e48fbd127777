"""
Editing session state for the analyzer.

An :class:`EditorSession` owns everything that changes while a user works on
one text: the history ledger, the cursor position and the visibility flags.
The registry is shared and read-only. Every text change goes through
:meth:`EditorSession.commit`, so undo and redo see all edits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from hidchar.chars.history import HistoryLedger, HistoryStep
from hidchar.chars.mutations import (
    ReplaceResult,
    copy_marked,
    copy_plain,
    insert_at,
    replace_all,
    toggle_visibility,
)
from hidchar.chars.registry import REGISTRY, CharacterEntry, split_by_usage
from hidchar.chars.scanner import ALL_VISIBLE, ScanResult, VisibilityMap, scan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionStats:
    """Headline numbers for the current text."""

    characters: int
    special_total: int
    special_distinct: int


class EditorSession:
    """Single-user editing context for one text."""

    def __init__(
        self,
        text: str = "",
        registry: Mapping[str, CharacterEntry] | None = None,
    ) -> None:
        """Start a session.

        Args:
            text: Initial text. A non-empty value is committed on top of the
                empty starting snapshot, so it can be undone.
            registry: Character metadata (defaults to the built-in registry).
        """
        self.registry = REGISTRY if registry is None else registry
        self.history = HistoryLedger("")
        self.visibility: VisibilityMap = ALL_VISIBLE
        self._cursor = 0
        if text:
            self.commit(text, cursor=len(text))

    @property
    def text(self) -> str:
        return self.history.current

    @property
    def cursor(self) -> int:
        return self._cursor

    @cursor.setter
    def cursor(self, value: int) -> None:
        self._cursor = self.clamp(value)

    def clamp(self, offset: int) -> int:
        """Clamp an offset into ``[0, len(text)]``."""
        return max(0, min(offset, len(self.text)))

    def commit(self, text: str, cursor: int | None = None) -> None:
        """Record a new text value.

        Args:
            text: The edited text.
            cursor: New cursor position (clamped); unchanged if None.
        """
        self.history.commit(text)
        if cursor is not None:
            self._cursor = cursor
        self._cursor = self.clamp(self._cursor)

    def type_text(self, text: str, cursor: int | None = None) -> None:
        """Record a typed change coming from the editor widget."""
        if text == self.text:
            if cursor is not None:
                self.cursor = cursor
            return
        self.commit(text, cursor)

    def insert(self, char: str, offset: int | None = None) -> str:
        """Insert ``char`` at ``offset`` (default: the cursor) and commit.

        The offset is clamped against the current text, and the cursor moves
        to just after the inserted character.

        Returns:
            The new text.
        """
        position = self.clamp(self._cursor if offset is None else offset)
        new_text = insert_at(self.text, position, char)
        self.commit(new_text, cursor=position + len(char))
        return new_text

    def replace_all(self, target: str, replacement: str) -> ReplaceResult:
        """Replace every occurrence of ``target`` and commit if anything changed."""
        result = replace_all(self.text, target, replacement, self.registry)
        if result.count:
            self.commit(result.text)
        logger.debug("Replace %r -> %r: %d occurrences", target, replacement, result.count)
        return result

    def revert_to(self, index: int) -> str:
        """Restore snapshot ``index`` as a new edit.

        Raises:
            IndexError: If ``index`` is outside the history.
        """
        text = self.history.snapshot_at(index)
        self.commit(text, cursor=len(text))
        return text

    def clear(self) -> None:
        """Commit an empty text."""
        self.commit("", cursor=0)

    def undo(self) -> HistoryStep:
        step = self.history.undo()
        self._cursor = self.clamp(self._cursor)
        return step

    def redo(self) -> HistoryStep:
        step = self.history.redo()
        self._cursor = self.clamp(self._cursor)
        return step

    def toggle_visibility(self, char: str) -> bool:
        """Flip highlighting for ``char``; returns the new visibility."""
        self.visibility = toggle_visibility(self.visibility, char)
        return self.visibility.is_visible(char)

    def is_visible(self, char: str) -> bool:
        return self.visibility.is_visible(char)

    def scan(self) -> ScanResult:
        """Scan the current text with the session's visibility flags."""
        return scan(self.text, self.registry, self.visibility)

    def frequencies(self) -> dict[str, int]:
        return self.scan().frequencies

    def stats(self) -> SessionStats:
        frequencies = self.frequencies()
        return SessionStats(
            characters=len(self.text),
            special_total=sum(frequencies.values()),
            special_distinct=len(frequencies),
        )

    def entries_by_usage(self) -> tuple[list[CharacterEntry], list[CharacterEntry]]:
        """Return (used, additional) registry entries for the current text."""
        return split_by_usage(self.frequencies(), self.registry)

    def copy_plain(self) -> str:
        return copy_plain(self.text)

    def copy_marked(self) -> str:
        return copy_marked(self.text, self.registry)
