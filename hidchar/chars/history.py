"""
Linear edit history over full-text snapshots.

The ledger keeps every committed text and a cursor pointing at the one on
display. Committing after an undo discards the snapshots past the cursor;
undo and redo only move the cursor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

NOTHING_TO_UNDO = "Nothing to undo"
NOTHING_TO_REDO = "Nothing to redo"


@dataclass(frozen=True)
class HistoryStep:
    """Result of an undo or redo request.

    Attributes:
        moved: False when the cursor was already at the boundary.
        text: The snapshot at the cursor after the request.
        message: Reason for a no-op, empty when the cursor moved.
    """

    moved: bool
    text: str
    message: str = ""


class HistoryLedger:
    """Append-only snapshot list with a movable cursor.

    Invariant: ``0 <= cursor < len(snapshots)`` and the snapshot at the
    cursor is the current text.
    """

    def __init__(self, initial: str = "") -> None:
        self._snapshots: list[str] = [initial]
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def snapshots(self) -> tuple[str, ...]:
        return tuple(self._snapshots)

    @property
    def current(self) -> str:
        return self._snapshots[self._cursor]

    @property
    def last_index(self) -> int:
        return len(self._snapshots) - 1

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < self.last_index

    def __len__(self) -> int:
        return len(self._snapshots)

    def commit(self, text: str) -> int:
        """Record ``text`` as the newest snapshot.

        Snapshots after the cursor are dropped before appending.

        Returns:
            The new cursor index.
        """
        dropped = self.last_index - self._cursor
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(text)
        self._cursor = self.last_index
        logger.debug(
            "Committed snapshot %d (%d chars, %d redo entries dropped)",
            self._cursor,
            len(text),
            dropped,
        )
        return self._cursor

    def undo(self) -> HistoryStep:
        """Move the cursor back one snapshot if possible."""
        if not self.can_undo:
            return HistoryStep(moved=False, text=self.current, message=NOTHING_TO_UNDO)
        self._cursor -= 1
        return HistoryStep(moved=True, text=self.current)

    def redo(self) -> HistoryStep:
        """Move the cursor forward one snapshot if possible."""
        if not self.can_redo:
            return HistoryStep(moved=False, text=self.current, message=NOTHING_TO_REDO)
        self._cursor += 1
        return HistoryStep(moved=True, text=self.current)

    def snapshot_at(self, index: int) -> str:
        """Return the snapshot at ``index``.

        Raises:
            IndexError: If ``index`` is outside the ledger.
        """
        if not 0 <= index <= self.last_index:
            raise IndexError(f"Snapshot index {index} out of range (0-{self.last_index})")
        return self._snapshots[index]

    def __repr__(self) -> str:
        return f"HistoryLedger(cursor={self._cursor}, snapshots={len(self._snapshots)})"
