"""
Word-level diff producing aligned old/new segments.

This is the sequence-diff collaborator the overlay compositor consumes. Both
texts are split into word, whitespace and single-symbol tokens, aligned with
:class:`difflib.SequenceMatcher`, and emitted as status-tagged segments per
pane.

Diff Types:
    - unchanged: Text present in both panes
    - removed: Text only in the old pane
    - added: Text only in the new pane
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from difflib import SequenceMatcher

logger = logging.getLogger(__name__)

UNCHANGED = "unchanged"
ADDED = "added"
REMOVED = "removed"
DIFF_STATUSES = (UNCHANGED, REMOVED, ADDED)

OLD = "old"
NEW = "new"

# Words, whitespace runs, and any other character on its own
TOKEN_RE = re.compile(r"\w+|\s+|[^\w\s]")


@dataclass(frozen=True)
class DiffSegment:
    """One aligned chunk of diff output.

    Attributes:
        text: The chunk's text.
        status: "added", "removed" or "unchanged".
        side: "old" or "new".
    """

    text: str
    status: str
    side: str


@dataclass
class DiffResult:
    """Segments for each pane, in text order."""

    old: list[DiffSegment] = field(default_factory=list)
    new: list[DiffSegment] = field(default_factory=list)
    elided: bool = False


def tokenize(text: str) -> list[str]:
    """Split text into word, whitespace and symbol tokens.

    The tokens concatenate back to ``text``.
    """
    return TOKEN_RE.findall(text)


def _append(segments: list[DiffSegment], text: str, status: str, side: str) -> None:
    """Append ``text``, merging with the previous segment when statuses match."""
    if not text:
        return
    if segments and segments[-1].status == status:
        last = segments[-1]
        segments[-1] = DiffSegment(last.text + text, status, side)
    else:
        segments.append(DiffSegment(text, status, side))


def diff_words(old: str, new: str, elide_unchanged: bool = False) -> DiffResult:
    """Compute a word-level diff of two texts.

    Args:
        old: The original text (left pane).
        new: The comparison text (right pane).
        elide_unchanged: Drop unchanged segments, keeping only differences.

    Returns:
        A :class:`DiffResult`. Without elision, the old segments concatenate
        to ``old`` and the new segments concatenate to ``new``.
    """
    old_tokens = tokenize(old)
    new_tokens = tokenize(new)
    matcher = SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)

    result = DiffResult(elided=elide_unchanged)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        old_text = "".join(old_tokens[i1:i2])
        new_text = "".join(new_tokens[j1:j2])
        if tag == "equal":
            if elide_unchanged:
                continue
            _append(result.old, old_text, UNCHANGED, OLD)
            _append(result.new, new_text, UNCHANGED, NEW)
        elif tag == "delete":
            _append(result.old, old_text, REMOVED, OLD)
        elif tag == "insert":
            _append(result.new, new_text, ADDED, NEW)
        else:  # replace
            _append(result.old, old_text, REMOVED, OLD)
            _append(result.new, new_text, ADDED, NEW)

    logger.debug(
        "Word diff: %d/%d tokens -> %d old, %d new segments",
        len(old_tokens),
        len(new_tokens),
        len(result.old),
        len(result.new),
    )
    return result


def get_diff_summary(result: DiffResult) -> dict[str, int]:
    """Count segments by diff status across both panes.

    Unchanged segments appear in both panes and are counted once.

    Examples:
        >>> get_diff_summary(diff_words("a b", "a c"))
        {'unchanged': 1, 'removed': 1, 'added': 1}
    """
    summary = {status: 0 for status in DIFF_STATUSES}
    for segment in result.old:
        summary[segment.status] += 1
    for segment in result.new:
        if segment.status != UNCHANGED:
            summary[segment.status] += 1
    return summary
