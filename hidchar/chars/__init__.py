"""
Core text annotation and diff-overlay engine.

This package locates notable Unicode characters (control characters, exotic
spaces, joiners, bidirectional controls) in text, keeps an undoable edit
history, and annotates word diffs so those characters stay visible.

Usage:
    from hidchar.chars import scan, compose

    result = scan("Hello\\u200bWorld")
    print(result.frequencies)           # {'\\u200b': 1}

    overlay = compose("line one\\nline two", "line one\\nline three")
    print(overlay.similarity)
    print(overlay.markup("new"))
"""

from hidchar.chars.history import HistoryLedger, HistoryStep
from hidchar.chars.mutations import (
    REPLACEMENT_PRESETS,
    ReplaceResult,
    copy_marked,
    copy_plain,
    insert_at,
    replace_all,
    replacement_choices,
    toggle_visibility,
)
from hidchar.chars.overlay import (
    OverlayIntegrityError,
    OverlayResult,
    OverlaySegment,
    compose,
    resolve_char_key,
)
from hidchar.chars.registry import (
    REGISTRY,
    CharacterEntry,
    color_for,
    entry_for,
    format_code_point,
    lookup,
    parse_code_point,
)
from hidchar.chars.sanitizer import sanitize
from hidchar.chars.scanner import (
    AnnotatedToken,
    ScanResult,
    TextRun,
    VisibilityMap,
    count_notable,
    scan,
)
from hidchar.chars.session import EditorSession
from hidchar.chars.similarity import levenshtein, similarity
from hidchar.chars.word_diff import DiffResult, DiffSegment, diff_words

__all__ = [
    # Registry
    "REGISTRY",
    "CharacterEntry",
    "lookup",
    "entry_for",
    "format_code_point",
    "parse_code_point",
    "color_for",
    # Scanner
    "scan",
    "count_notable",
    "ScanResult",
    "TextRun",
    "AnnotatedToken",
    "VisibilityMap",
    # History
    "HistoryLedger",
    "HistoryStep",
    # Similarity
    "levenshtein",
    "similarity",
    # Diff and overlay
    "diff_words",
    "DiffResult",
    "DiffSegment",
    "compose",
    "OverlayResult",
    "OverlaySegment",
    "OverlayIntegrityError",
    "resolve_char_key",
    "sanitize",
    # Mutations
    "insert_at",
    "replace_all",
    "toggle_visibility",
    "copy_plain",
    "copy_marked",
    "replacement_choices",
    "ReplaceResult",
    "REPLACEMENT_PRESETS",
    # Session
    "EditorSession",
]
