"""Pytest configuration and shared fixtures for hidchar tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from hidchar.chars import EditorSession

ZWSP = "\u200B"
NBSP = "\u00A0"
ZWJ = "\u200D"
RLM = "\u200F"
LRI = "\u2066"
PDI = "\u2069"
BOM = "\uFEFF"


@pytest.fixture
def zwsp_text() -> str:
    """Return a short text with one zero-width space."""
    return f"Hello{ZWSP}World"


@pytest.fixture
def mixed_text() -> str:
    """Return a text with several kinds of notable characters."""
    return f"{BOM}Price:{NBSP}$5\tQty:\t2\r\nتماس{RLM} 123\nsee{ZWSP}more"


@pytest.fixture
def session() -> EditorSession:
    """Return a fresh, empty editing session."""
    return EditorSession()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes text verbatim (no newline translation)."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        return path

    return _write

