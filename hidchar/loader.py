"""
Text file loading for the CLI and the TUI.

Files are read and written with ``newline=""`` so carriage returns and
mixed line endings reach the scanner exactly as they are stored.
"""

from __future__ import annotations

import logging
import os
import sys

logger = logging.getLogger(__name__)

STDIN_PATH = "-"


def read_text(path: str, encoding: str = "utf-8") -> str:
    """Read a file (or stdin for "-") without translating line endings.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        UnicodeDecodeError: If the content is not valid in ``encoding``.
    """
    if path == STDIN_PATH:
        with open(sys.stdin.fileno(), "r", encoding=encoding, newline="", closefd=False) as f:
            text = f.read()
    else:
        with open(path, "r", encoding=encoding, newline="") as f:
            text = f.read()
    logger.debug("Read %d characters from %s", len(text), path)
    return text


def write_text(path: str, text: str, encoding: str = "utf-8") -> None:
    """Write ``text`` verbatim, creating parent directories as needed."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding=encoding, newline="") as f:
        f.write(text)
    logger.debug("Wrote %d characters to %s", len(text), path)


def display_name(path: str | None) -> str:
    """Short label for a path in titles and headers."""
    if not path:
        return "untitled"
    if path == STDIN_PATH:
        return "stdin"
    return os.path.basename(path)
