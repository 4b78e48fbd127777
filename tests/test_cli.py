"""Tests for the command line interface in hidchar/main.py."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import pytest

CLI_MODULE = "hidchar.main"

ZWSP = "\u200B"
NBSP = "\u00A0"


def run_cli(*args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    """Run the CLI module with given arguments."""
    env = dict(os.environ, PYTHONIOENCODING="utf-8")
    return subprocess.run(
        [sys.executable, "-m", CLI_MODULE, *args],
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
        env=env,
        cwd=Path(__file__).parent.parent,
    )


class TestCLIBasic:
    """Basic CLI functionality tests."""

    def test_help_flag(self):
        """--help should show usage."""
        result = run_cli("--help")
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()

    def test_no_command(self):
        """No subcommand prints help and fails."""
        result = run_cli()
        assert result.returncode == 1
        assert "usage" in result.stdout.lower()

    def test_file_not_found_error(self):
        """Non-existent file should error with message."""
        result = run_cli("scan", "/nonexistent/file.txt")
        assert result.returncode == 1
        assert "not found" in result.stderr.lower()


class TestCharsAndInfo:
    """Tests for the chars and info commands."""

    def test_chars_lists_registry(self):
        """Every registry character is listed."""
        from hidchar.chars import REGISTRY

        result = run_cli("chars")
        assert result.returncode == 0
        assert f"{len(REGISTRY)} characters" in result.stdout
        assert "U+200B" in result.stdout

    def test_info(self):
        """Details include the code and description."""
        result = run_cli("info", "U+200B")
        assert result.returncode == 0
        assert "U+200B" in result.stdout
        assert "Zero-width Space" in result.stdout

    def test_info_unknown_character(self):
        """Characters outside the registry get a fallback and a note."""
        result = run_cli("info", "0x41")
        assert result.returncode == 0
        assert "Special Character" in result.stdout
        assert "not in the registry" in result.stderr

    def test_info_invalid_reference(self):
        """Unparseable references fail."""
        result = run_cli("info", "U+ZZZZ")
        assert result.returncode == 1
        assert "Error" in result.stderr


class TestScanAndMark:
    """Tests for the scan and mark commands."""

    def test_scan_counts(self, write_file):
        """Scan reports totals and per-character counts."""
        path = write_file("in.txt", f"a{ZWSP}b{ZWSP}c\td")
        result = run_cli("scan", str(path))
        assert result.returncode == 0
        assert "Special characters:  3" in result.stdout
        assert "Distinct special:    2" in result.stdout
        assert "Zero-width Space" in result.stdout

    def test_scan_positions(self, write_file):
        """--positions lists offsets."""
        path = write_file("in.txt", f"ab{ZWSP}")
        result = run_cli("scan", str(path), "--positions")
        assert "offset        2" in result.stdout

    def test_scan_fail_on_found(self, write_file):
        """--fail-on-found exits 2 when anything is found."""
        found = write_file("found.txt", f"x{NBSP}y")
        clean = write_file("clean.txt", "xy")
        assert run_cli("scan", str(found), "--fail-on-found").returncode == 2
        assert run_cli("scan", str(clean), "--fail-on-found").returncode == 0

    def test_scan_stdin(self):
        """'-' reads standard input."""
        result = run_cli("scan", "-", stdin=f"a{ZWSP}b")
        assert result.returncode == 0
        assert "Special characters:  1" in result.stdout

    def test_mark(self, write_file):
        """Mark prints bracketed glyphs."""
        path = write_file("in.txt", "a\tb")
        result = run_cli("mark", str(path), "--no-newline")
        assert result.returncode == 0
        assert result.stdout == "a[→]b"


class TestReplace:
    """Tests for the replace command."""

    def test_replace_to_output_file(self, write_file, tmp_path):
        """Replacement writes the new text and reports the count."""
        path = write_file("in.txt", "A\tB\tC")
        output = tmp_path / "out" / "result.txt"
        result = run_cli("replace", str(path), "U+0009", "-o", str(output))
        assert result.returncode == 0
        assert "Replaced 2 occurrences of Tab (U+0009)" in result.stderr
        assert output.read_text(encoding="utf-8") == "ABC"

    def test_replace_with_char(self, write_file):
        """--with-char takes a code point reference."""
        path = write_file("in.txt", f"a{NBSP}b")
        result = run_cli("replace", str(path), "U+00A0", "--with-char", "U+0020")
        assert result.returncode == 0
        assert result.stdout == "a b"

    def test_replace_keeps_carriage_returns(self, write_file, tmp_path):
        """Line endings pass through unchanged."""
        path = write_file("in.txt", f"a{ZWSP}\r\nb")
        output = tmp_path / "result.txt"
        run_cli("replace", str(path), "200b", "-o", str(output))
        with open(output, encoding="utf-8", newline="") as f:
            assert f.read() == "a\r\nb"


class TestCompare:
    """Tests for the compare command."""

    @pytest.fixture
    def pair(self, write_file):
        old = write_file("old.txt", "line one\nline two")
        new = write_file("new.txt", "line one\nline three")
        return old, new

    def test_compare_output(self, pair):
        """Terminal output shows similarity and marked changes."""
        old, new = pair
        result = run_cli("compare", str(old), str(new))
        assert result.returncode == 0
        assert "Similarity:" in result.stdout
        assert "[-two-]" in result.stdout
        assert "{+three+}" in result.stdout
        assert "[↵]" in result.stdout

    def test_compare_diff_only(self, pair):
        """--diff-only hides unchanged text."""
        old, new = pair
        result = run_cli("compare", str(old), str(new), "--diff-only")
        assert "line one" not in result.stdout

    def test_compare_html(self, pair, tmp_path):
        """--html writes a report with sanitized marker spans."""
        old, new = pair
        report = tmp_path / "report.html"
        result = run_cli("compare", str(old), str(new), "--html", str(report))
        assert result.returncode == 0
        content = report.read_text(encoding="utf-8")
        assert "<del>two</del>" in content
        assert "<ins>three</ins>" in content
        assert 'class="special-char-marker"' in content
