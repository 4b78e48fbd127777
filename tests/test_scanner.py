"""Tests for the scanner in hidchar/chars/scanner.py."""

from __future__ import annotations

from collections import Counter

import pytest

from hidchar.chars.registry import FALLBACK_DESCRIPTION, REGISTRY
from hidchar.chars.scanner import (
    ALL_VISIBLE,
    AnnotatedToken,
    TextRun,
    VisibilityMap,
    count_notable,
    scan,
)

ZWSP = "\u200B"
NBSP = "\u00A0"
ZWJ = "\u200D"


class TestScanSegments:
    """Tests for how scan() partitions text."""

    def test_zero_width_space_scenario(self, zwsp_text):
        """One token between two runs, with registry metadata."""
        result = scan(zwsp_text)

        assert len(result.segments) == 3
        first, token, last = result.segments
        assert first == TextRun("Hello")
        assert isinstance(token, AnnotatedToken)
        assert token.char == ZWSP
        assert token.entry.name == REGISTRY[ZWSP].name
        assert token.entry.code == "U+200B"
        assert token.visible is True
        assert token.offset == 5
        assert last == TextRun("World")
        assert result.frequencies == {ZWSP: 1}

    def test_no_notable_characters(self):
        """Plain text is exactly one run."""
        result = scan("just plain text")
        assert result.segments == [TextRun("just plain text")]
        assert result.frequencies == {}

    def test_empty_text(self):
        """Empty input yields no segments."""
        result = scan("")
        assert result.segments == []
        assert result.frequencies == {}
        assert result.source == ""

    def test_leading_token_has_no_empty_run(self):
        """A notable character at position 0 is the first segment."""
        result = scan(f"{ZWSP}abc")
        assert isinstance(result.segments[0], AnnotatedToken)
        assert result.segments[1] == TextRun("abc")

    def test_adjacent_tokens_have_no_empty_run(self):
        """Two notable characters in a row produce two consecutive tokens."""
        result = scan(f"a{ZWSP}{NBSP}b")
        kinds = [type(seg).__name__ for seg in result.segments]
        assert kinds == ["TextRun", "AnnotatedToken", "AnnotatedToken", "TextRun"]
        assert all(seg.source for seg in result.segments)

    def test_trailing_token(self):
        """A notable character at the end closes the segment list."""
        result = scan("abc\n")
        assert result.segments[-1].char == "\n"  # type: ignore[union-attr]

    def test_astral_characters_are_not_split(self):
        """Emoji outside the registry stay whole inside text runs."""
        text = f"\U0001F468{ZWJ}\U0001F469"
        result = scan(text)
        assert result.segments[0] == TextRun("\U0001F468")
        assert result.segments[1].char == ZWJ  # type: ignore[union-attr]
        assert result.segments[2] == TextRun("\U0001F469")


class TestScanInvariants:
    """Round-trip and frequency invariants."""

    def test_round_trip(self, mixed_text):
        """Concatenating segment sources rebuilds the input."""
        assert scan(mixed_text).source == mixed_text

    def test_frequencies_match_tokens(self, mixed_text):
        """Frequency counts equal the number of tokens per character."""
        result = scan(mixed_text)
        token_counts = Counter(token.char for token in result.tokens)
        assert result.frequencies == dict(token_counts)
        assert sum(result.frequencies.values()) == len(result.tokens)

    def test_frequencies_only_positive(self, mixed_text):
        """Characters that do not occur are absent, never zero."""
        result = scan(mixed_text)
        assert all(count > 0 for count in result.frequencies.values())
        assert result.distinct_count == len(result.frequencies)

    def test_count_notable_matches_scan(self, mixed_text):
        """count_notable() agrees with the scan frequencies."""
        assert count_notable(mixed_text) == scan(mixed_text).frequencies

    def test_offsets_point_at_characters(self, mixed_text):
        """Token offsets index the character in the original text."""
        for token in scan(mixed_text).tokens:
            assert mixed_text[token.offset] == token.char


class TestScanVisibility:
    """Tests for visibility flags and rendering."""

    def test_hidden_tokens_render_raw(self):
        """Hidden characters are emitted unchanged, but still counted."""
        result = scan("a\tb", visibility={"\t": False})
        token = result.tokens[0]
        assert token.visible is False
        assert result.rendered == "a\tb"
        assert result.frequencies == {"\t": 1}

    def test_visible_tokens_render_glyph(self):
        """Visible characters render as their glyph."""
        result = scan("a\tb")
        assert result.rendered == f"a{REGISTRY[chr(9)].glyph}b"

    def test_visibility_map_accepted(self):
        """A VisibilityMap works the same as a flag dict."""
        hidden = VisibilityMap({ZWSP})
        assert scan(f"x{ZWSP}", visibility=hidden).tokens[0].visible is False


class TestScanRegistry:
    """Tests for custom registries and notable sets."""

    def test_notable_outside_registry_gets_fallback(self):
        """Extra notable characters receive the fallback description."""
        result = scan("a\u3000b", notable={"\u3000"})
        token = result.tokens[0]
        assert token.entry.name == FALLBACK_DESCRIPTION
        assert token.entry.code == "U+3000"

    def test_custom_registry(self):
        """Only the custom registry's characters are annotated."""
        custom = {ZWSP: REGISTRY[ZWSP]}
        result = scan(f"a\t{ZWSP}", registry=custom)
        assert [t.char for t in result.tokens] == [ZWSP]


class TestVisibilityMap:
    """Tests for VisibilityMap equality and toggling."""

    def test_default_visible(self):
        """Absent characters are visible."""
        assert ALL_VISIBLE.is_visible(ZWSP)

    def test_toggle_twice_restores(self):
        """Toggling twice gives an equal map."""
        assert ALL_VISIBLE.toggled(ZWSP).toggled(ZWSP) == ALL_VISIBLE

    def test_explicit_true_equals_absent(self):
        """An explicit visible flag equals no flag."""
        assert VisibilityMap.from_flags({ZWSP: True}) == ALL_VISIBLE

    def test_to_flags(self):
        """Only hidden characters appear in the flag dict."""
        assert VisibilityMap({"\t"}).to_flags() == {"\t": False}

    @pytest.mark.parametrize("char", ["\t", ZWSP, NBSP])
    def test_hashable(self, char):
        """Equal maps hash equally."""
        assert hash(VisibilityMap({char})) == hash(ALL_VISIBLE.toggled(char))
