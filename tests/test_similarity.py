"""Tests for hidchar/chars/similarity.py."""

from __future__ import annotations

import pytest

from hidchar.chars.similarity import format_similarity, levenshtein, similarity


class TestLevenshtein:
    """Tests for levenshtein()."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("", "", 0),
            ("abc", "", 3),
            ("", "abc", 3),
            ("kitten", "sitting", 3),
            ("flaw", "lawn", 2),
            ("same", "same", 0),
            ("a\u200Bb", "ab", 1),
        ],
    )
    def test_distance(self, a, b, expected):
        """Known distances."""
        assert levenshtein(a, b) == expected

    def test_symmetric(self):
        """Distance does not depend on argument order."""
        assert levenshtein("hello world", "yellow word") == levenshtein("yellow word", "hello world")


class TestSimilarity:
    """Tests for similarity() and format_similarity()."""

    def test_both_empty(self):
        """Two empty strings are identical."""
        assert similarity("", "") == 100.0

    def test_identical(self):
        """Identical strings score 100."""
        assert similarity("abc", "abc") == 100.0

    def test_completely_different(self):
        """One empty string scores 0."""
        assert similarity("abc", "") == 0.0

    def test_rounded_to_two_decimals(self):
        """Scores are rounded to two decimals."""
        assert similarity("abc", "abd") == 66.67

    def test_in_range(self):
        """Scores stay within [0, 100]."""
        score = similarity("line one\nline two", "line one\nline three")
        assert 0.0 <= score <= 100.0

    def test_invisible_difference_lowers_score(self):
        """A lone zero-width space is a real difference."""
        assert similarity("Hello\u200BWorld", "HelloWorld") < 100.0

    def test_format(self):
        """Scores display with two decimals and a percent sign."""
        assert format_similarity(66.666) == "66.67%"
        assert format_similarity(100.0) == "100.00%"

    @pytest.mark.parametrize(
        "a, b",
        [
            ("kitten", "sitting"),
            ("short", "a much longer string"),
            ("", "abc"),
            ("line one\nline two", "line one\nline three"),
            ("Hello\u200BWorld", "HelloWorld"),
        ],
    )
    def test_symmetric(self, a, b):
        """The score does not depend on argument order."""
        assert similarity(a, b) == similarity(b, a)
