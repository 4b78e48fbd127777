"""Tests for the word diff in hidchar/chars/word_diff.py."""

from __future__ import annotations

from hidchar.chars.word_diff import (
    ADDED,
    NEW,
    OLD,
    REMOVED,
    UNCHANGED,
    DiffSegment,
    diff_words,
    get_diff_summary,
    tokenize,
)


class TestTokenize:
    """Tests for tokenize()."""

    def test_words_spaces_symbols(self):
        """Words, whitespace runs and symbols are separate tokens."""
        assert tokenize("Hi,  there!") == ["Hi", ",", "  ", "there", "!"]

    def test_concatenates_back(self):
        """Tokens always rebuild the input."""
        text = "a\u200B b\t\u2028c\u00A0d"
        assert "".join(tokenize(text)) == text

    def test_zero_width_space_is_its_own_token(self):
        """ZWSP is neither a word character nor whitespace."""
        assert tokenize("a\u200Bb") == ["a", "\u200B", "b"]


class TestDiffWords:
    """Tests for diff_words()."""

    def test_identical_texts(self):
        """No differences yields one unchanged segment per pane."""
        result = diff_words("same text", "same text")
        assert result.old == [DiffSegment("same text", UNCHANGED, OLD)]
        assert result.new == [DiffSegment("same text", UNCHANGED, NEW)]

    def test_replaced_word(self):
        """A changed word is removed on the left and added on the right."""
        result = diff_words("one two", "one three")
        assert [(s.text, s.status) for s in result.old] == [("one ", UNCHANGED), ("two", REMOVED)]
        assert [(s.text, s.status) for s in result.new] == [("one ", UNCHANGED), ("three", ADDED)]

    def test_panes_rebuild_inputs(self):
        """Without elision each pane concatenates to its input."""
        old, new = "The quick brown fox", "The slow brown dog jumps"
        result = diff_words(old, new)
        assert "".join(s.text for s in result.old) == old
        assert "".join(s.text for s in result.new) == new

    def test_added_only(self):
        """Pure insertions only appear in the new pane."""
        result = diff_words("a", "a b")
        assert all(s.status != REMOVED for s in result.old)
        assert result.new[-1] == DiffSegment(" b", ADDED, NEW)

    def test_elide_unchanged(self):
        """Elision keeps only differences."""
        result = diff_words("one two", "one three", elide_unchanged=True)
        assert result.elided is True
        assert [s.text for s in result.old] == ["two"]
        assert [s.text for s in result.new] == ["three"]

    def test_empty_inputs(self):
        """Empty texts produce no segments."""
        result = diff_words("", "")
        assert result.old == []
        assert result.new == []


class TestDiffSummary:
    """Tests for get_diff_summary()."""

    def test_summary_counts(self):
        """Unchanged segments count once, changes per pane."""
        summary = get_diff_summary(diff_words("one two", "one three"))
        assert summary == {UNCHANGED: 1, REMOVED: 1, ADDED: 1}
