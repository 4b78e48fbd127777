"""Tests for the diff overlay compositor in hidchar/chars/overlay.py."""

from __future__ import annotations

import pytest

from hidchar.chars.overlay import (
    CARRIAGE_RETURN_MARKER,
    CR_PLACEHOLDER,
    LF_PLACEHOLDER,
    LINE_FEED_MARKER,
    MARKER_CLASS,
    TOOLTIP_ID,
    OverlayIntegrityError,
    compose,
    resolve_char_key,
    restore_line_endings,
    substitute_line_endings,
)
from hidchar.chars.sanitizer import sanitize
from hidchar.chars.word_diff import (
    ADDED,
    NEW,
    OLD,
    REMOVED,
    UNCHANGED,
    DiffResult,
    DiffSegment,
)

NBSP = "\u00A0"
ZWSP = "\u200B"


class TestLineEndingPlaceholders:
    """Tests for substitute_line_endings() and restore_line_endings()."""

    def test_line_feed_keeps_newline(self):
        """A line feed becomes the placeholder followed by the line feed."""
        text, placeholders = substitute_line_endings("a\nb")
        assert text == f"a{LF_PLACEHOLDER}\nb"
        assert placeholders == {1: "\n"}

    def test_carriage_return_alone(self):
        """A carriage return becomes the placeholder alone."""
        text, placeholders = substitute_line_endings("a\r\nb")
        assert text == f"a{CR_PLACEHOLDER}{LF_PLACEHOLDER}\nb"
        assert placeholders == {1: "\r", 2: "\n"}

    def test_restore(self):
        """Restoring the substituted text gives back the original."""
        raw = "one\r\ntwo\nthree\r"
        text, placeholders = substitute_line_endings(raw)
        assert restore_line_endings(text, placeholders) == raw

    def test_literal_placeholder_symbols_survive(self):
        """Symbols already present in the text are not treated as placeholders."""
        raw = f"see {LF_PLACEHOLDER} and {CR_PLACEHOLDER}"
        text, placeholders = substitute_line_endings(raw)
        assert placeholders == {}
        assert restore_line_endings(text, placeholders) == raw


class TestComposeScenario:
    """The two-line comparison from the product walkthrough."""

    @pytest.fixture
    def overlay(self):
        return compose("line one\nline two", "line one\nline three")

    def test_changed_words(self, overlay):
        """'two' is removed and 'three' is added."""
        assert [(s.status, s.source) for s in overlay.old] == [
            (UNCHANGED, "line one\nline "),
            (REMOVED, "two"),
        ]
        assert [(s.status, s.source) for s in overlay.new] == [
            (UNCHANGED, "line one\nline "),
            (ADDED, "three"),
        ]

    def test_line_feed_marker_in_both_panes(self, overlay):
        """The shared line boundary carries the same marker on both sides."""
        old_unchanged = overlay.old[0]
        new_unchanged = overlay.new[0]
        assert old_unchanged.markers == [LINE_FEED_MARKER]
        assert new_unchanged.markers == [LINE_FEED_MARKER]
        assert old_unchanged.markup == new_unchanged.markup

    def test_markup_shape(self, overlay):
        """The line feed renders as one flat span followed by the real break."""
        markup = overlay.old[0].markup
        assert markup == (
            f'line one<span class="{MARKER_CLASS}" data-char-key="a"'
            f' data-tooltip-id="{TOOLTIP_ID}"'
            ' data-tooltip-content="Line Feed (U+000A)"'
            ' title="Line Feed">↵</span>\nline '
        )

    def test_markup_survives_sanitizer(self, overlay):
        """Sanitizing the markup changes nothing."""
        for side in (OLD, NEW):
            markup = overlay.markup(side)
            assert sanitize(markup) == markup

    def test_similarity(self, overlay):
        """The score is computed on the raw texts."""
        assert 0.0 < overlay.similarity < 100.0
        assert overlay.changed is True


class TestComposeMarkers:
    """Tests for registry and line-ending markers."""

    def test_panes_rebuild_raw_text(self):
        """Each pane's pieces restore the raw text exactly."""
        old = f"Price:{NBSP}$5\r\nTotal{ZWSP}"
        new = f"Price: $6\r\nTotal"
        overlay = compose(old, new)
        assert "".join(s.source for s in overlay.old) == old
        assert "".join(s.source for s in overlay.new) == new

    def test_registry_marker(self):
        """A no-break space becomes a marker keyed by its code point."""
        overlay = compose(f"a{NBSP}b", "a b")
        removed = [s for s in overlay.old if s.status == REMOVED]
        assert len(removed) == 1
        marker = removed[0].markers[0]
        assert marker.key == "a0"
        assert marker.tooltip == "Non-breaking Space (U+00A0)"
        assert 'data-char-key="a0"' in removed[0].markup

    def test_carriage_return_marker(self):
        """Carriage returns use their own fixed marker."""
        overlay = compose("a\r\nb", "a\r\nb")
        markers = overlay.old[0].markers
        assert markers == [CARRIAGE_RETURN_MARKER, LINE_FEED_MARKER]
        assert CARRIAGE_RETURN_MARKER.glyph == "⏎"

    def test_tab_not_marked(self):
        """Tabs render as plain whitespace in the diff."""
        overlay = compose("a\tb", "a\tb")
        assert overlay.old[0].markers == []
        assert overlay.old[0].markup == "a\tb"

    def test_one_span_per_marker(self):
        """Spans are never nested."""
        overlay = compose(f"{ZWSP}x\n{NBSP}", f"y{ZWSP}\n")
        for side in (OLD, NEW):
            for segment in overlay.pane(side):
                assert segment.markup.count("<span") == len(segment.markers)
                assert segment.markup.count("</span>") == len(segment.markers)

    def test_literal_placeholder_symbol_is_plain(self):
        """A raw placeholder symbol is shown as text, not as a marker."""
        overlay = compose(f"a{LF_PLACEHOLDER}b", f"a{LF_PLACEHOLDER}b")
        assert overlay.old[0].markers == []
        assert overlay.old[0].source == f"a{LF_PLACEHOLDER}b"

    def test_markup_escapes_text(self):
        """Angle brackets in the text are escaped."""
        overlay = compose("<b>x</b>", "<b>x</b>")
        markup = overlay.markup(OLD)
        assert "<b>" not in markup
        assert "&lt;b&gt;" in markup

    def test_empty_inputs(self):
        """Two empty texts produce empty panes and full similarity."""
        overlay = compose("", "")
        assert overlay.old == []
        assert overlay.new == []
        assert overlay.similarity == 100.0
        assert overlay.changed is False


class TestElision:
    """Tests for diff-only output."""

    def test_elide_unchanged(self):
        """Only changed segments remain, still annotated."""
        overlay = compose("line one\nline two", "line one\nline three", elide_unchanged=True)
        assert overlay.elided is True
        assert [s.source for s in overlay.old] == ["two"]
        assert [s.source for s in overlay.new] == ["three"]

    def test_elided_markers_keep_offsets(self):
        """Markers after an elided region are still recognized."""
        overlay = compose("same\nold", "same\nnew\r", elide_unchanged=True)
        added = overlay.new[0]
        assert added.status == ADDED
        assert CARRIAGE_RETURN_MARKER in added.markers


class TestIntegrity:
    """Integrity faults from a misbehaving diff function."""

    def test_empty_diff_for_non_empty_input(self):
        """No segments for real input is an error."""

        def empty_diff(old, new, elide):
            return DiffResult()

        with pytest.raises(OverlayIntegrityError):
            compose("text", "text", diff=empty_diff)

    def test_segments_not_covering_input(self):
        """Segments that drop characters are an error."""

        def lossy_diff(old, new, elide):
            return DiffResult(
                old=[DiffSegment(old[:-1], UNCHANGED, OLD)],
                new=[DiffSegment(new, UNCHANGED, NEW)],
            )

        with pytest.raises(OverlayIntegrityError):
            compose("abc", "abc", diff=lossy_diff)

    def test_diff_called_without_elision(self):
        """The diff always sees the full alignment."""
        calls = []

        def recording_diff(old, new, elide):
            calls.append(elide)
            return DiffResult(
                old=[DiffSegment(old, UNCHANGED, OLD)],
                new=[DiffSegment(new, UNCHANGED, NEW)],
            )

        compose("a", "a", diff=recording_diff, elide_unchanged=True)
        assert calls == [False]

    def test_integrity_error_is_value_error(self):
        """Callers catching ValueError also catch integrity faults."""
        assert issubclass(OverlayIntegrityError, ValueError)


class TestResolveCharKey:
    """Tests for resolve_char_key()."""

    def test_round_trip_with_marker_key(self):
        """A marker's key resolves back to its character."""
        overlay = compose(f"a{ZWSP}", "a")
        marker = overlay.old[-1].markers[0]
        assert resolve_char_key(marker.key) == ZWSP

    def test_line_feed_key(self):
        """The line-feed marker key is 'a'."""
        assert resolve_char_key(LINE_FEED_MARKER.key) == "\n"

    @pytest.mark.parametrize("key", ["zz", "", "110000"])
    def test_invalid_key(self, key):
        """Malformed or out-of-range keys raise ValueError."""
        with pytest.raises(ValueError):
            resolve_char_key(key)


class TestSanitizerFixedPoint:
    """Overlay markup must pass the sanitizer unchanged."""

    @pytest.mark.parametrize(
        "old, new",
        [
            ('say "hi"', "say 'hi'"),
            (f"a & b{ZWSP}", "a &amp; b"),
            ("x < y\r\n", f"x > y{NBSP}\n"),
        ],
    )
    def test_sanitize_is_identity(self, old, new):
        """Quotes, ampersands and brackets survive sanitizing as-is."""
        overlay = compose(old, new)
        for side in (OLD, NEW):
            markup = overlay.markup(side)
            assert sanitize(markup) == markup
