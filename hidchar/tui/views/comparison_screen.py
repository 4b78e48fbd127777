"""
Comparison Screen for side-by-side word diffs.

Displays the original text on the left and the comparison text on the right.
Removed words are highlighted in the left pane, added words in the right
pane, and invisible characters are drawn as glyph markers in both.
"""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from hidchar.chars.mutations import copy_marked
from hidchar.chars.overlay import OverlayIntegrityError, OverlayResult
from hidchar.chars.overlay import compose as compose_overlay
from hidchar.chars.similarity import format_similarity
from hidchar.chars.word_diff import NEW, OLD
from hidchar.tui.mixins import DualPaneMixin
from hidchar.tui.mixins.dual_pane import LEFT
from hidchar.tui.widgets import render_overlay

logger = logging.getLogger(__name__)


class ComparisonScreen(DualPaneMixin, Screen):
    """Side-by-side word diff view with visible special characters."""

    CSS = """
    ComparisonScreen {
        layout: vertical;
    }

    #similarity-bar {
        height: 1;
        padding: 0 1;
        background: $primary-darken-1;
        text-style: bold;
    }

    #comparison-container {
        height: 1fr;
    }

    #left-panel, #right-panel {
        width: 50%;
        border: solid $primary;
        padding: 0 1;
    }

    #left-panel {
        border-right: none;
    }

    #left-panel.active, #right-panel.active {
        border: solid $secondary;
    }

    .pane-scroll {
        height: 1fr;
    }
    """

    BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [
        Binding("d", "toggle_diff_only", "Diff Only"),
        Binding("s", "swap", "Swap Sides"),
        Binding("c", "copy_marked", "Copy Marked"),
    ]

    def __init__(
        self,
        old_text: str,
        new_text: str,
        old_label: str = "Original",
        new_label: str = "Comparison",
        diff_only: bool = False,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the ComparisonScreen.

        Args:
            old_text: Original text (left pane).
            new_text: Comparison text (right pane).
            old_label: Header for the left pane.
            new_label: Header for the right pane.
            diff_only: Start with unchanged text hidden.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._old_text = old_text
        self._new_text = new_text
        self._old_label = old_label
        self._new_label = new_label
        self._diff_only = diff_only
        self._overlay: OverlayResult | None = None

    def compose(self) -> ComposeResult:
        """Compose the screen layout with side-by-side panels."""
        yield Header()
        yield Static("", id="similarity-bar")
        with Horizontal(id="comparison-container"):
            with Vertical(id="left-panel", classes="active"):
                yield Static(self._old_label, id="left-header", classes="panel-header", markup=False)
                with VerticalScroll(id="left-scroll", classes="pane-scroll"):
                    yield Static("", id="left-pane", markup=False)
            with Vertical(id="right-panel", classes="inactive"):
                yield Static(self._new_label, id="right-header", classes="panel-header", markup=False)
                with VerticalScroll(id="right-scroll", classes="pane-scroll"):
                    yield Static("", id="right-pane", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self._refresh_overlay()
        self.query_one("#left-scroll", VerticalScroll).focus()
        self._update_panel_styles()

    def _refresh_overlay(self) -> None:
        """Recompute the overlay and redraw both panes."""
        left = self.query_one("#left-pane", Static)
        right = self.query_one("#right-pane", Static)
        try:
            self._overlay = compose_overlay(
                self._old_text, self._new_text, elide_unchanged=self._diff_only
            )
        except OverlayIntegrityError as e:
            logger.warning("Overlay failed: %s", e)
            self._overlay = None
            self.notify(f"Diff unavailable: {e}", severity="error")
            left.update(self._old_text)
            right.update(self._new_text)
            return

        left.update(render_overlay(self._overlay.pane(OLD)))
        right.update(render_overlay(self._overlay.pane(NEW)))

        score = format_similarity(self._overlay.similarity)
        mode = "changes only" if self._diff_only else "full text"
        self.query_one("#similarity-bar", Static).update(f"Similarity: {score}  ({mode})")
        self.title = f"Compare - {self._old_label} ↔ {self._new_label} ({score})"

    def _focus_active_widget(self) -> None:
        """Focus the scroll container of the active panel."""
        self.query_one(f"#{self._active_panel}-scroll", VerticalScroll).focus()

    def action_go_back(self) -> None:
        """Return to the analyzer, or exit when opened directly."""
        # The stack always holds the app's default screen underneath
        if len(self.app.screen_stack) <= 2:
            self.app.exit()
        else:
            self.app.pop_screen()

    def action_toggle_diff_only(self) -> None:
        """Toggle hiding of unchanged text."""
        self._diff_only = not self._diff_only
        self._refresh_overlay()
        status = "enabled" if self._diff_only else "disabled"
        self.notify(f"Diff-only view {status}")

    def action_swap(self) -> None:
        """Swap the original and comparison texts."""
        self._old_text, self._new_text = self._new_text, self._old_text
        self._old_label, self._new_label = self._new_label, self._old_label
        self.query_one("#left-header", Static).update(self._old_label)
        self.query_one("#right-header", Static).update(self._new_label)
        self._refresh_overlay()

    def action_copy_marked(self) -> None:
        """Copy the active pane's text with [glyph] markers."""
        text = self._old_text if self._active_panel == LEFT else self._new_text
        self.app.copy_to_clipboard(copy_marked(text))
        self.notify("Copied with markers")

    @property
    def overlay(self) -> OverlayResult | None:
        return self._overlay

    @property
    def diff_only(self) -> bool:
        return self._diff_only
