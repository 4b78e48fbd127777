"""Mixins for the TUI application."""

from hidchar.tui.mixins.dual_pane import DualPaneMixin

__all__ = [
    "DualPaneMixin",
]
