"""TUI views for the Hidden Character Explorer."""

from hidchar.tui.views.analyzer_screen import AnalyzerScreen
from hidchar.tui.views.comparison_screen import ComparisonScreen

__all__ = ["AnalyzerScreen", "ComparisonScreen"]
