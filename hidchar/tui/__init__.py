"""
TUI Hidden Character Explorer.

A Textual-based terminal UI for spotting invisible characters while editing
text, and for comparing two texts with those characters kept visible.

Usage:
    hidchar-tui notes.txt
    hidchar-tui original.txt --compare translated.txt

Components:
    - HidCharApp: Main application class
    - AnalyzerScreen: Editor, highlighted preview and character table
    - ComparisonScreen: Side-by-side word diff with markers
    - CharDetailModal: Full description of one character
"""
