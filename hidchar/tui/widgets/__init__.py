"""TUI widgets for the Hidden Character Explorer."""

from hidchar.tui.widgets.char_detail_modal import INSERT_RESULT, CharDetailModal
from hidchar.tui.widgets.highlighted_text import (
    render_entry_label,
    render_overlay,
    render_scan,
)
from hidchar.tui.widgets.picker_modals import CharPickerModal, ReplaceModal

__all__ = [
    # Modals
    "CharDetailModal",
    "CharPickerModal",
    "ReplaceModal",
    "INSERT_RESULT",
    # Rich text renderers
    "render_scan",
    "render_overlay",
    "render_entry_label",
]
