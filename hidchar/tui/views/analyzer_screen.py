"""
Analyzer Screen for editing text with invisible characters highlighted.

The left panel is a plain text editor. The right panel shows the same text
with every notable character drawn as a coloured glyph, and the table below
lists registry characters, those present in the text first.

The :class:`EditorSession` is the source of truth for the text. The editor
widget splits lines on every Unicode line boundary, so edits coming from it
are spliced back into the session text rather than copied wholesale.
"""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static, TextArea

from hidchar.chars.overlay import resolve_char_key
from hidchar.chars.registry import CharacterEntry, entry_for
from hidchar.chars.session import EditorSession
from hidchar.loader import STDIN_PATH, display_name, write_text
from hidchar.tui.views.comparison_screen import ComparisonScreen
from hidchar.tui.widgets import (
    INSERT_RESULT,
    CharDetailModal,
    CharPickerModal,
    ReplaceModal,
    render_scan,
)
from hidchar.tui.widgets.highlighted_text import glyph_style

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ("Glyph", "Code", "Name", "Count", "Shown")


def splice_editor_change(session_text: str, before: str, after: str) -> tuple[str, bool]:
    """Carry an editor change from ``before`` to ``after`` over to the session text.

    ``before`` is what the editor showed for ``session_text``. When the two
    have the same length, offsets line up and only the changed span is
    replaced, so line separators the editor normalized survive the edit.

    Returns:
        (new session text, exact) where ``exact`` is False if the editor
        text had to be taken as-is.

    Examples:
        >>> splice_editor_change("a\\u2028b", "a\\nb", "a\\nbc")
        ('a\\u2028bc', True)
    """
    if before == session_text:
        return after, True
    if len(before) != len(session_text):
        return after, False

    prefix = 0
    limit = min(len(before), len(after))
    while prefix < limit and before[prefix] == after[prefix]:
        prefix += 1
    suffix = 0
    while (
        suffix < limit - prefix
        and before[len(before) - 1 - suffix] == after[len(after) - 1 - suffix]
    ):
        suffix += 1

    inserted = after[prefix:len(after) - suffix]
    return session_text[:prefix] + inserted + session_text[len(session_text) - suffix:], True


class AnalyzerScreen(Screen):
    """Editor with live highlighting, statistics and character table."""

    CSS = """
    AnalyzerScreen {
        layout: vertical;
    }

    #analyzer-container {
        height: 2fr;
    }

    #editor-panel, #preview-panel {
        width: 50%;
        border: solid $primary;
        padding: 0 1;
    }

    #editor-panel {
        border-right: none;
    }

    #editor {
        height: 1fr;
    }

    #preview-scroll {
        height: 1fr;
    }

    #stats-bar {
        height: 1;
        padding: 0 1;
        background: $primary-darken-1;
        text-style: bold;
    }

    #char-table {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("ctrl+z", "undo", "Undo", priority=True),
        Binding("ctrl+y", "redo", "Redo", priority=True),
        Binding("f2", "insert_char", "Insert"),
        Binding("f3", "replace_char", "Replace"),
        Binding("f4", "toggle_char", "Show/Hide"),
        Binding("f5", "show_char_detail", "Info"),
        Binding("f8", "copy_plain", "Copy"),
        Binding("f9", "copy_marked", "Copy Marked"),
        Binding("f10", "compare", "Compare"),
        Binding("f12", "revert", "Revert", show=False),
        Binding("ctrl+s", "save", "Save", show=False),
        Binding("ctrl+q", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        session: EditorSession,
        path: str | None = None,
        encoding: str = "utf-8",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the AnalyzerScreen.

        Args:
            session: Editing session holding the text and its history.
            path: File the text came from, used for titles and saving.
            encoding: Encoding used when saving back to ``path``.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._session = session
        self._path = path
        self._encoding = encoding
        self._baseline = session.text
        self._baseline_index = session.history.cursor
        self._echo = ""
        self._warned_normalized = False

    def compose(self) -> ComposeResult:
        """Compose the editor, preview, stats bar and character table."""
        yield Header()
        with Horizontal(id="analyzer-container"):
            with Vertical(id="editor-panel"):
                yield Static("Text", classes="panel-header")
                yield TextArea(id="editor", soft_wrap=True)
            with Vertical(id="preview-panel"):
                yield Static("Highlighted", classes="panel-header")
                with VerticalScroll(id="preview-scroll"):
                    yield Static("", id="preview")
        yield Static("", id="stats-bar")
        yield DataTable(id="char-table", cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#char-table", DataTable)
        table.add_columns(*TABLE_COLUMNS)
        self.title = f"Hidden Character Explorer - {display_name(self._path)}"
        self._load_editor()
        self._refresh_views()
        self.query_one("#editor", TextArea).focus()

    @property
    def session(self) -> EditorSession:
        return self._session

    # ---------------------------------------------------------------
    # Editor synchronisation
    # ---------------------------------------------------------------

    def _load_editor(self) -> None:
        """Push the session text into the editor widget."""
        editor = self.query_one("#editor", TextArea)
        editor.load_text(self._session.text)
        self._echo = editor.text
        offset = min(self._session.cursor, len(self._echo))
        editor.move_cursor(editor.document.get_location_from_index(offset))

    def _editor_offset(self) -> int:
        editor = self.query_one("#editor", TextArea)
        return editor.document.get_index_from_location(editor.cursor_location)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        """Record typed edits in the session history."""
        after = event.text_area.text
        if after == self._echo:
            return

        new_text, exact = splice_editor_change(self._session.text, self._echo, after)
        if not exact:
            logger.debug("Editor text length differs from session; taking editor text")
        if not exact and not self._warned_normalized:
            self._warned_normalized = True
            self.notify(
                "Editor normalized line separators in this text",
                severity="warning",
            )
        self._session.type_text(new_text, cursor=self._editor_offset())
        self._echo = after
        self._refresh_views()

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        self._session.cursor = self._editor_offset()

    # ---------------------------------------------------------------
    # Views
    # ---------------------------------------------------------------

    def _refresh_views(self) -> None:
        """Redraw the preview, statistics and character table."""
        result = self._session.scan()
        self.query_one("#preview", Static).update(render_scan(result))

        stats = self._session.stats()
        history = self._session.history
        self.query_one("#stats-bar", Static).update(
            f"Characters: {stats.characters:,}  |  "
            f"Special: {stats.special_total:,}  |  "
            f"Distinct: {stats.special_distinct}  |  "
            f"History: {history.cursor + 1}/{len(history)}"
        )
        self._populate_table(result.frequencies)

    def _populate_table(self, frequencies: dict[str, int]) -> None:
        table = self.query_one("#char-table", DataTable)
        cursor_row = table.cursor_row
        table.clear()

        used, additional = self._session.entries_by_usage()
        for entry in used + additional:
            table.add_row(
                Text(entry.glyph, style=glyph_style(entry.char)),
                entry.code,
                entry.name,
                frequencies.get(entry.char, 0),
                "yes" if self._session.is_visible(entry.char) else "no",
                key=entry.key,
            )

        if table.row_count > 0:
            table.move_cursor(row=min(cursor_row, table.row_count - 1))

    def _selected_entry(self) -> CharacterEntry | None:
        """Get the entry for the highlighted table row."""
        table = self.query_one("#char-table", DataTable)
        if table.row_count == 0:
            return None
        row_key = table.coordinate_to_cell_key(table.cursor_coordinate).row_key
        return entry_for(resolve_char_key(row_key.value), self._session.registry)

    # ---------------------------------------------------------------
    # Actions
    # ---------------------------------------------------------------

    def action_undo(self) -> None:
        step = self._session.undo()
        if not step.moved:
            self.notify(step.message, severity="warning")
            return
        self._load_editor()
        self._refresh_views()

    def action_redo(self) -> None:
        step = self._session.redo()
        if not step.moved:
            self.notify(step.message, severity="warning")
            return
        self._load_editor()
        self._refresh_views()

    def insert_char(self, char: str) -> None:
        """Insert ``char`` at the cursor and refresh everything."""
        self._session.insert(char)
        self._load_editor()
        self._refresh_views()
        entry = entry_for(char, self._session.registry)
        self.notify(f"Inserted {entry.name}")

    def action_insert_char(self) -> None:
        """Open the character picker and insert the chosen character."""

        def on_picked(char: str | None) -> None:
            if char is not None:
                self.insert_char(char)

        self.app.push_screen(CharPickerModal(self._session.registry), on_picked)

    def action_replace_char(self) -> None:
        """Replace every occurrence of the selected character."""
        entry = self._selected_entry()
        if entry is None:
            return
        count = self._session.frequencies().get(entry.char, 0)

        def on_replacement(replacement: str | None) -> None:
            if replacement is None:
                return
            result = self._session.replace_all(entry.char, replacement)
            self.notify(result.message)
            if result.count:
                self._load_editor()
                self._refresh_views()

        self.app.push_screen(
            ReplaceModal(entry, count, self._session.registry), on_replacement
        )

    def action_toggle_char(self) -> None:
        """Show or hide highlighting for the selected character."""
        entry = self._selected_entry()
        if entry is None:
            return
        visible = self._session.toggle_visibility(entry.char)
        state = "shown" if visible else "hidden"
        self.notify(f"{entry.name} {state}")
        self._refresh_views()

    def action_show_char_detail(self) -> None:
        """Show the detail modal for the selected character."""
        entry = self._selected_entry()
        if entry is None:
            return
        count = self._session.frequencies().get(entry.char, 0)

        def on_closed(result: str | None) -> None:
            if result == INSERT_RESULT:
                self.insert_char(entry.char)

        self.app.push_screen(CharDetailModal(entry, count), on_closed)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Enter on a table row opens the character details."""
        self.action_show_char_detail()

    def action_copy_plain(self) -> None:
        self.app.copy_to_clipboard(self._session.copy_plain())
        self.notify("Copied text")

    def action_copy_marked(self) -> None:
        self.app.copy_to_clipboard(self._session.copy_marked())
        self.notify("Copied text with markers")

    def action_compare(self) -> None:
        """Compare the text as opened with the current text."""
        self.app.push_screen(
            ComparisonScreen(
                self._baseline,
                self._session.text,
                old_label=f"{display_name(self._path)} (opened)",
                new_label="Current",
            )
        )

    def action_revert(self) -> None:
        """Restore the text as opened, as a new undoable edit."""
        self._session.revert_to(self._baseline_index)
        self._load_editor()
        self._refresh_views()
        self.notify("Reverted to opened text")

    def action_save(self) -> None:
        """Write the session text back to its file."""
        if not self._path or self._path == STDIN_PATH:
            self.notify("No file to save to", severity="error")
            return
        try:
            write_text(self._path, self._session.text, self._encoding)
        except OSError as e:
            self.notify(f"Save failed: {e}", severity="error")
            return
        self.notify(f"Saved {display_name(self._path)}")

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()
