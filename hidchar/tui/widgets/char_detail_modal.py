"""Modal screen for displaying the full description of one character."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import ScrollableContainer, Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from hidchar.chars.registry import CharacterEntry
from hidchar.chars.scanner import scan
from hidchar.tui.widgets.highlighted_text import render_entry_label, render_scan

# Result returned when the user asks to insert the character
INSERT_RESULT = "insert"


class CharDetailModal(ModalScreen[str | None]):
    """A modal screen that shows a character's metadata and example.

    Dismisses with ``"insert"`` when the user presses ``i``, so the caller
    can insert the character at the cursor. Otherwise dismisses with None.
    """

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("enter", "close", "Close"),
        Binding("i", "insert", "Insert"),
        Binding("c", "copy_char", "Copy Character"),
        Binding("q", "quit", "Quit App"),
    ]

    CSS = """
    CharDetailModal {
        align: center middle;
    }

    CharDetailModal > Vertical {
        width: 80%;
        height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    CharDetailModal .modal-header {
        dock: top;
        height: auto;
        padding: 1 2;
        background: $primary;
        color: $text;
        text-align: center;
        text-style: bold;
    }

    CharDetailModal .char-meta {
        dock: top;
        height: auto;
        padding: 1 2;
        background: $surface-darken-1;
        color: $secondary;
    }

    CharDetailModal .content-container {
        height: 1fr;
        padding: 1 2;
        background: $surface-darken-2;
    }

    CharDetailModal .char-usage, CharDetailModal .char-example {
        width: 100%;
        height: auto;
        padding: 0 0 1 0;
    }

    CharDetailModal .close-hint {
        dock: bottom;
        height: auto;
        padding: 1 2;
        text-align: center;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        entry: CharacterEntry,
        count: int = 0,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the character detail modal.

        Args:
            entry: Registry (or fallback) entry to describe.
            count: Occurrences of the character in the current text.
            name: Optional name for the widget.
            id: Optional ID for the widget.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.entry = entry
        self.count = count

    def compose(self) -> ComposeResult:
        """Compose the modal content."""
        entry = self.entry
        meta = render_entry_label(entry)
        meta.append(f"\nOccurrences in text: {self.count:,}")

        with Vertical():
            yield Label(entry.long_name, classes="modal-header")
            yield Static(meta, classes="char-meta")
            with ScrollableContainer(classes="content-container"):
                yield Static(entry.usage or "No usage notes.", markup=False, classes="char-usage")
                if entry.example:
                    yield Static(render_scan(scan(entry.example)), classes="char-example")
            yield Label(
                "Esc: close   i: insert at cursor   c: copy character",
                classes="close-hint",
            )

    def action_close(self) -> None:
        """Close the modal."""
        self.dismiss(None)

    def action_insert(self) -> None:
        """Close the modal and ask the caller to insert the character."""
        self.dismiss(INSERT_RESULT)

    def action_copy_char(self) -> None:
        """Copy the raw character to the clipboard."""
        self.app.copy_to_clipboard(self.entry.char)
        self.notify(f"Copied {self.entry.name} ({self.entry.code})")

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()
