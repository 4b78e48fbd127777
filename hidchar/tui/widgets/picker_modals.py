"""
Modal pickers for inserting and replacing characters.

Both modals list choices in an ``OptionList``. ``CharPickerModal`` dismisses
with the chosen character, ``ReplaceModal`` with the replacement text.
Cancelling dismisses with None, so an empty-string replacement (delete)
stays distinguishable from cancel.
"""

from __future__ import annotations

from typing import Mapping

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label, OptionList
from textual.widgets.option_list import Option

from hidchar.chars.mutations import replacement_choices
from hidchar.chars.registry import CharacterEntry, iter_entries, parse_code_point
from hidchar.tui.widgets.highlighted_text import render_entry_label

PICKER_CSS = """
{cls} {{
    align: center middle;
}}

{cls} > Vertical {{
    width: 70%;
    height: 80%;
    background: $surface;
    border: solid $primary;
    padding: 1 2;
}}

{cls} .modal-header {{
    dock: top;
    height: auto;
    padding: 1 2;
    background: $primary;
    color: $text;
    text-align: center;
    text-style: bold;
}}

{cls} OptionList {{
    height: 1fr;
}}

{cls} .close-hint {{
    dock: bottom;
    height: auto;
    padding: 1 2;
    text-align: center;
    color: $text-muted;
}}
"""


class CharPickerModal(ModalScreen[str | None]):
    """Pick a registry character to insert at the cursor."""

    BINDINGS = [
        Binding("escape", "close", "Cancel"),
    ]

    CSS = PICKER_CSS.format(cls="CharPickerModal")

    def __init__(
        self,
        registry: Mapping[str, CharacterEntry] | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._entries = list(iter_entries(registry))

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("Insert Character", classes="modal-header")
            yield OptionList(
                *[Option(render_entry_label(entry), id=entry.key) for entry in self._entries],
                id="char-options",
            )
            yield Label("Enter: insert   Esc: cancel", classes="close-hint")

    def on_mount(self) -> None:
        self.query_one("#char-options", OptionList).focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        self.dismiss(self._entries[event.option_index].char)

    def action_close(self) -> None:
        self.dismiss(None)


class ReplaceModal(ModalScreen[str | None]):
    """Choose a replacement for every occurrence of one character.

    Offers the presets (regular space, delete) and every registry character,
    plus a free-form input. Input starting with ``U+`` or ``0x`` is read as a
    code point reference; anything else is used literally.
    """

    BINDINGS = [
        Binding("escape", "close", "Cancel"),
    ]

    CSS = PICKER_CSS.format(cls="ReplaceModal") + """
    ReplaceModal Input {
        dock: bottom;
        margin: 0 0 3 0;
    }
    """

    def __init__(
        self,
        target: CharacterEntry,
        count: int,
        registry: Mapping[str, CharacterEntry] | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the replace modal.

        Args:
            target: Entry of the character being replaced.
            count: Current occurrences, shown in the header.
            registry: Registry used to list replacement characters.
            name: Optional name for the widget.
            id: Optional ID for the widget.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.target = target
        self.count = count
        self._choices = replacement_choices(registry)

    def compose(self) -> ComposeResult:
        header = f"Replace {self.target.name} ({self.target.code}) - {self.count:,} found"
        with Vertical():
            yield Label(header, classes="modal-header")
            yield OptionList(
                *[Option(label) for label, _ in self._choices],
                id="replace-options",
            )
            yield Input(placeholder="Custom replacement (text or U+XXXX), Enter to apply", id="replace-input")
            yield Label("Enter: replace   Tab: custom text   Esc: cancel", classes="close-hint")

    def on_mount(self) -> None:
        self.query_one("#replace-options", OptionList).focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        _, replacement = self._choices[event.option_index]
        self.dismiss(replacement)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        value = event.value
        if value.upper().startswith(("U+", "0X")):
            try:
                value = parse_code_point(value)
            except ValueError as e:
                self.notify(str(e), severity="error")
                return
        self.dismiss(value)

    def action_close(self) -> None:
        self.dismiss(None)
