"""
Dual Pane Mixin for left/right panel switching functionality.

Provides consistent panel switching behavior across dual-pane screens:
- action_switch_panel(): Toggle between left and right panels
- action_pane_left(): Switch focus to the left panel (h key)
- action_pane_right(): Switch focus to the right panel (l key)
- _update_panel_styles(): Update active/inactive CSS classes on panels
- _focus_active_widget(): Abstract method subclasses must implement

Usage:
    class MyDualPaneScreen(DualPaneMixin, Screen):
        BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [...]

        def _focus_active_widget(self) -> None:
            # Focus the appropriate widget in the active panel
            ...
"""

from __future__ import annotations

from textual.binding import Binding
from textual.css.query import NoMatches

LEFT = "left"
RIGHT = "right"


class DualPaneMixin:
    """Mixin for screens with left/right panel switching.

    Manages panel state and switching for screens that display two panels
    side-by-side. Subclasses must implement _focus_active_widget() to
    define how focus moves within the active panel.

    Class Attributes:
        DUAL_PANE_BINDINGS: Panel switching plus back/quit bindings.
    """

    DUAL_PANE_BINDINGS = [
        # Panel switching (h/l vim-style + arrow keys + tab)
        Binding("h", "pane_left", "Left Panel", show=False),
        Binding("l", "pane_right", "Right Panel", show=False),
        Binding("left", "pane_left", "Left Panel", show=False),
        Binding("right", "pane_right", "Right Panel", show=False),
        Binding("tab", "switch_panel", "Switch Panel", show=True),
        # Common actions
        Binding("escape", "go_back", "Back", show=True),
        Binding("b", "go_back", "Back", show=False),
        Binding("q", "quit", "Quit", show=False),
    ]

    _active_panel: str = LEFT
    """Currently active panel identifier ('left' or 'right')."""

    @property
    def active_panel(self) -> str:
        return self._active_panel

    @property
    def is_left_active(self) -> bool:
        return self._active_panel == LEFT

    def action_switch_panel(self) -> None:
        """Toggle between left and right panels."""
        self._set_active_panel(RIGHT if self._active_panel == LEFT else LEFT)

    def action_pane_left(self) -> None:
        if self._active_panel != LEFT:
            self._set_active_panel(LEFT)

    def action_pane_right(self) -> None:
        if self._active_panel != RIGHT:
            self._set_active_panel(RIGHT)

    def _set_active_panel(self, side: str) -> None:
        self._active_panel = side
        self._update_panel_styles()
        self._focus_active_widget()

    def action_go_back(self) -> None:
        """Go back one step or exit the screen.

        Default behavior pops the screen; subclasses may override.
        """
        self.app.pop_screen()

    def action_quit(self) -> None:
        """Exit the application."""
        self.app.exit()

    def _update_panel_styles(self) -> None:
        """Update active/inactive CSS classes on #left-panel and #right-panel.

        Handles missing panels gracefully.
        """
        try:
            left = self.query_one("#left-panel")
            right = self.query_one("#right-panel")
        except NoMatches:
            return

        for panel, side in ((left, LEFT), (right, RIGHT)):
            is_active = self._active_panel == side
            panel.set_class(is_active, "active")
            panel.set_class(not is_active, "inactive")

    def _focus_active_widget(self) -> None:
        """Focus the appropriate widget in the active panel.

        Subclasses must implement this method to define how focus
        is transferred when switching panels.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement _focus_active_widget()"
        )
