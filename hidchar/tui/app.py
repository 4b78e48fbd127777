"""
Main Textual application for the Hidden Character Explorer.

Opens a text file in the analyzer (editor, highlighted preview, character
table), or with ``--compare`` shows a side-by-side word diff of two files
with invisible characters kept visible.
"""

import argparse
import logging
import os
import sys
from enum import Enum

from textual.app import App
from textual.binding import Binding

from hidchar.chars.session import EditorSession
from hidchar.loader import display_name, read_text
from hidchar.tui.views.analyzer_screen import AnalyzerScreen
from hidchar.tui.views.comparison_screen import ComparisonScreen

logger = logging.getLogger(__name__)


class AppMode(Enum):
    """Application mode for editing one text vs comparing two."""

    ANALYZER = "analyzer"
    COMPARISON = "comparison"


class HidCharApp(App):
    """A Textual app for finding and comparing invisible characters."""

    TITLE = "Hidden Character Explorer"

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        dock: top;
        height: 3;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
    }

    DataTable {
        background: $surface;
    }

    DataTable > .datatable--header {
        background: $primary-darken-1;
        color: $text;
        text-style: bold;
    }

    DataTable > .datatable--cursor {
        background: $secondary;
        color: $text;
    }

    .panel-header {
        height: 1;
        background: $surface;
        text-align: center;
        text-style: bold;
    }

    Static {
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        text: str = "",
        path: str | None = None,
        compare_text: str | None = None,
        compare_path: str | None = None,
        diff_only: bool = False,
        encoding: str = "utf-8",
    ):
        """Initialize the app with the text to analyze or compare.

        Args:
            text: Text to open in the analyzer (left side when comparing).
            path: File the text came from, if any.
            compare_text: Second text; switches the app to comparison mode.
            compare_path: File the second text came from.
            diff_only: Start the comparison with unchanged text hidden.
            encoding: Encoding used when saving.
        """
        super().__init__()
        self._path = path
        self._compare_path = compare_path
        self._diff_only = diff_only
        self._encoding = encoding
        self._compare_text = compare_text
        self.session = EditorSession(text)
        self.mode = AppMode.COMPARISON if compare_text is not None else AppMode.ANALYZER

    def on_mount(self) -> None:
        """Push the screen for the current mode."""
        if self.mode == AppMode.COMPARISON:
            self.push_screen(
                ComparisonScreen(
                    self.session.text,
                    self._compare_text,
                    old_label=display_name(self._path),
                    new_label=display_name(self._compare_path),
                    diff_only=self._diff_only,
                )
            )
        else:
            self.push_screen(AnalyzerScreen(self.session, self._path, self._encoding))


def main() -> None:
    """Parse arguments and run the application."""
    parser = argparse.ArgumentParser(
        description="Find, explain and compare invisible Unicode characters in a terminal UI."
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Text file to open; starts empty if omitted",
    )
    parser.add_argument(
        "--compare",
        "-c",
        dest="compare_path",
        default=None,
        help="Second text file for a side-by-side word diff",
    )
    parser.add_argument(
        "--diff-only",
        "-d",
        action="store_true",
        help="Hide unchanged text in the comparison view",
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="File encoding (default: utf-8)",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write debug logs to this file",
    )
    args = parser.parse_args()

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    if args.compare_path and not args.path:
        print("Error: --compare needs a file to compare against", file=sys.stderr)
        sys.exit(1)

    for label, path in (("Path", args.path), ("Compare path", args.compare_path)):
        if not path:
            continue
        if not os.path.exists(path):
            print(f"Error: {label} not found: {path}", file=sys.stderr)
            sys.exit(1)
        if not os.access(path, os.R_OK):
            print(f"Error: {label} permission denied: {path}", file=sys.stderr)
            sys.exit(1)

    try:
        text = read_text(args.path, args.encoding) if args.path else ""
        compare_text = (
            read_text(args.compare_path, args.encoding) if args.compare_path else None
        )
    except UnicodeDecodeError as e:
        print(f"Error: Cannot decode input as {args.encoding}: {e}", file=sys.stderr)
        sys.exit(1)

    logger.debug("Starting TUI (path=%s, compare=%s)", args.path, args.compare_path)
    app = HidCharApp(
        text=text,
        path=args.path,
        compare_text=compare_text,
        compare_path=args.compare_path,
        diff_only=args.diff_only,
        encoding=args.encoding,
    )
    app.run()


if __name__ == "__main__":
    main()
