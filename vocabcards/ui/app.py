"""Main application entry point."""

import copy
import logging
import os
from typing import Optional

import urwid
import yaml
from dotenv import load_dotenv

from vocabcards.core.deck_manager import DeckManager
from vocabcards.core.errors import InvalidUploadFormat
from vocabcards.storage.fetch import DatasetLoad
from vocabcards.ui.theme import PALETTE
from vocabcards.ui.widgets import HeaderBar, StatusBar
from vocabcards.ui.screens import GroupScreen, CardScreen

# Load .env file if present
load_dotenv()

logger = logging.getLogger(__name__)

SOURCE_ENV_VAR = "VOCAB_CARDS_SOURCE"

DEFAULT_CONFIG = {
    "data": {
        "source": "vocab-data.json",
        "timeout": 10,
    },
    "ads": {
        "enabled": True,
        "code": "",
    },
    "logging": {
        "level": "INFO",
        "file": "vocabcards.log",
    },
}


def merge_config(defaults: dict, overrides: dict) -> dict:
    """Merge a loaded config over the defaults, one section deep."""
    merged = copy.deepcopy(defaults)
    if not isinstance(overrides, dict):
        return merged
    for section, values in overrides.items():
        if isinstance(merged.get(section), dict):
            # A section that is not a mapping (e.g. a bare "ads:") keeps its defaults
            if isinstance(values, dict):
                merged[section].update(values)
        else:
            merged[section] = values
    return merged


class App:
    """Main application class."""

    TITLE = "Vocab Flashcards"

    def __init__(self, config_path: Optional[str] = None, source: Optional[str] = None):
        # Load config
        self.config = self._load_config(config_path)
        self._init_logging()

        data_config = self.config.get("data", {})
        self.source = source or os.environ.get(SOURCE_ENV_VAR) or data_config.get("source")
        self.timeout = data_config.get("timeout", 10)

        self.deck = DeckManager()
        self.loop: Optional[urwid.MainLoop] = None

        # Initialize UI
        self._init_ui()

    def _load_config(self, config_path: Optional[str]) -> dict:
        """Load configuration from file."""
        paths_to_try = [
            config_path,
            "config.yaml",
            os.path.expanduser("~/.config/vocabcards/config.yaml"),
        ]

        for path in paths_to_try:
            if path and os.path.exists(path):
                with open(path, "r") as f:
                    return merge_config(DEFAULT_CONFIG, yaml.safe_load(f) or {})

        # Return defaults
        return copy.deepcopy(DEFAULT_CONFIG)

    def _init_logging(self):
        """Send log records to a file; the terminal belongs to urwid."""
        log_config = self.config.get("logging", {})
        level = str(log_config.get("level", "INFO")).upper()
        if not isinstance(logging.getLevelName(level), int):
            level = "INFO"
        log_file = log_config.get("file")

        if log_file:
            handler = logging.FileHandler(os.path.expanduser(log_file), encoding="utf-8")
        else:
            handler = logging.NullHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logging.basicConfig(level=level, handlers=[handler])

    def _init_ui(self):
        """Initialize the UI components."""
        self.header = HeaderBar(self.TITLE)

        # Screens
        self.group_screen = GroupScreen(self)
        self.card_screen = CardScreen(self)

        # Status bar
        self.status_bar = StatusBar()

        # Main layout
        self.body = urwid.WidgetPlaceholder(self.group_screen)

        self.frame = urwid.Frame(
            header=self.header,
            body=self.body,
            footer=self.status_bar,
        )

        self.refresh()

    def show_card_screen(self):
        """Switch to the card view for the selected group."""
        self.refresh()

    def refresh(self):
        """Bring every widget in line with the deck and session state."""
        if self.deck.has_data:
            self.header.set_counts(self.deck.word_count, len(self.deck.index.group_ids))
        else:
            self.header.set_counts(None)

        if self.deck.session.is_group_selected:
            self.body.original_widget = self.card_screen
            self.card_screen.refresh()
        else:
            if self.body.original_widget is not self.group_screen:
                self.body.original_widget = self.group_screen
            self.group_screen.refresh()

        self.update_status()

    def update_status(self):
        """Update the status bar based on current state."""
        if self.body.original_widget is self.card_screen:
            self.status_bar.set_text(
                "[←/→]prev/next [Space]reveal [s]huffle [u]nshuffle "
                "[Enter]jump [Esc]groups [?]help [q]uit"
            )
        else:
            self.status_bar.set_text("[Enter]select group [o]pen file [?]help [q]uit")

    def show_message(self, message: str):
        """Show a temporary message in the status bar."""
        self.status_bar.set_text(message)

    def show_error(self, message: str):
        """Show an error in the status bar."""
        self.status_bar.set_error(message)

    # Input

    def _input_filter(self, keys, raw):
        """Route session shortcuts before widgets see them.

        Arrow keys and space would otherwise be consumed by the Columns and
        ListBox widgets (focus moves, scrolling).
        """
        if self.loop is not None and self.loop.widget is not self.frame:
            return keys

        remaining = []
        handled = False
        for key in keys:
            if self.deck.keys.handle(key):
                handled = True
            else:
                remaining.append(key)

        if handled:
            self.refresh()
        return remaining

    def handle_input(self, key):
        """Handle global key input."""

        # Handle tuple keys (mouse events) - ignore them
        if not isinstance(key, str):
            return

        if key in ("q", "Q"):
            raise urwid.ExitMainLoop()

        if key == "o":
            self.show_open_dialog()
            return

        # ? for help
        if key == "?":
            self._show_help()
            return

    def _restore_frame(self):
        self.loop.widget = self.frame
        self.loop.unhandled_input = self.handle_input

    def _show_help(self):
        """Show help overlay."""
        help_text = """
Vocab Flashcards

Groups:
  ↑/↓         Move through groups
  Enter       Study the group
  o           Open a JSON word file
  q           Quit

Cards:
  →/←         Next / previous card
  Space       Reveal or hide definitions
  Click       Reveal or hide definitions
  s           Shuffle the group
  u           Back to original order
  Enter       Jump to the word chosen in the list
  Esc         Back to groups

Press any key to close...
"""
        text = urwid.Text(help_text)
        filler = urwid.Filler(text, valign="top")
        box = urwid.LineBox(filler, title="Help")
        overlay = urwid.Overlay(
            box,
            self.frame,
            align="center",
            width=52,
            valign="middle",
            height=25,
        )

        def close_help(key):
            self._restore_frame()
            return True

        self.loop.widget = overlay
        self.loop.unhandled_input = close_help

    def show_open_dialog(self):
        """Show dialog to load a dataset from a local JSON file."""
        path_edit = urwid.Edit("File: ")
        error_text = urwid.Text("")

        def do_open(button=None):
            path = path_edit.edit_text.strip()
            if not path:
                error_text.set_text(("error", "A file path is required"))
                return

            try:
                count = self.deck.upload_file(path)
            except InvalidUploadFormat as e:
                logger.warning("Rejected upload %s: %s", path, e)
                error_text.set_text(("error", str(e)))
                self.show_error(f"Invalid file: {e}")
                return

            # Close dialog and refresh
            self._restore_frame()
            self.refresh()
            self.show_message(f"Loaded {count} words from {path}")

        def do_cancel(button=None):
            self._restore_frame()
            self.update_status()

        # Buttons
        open_btn = urwid.Button("Open", on_press=do_open)
        cancel_btn = urwid.Button("Cancel", on_press=do_cancel)

        buttons = urwid.Columns([
            urwid.AttrMap(open_btn, "button", focus_map="button_focus"),
            urwid.AttrMap(cancel_btn, "button", focus_map="button_focus"),
        ], dividechars=2)

        # Layout
        pile = urwid.Pile([
            urwid.Text("Path to a JSON array of words. Use Tab to move.", align="center"),
            urwid.Divider(),
            urwid.AttrMap(path_edit, "list_item_focus"),
            urwid.Divider(),
            error_text,
            urwid.Divider(),
            buttons,
        ])

        box = urwid.LineBox(urwid.Padding(pile, left=1, right=1), title="Open Word File")

        overlay = urwid.Overlay(
            box,
            self.frame,
            align="center",
            width=("relative", 70),
            valign="middle",
            height="pack",
        )

        def handle_input(key):
            if key == "esc":
                do_cancel()
                return True
            if key == "enter":
                do_open()
                return True
            if key == "tab":
                pile.focus_position = 6 if pile.focus_position == 2 else 2
                return True
            return False

        self.loop.widget = overlay
        self.loop.unhandled_input = handle_input

    # Startup load

    def start_load(self):
        """Fetch the startup dataset in the background."""
        if not self.source:
            return

        load = self.deck.begin_load(self.source, self.timeout)
        write_fd = self.loop.watch_pipe(lambda data: self._on_load_ready(load))

        def notify(done: DatasetLoad):
            os.write(write_fd, b"1")
            os.close(write_fd)

        load.start(notify)
        self.refresh()

    def _on_load_ready(self, load: DatasetLoad) -> bool:
        """Apply a finished load on the main loop. Always removes the pipe."""
        applied = self.deck.finish_load(load)
        if load.cancelled:
            return False

        self.refresh()
        if applied:
            self.show_message(f"Loaded {self.deck.word_count} words from {load.source}")
        elif load.error is not None:
            self.show_error(f"{load.error} - press [o] to open a file")
        return False

    def run(self):
        """Run the application."""
        self.loop = urwid.MainLoop(
            self.frame,
            palette=PALETTE,
            unhandled_input=self.handle_input,
            input_filter=self._input_filter,
            handle_mouse=True,
        )
        self.start_load()

        try:
            self.loop.run()
        except KeyboardInterrupt:
            pass


def main():
    """Entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Vocabulary flashcard viewer")
    parser.add_argument(
        "-c", "--config",
        help="Path to config file",
        default=None,
    )
    parser.add_argument(
        "-s", "--source",
        help=f"Word file path or URL (overrides config and ${SOURCE_ENV_VAR})",
        default=None,
    )
    args = parser.parse_args()

    app = App(config_path=args.config, source=args.source)
    app.run()


if __name__ == "__main__":
    main()
