"""Screen compositions for different app views."""

import urwid

from vocabcards.core.ads import ad_slot_id, should_show_ad
from vocabcards.core.errors import InvalidGroupSelection, InvalidIndex
from vocabcards.ui.widgets import AdSlot, CardFace, ListBrowser, definition_widgets


class GroupScreen(urwid.WidgetWrap):
    """Screen for picking a study group."""

    def __init__(self, app):
        self.app = app

        self.message_text = urwid.Text("", align="center")
        self.list_browser = ListBrowser(on_select=self._on_group_select)
        self.list_box = urwid.LineBox(self.list_browser, title="Groups")

        pile = urwid.Pile([
            ("pack", urwid.Padding(self.message_text, left=1, right=1)),
            ("weight", 1, self.list_box),
        ])
        super().__init__(pile)

    def refresh(self):
        """Refresh the group list and the data state message."""
        deck = self.app.deck

        if deck.loading:
            self.message_text.set_text(("info", "Loading..."))
        elif deck.load_error is not None:
            self.message_text.set_text([
                ("error", f"Could not load data: {deck.load_error}\n"),
                "Press [o] to open a JSON file.",
            ])
        elif not deck.has_data:
            self.message_text.set_text("No data. Press [o] to open a JSON file.")
        elif not deck.index.group_ids:
            self.message_text.set_text("The dataset has no words.")
        else:
            self.message_text.set_text("")

        items = [
            (gid, f"Group {gid}", f"({count} words)")
            for gid, count in deck.group_sizes()
        ]
        self.list_browser.set_items(items)

    def _on_group_select(self, group_id: int):
        """Handle group selection."""
        try:
            self.app.deck.session.select_group(group_id)
        except InvalidGroupSelection as e:
            self.app.show_error(str(e))
            return
        self.app.show_card_screen()


class CardScreen(urwid.WidgetWrap):
    """Screen showing the current card of the selected group."""

    def __init__(self, app):
        self.app = app
        self._listed_order = None

        # Card and definitions
        self.card = CardFace(on_click=self._on_card_click)
        self.definitions_walker = urwid.SimpleFocusListWalker([])
        self.definitions = urwid.ListBox(self.definitions_walker)
        self.progress_text = urwid.Text("", align="center")
        self.ad_area = urwid.WidgetPlaceholder(urwid.Text(""))

        left = urwid.Pile([
            ("pack", self.card),
            ("weight", 1, urwid.LineBox(self.definitions, title="Definitions")),
            ("pack", urwid.AttrMap(self.progress_text, "progress")),
            ("pack", self.ad_area),
        ])

        # Jump-to-word list
        self.word_list = ListBrowser(on_select=self._on_word_select)
        self.word_box = urwid.LineBox(self.word_list, title="Words")

        self.columns = urwid.Columns([
            ("weight", 3, left),
            ("weight", 1, self.word_box),
        ], dividechars=1)
        self.columns.focus_position = 1

        super().__init__(self.columns)

    def refresh(self):
        """Re-render from the current session state."""
        session = self.app.deck.session
        state = session.state
        item = session.current_item()

        self.card.show(item, state.revealed)

        self.definitions_walker.clear()
        if item is not None and state.revealed:
            for definition in item.definitions:
                self.definitions_walker.extend(definition_widgets(definition))

        number, total = session.position()
        progress = f"Group {state.selected_group} | Card {number} of {total}"
        if state.shuffled:
            progress += " (shuffled)"
        self.progress_text.set_text(progress)

        ads = self.app.config.get("ads", {})
        if item is not None and ads.get("enabled", True) and should_show_ad(state.cursor):
            slot = ad_slot_id(state.selected_group, state.cursor)
            self.ad_area.original_widget = AdSlot(slot, ads.get("code", ""))
        else:
            self.ad_area.original_widget = urwid.Text("")

        # Rebuild the word list only when the order itself changed
        if state.active_order is not self._listed_order:
            self._listed_order = state.active_order
            self.word_list.set_items([
                (i, item.word, "") for i, item in enumerate(state.active_order)
            ])
        self.word_list.mark_current(state.cursor if state.active_order else None)

    def _on_card_click(self):
        self.app.deck.session.toggle_reveal()
        self.app.refresh()

    def _on_word_select(self, index: int):
        """Jump to the chosen word."""
        try:
            self.app.deck.session.jump_to(index)
        except InvalidIndex as e:
            self.app.show_error(str(e))
            return
        self.app.refresh()
