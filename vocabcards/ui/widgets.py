"""Custom urwid widgets for the flashcard viewer."""

import urwid

from vocabcards.core.models import Definition, VocabItem
from vocabcards.core.rich_text import sentence_markup
from vocabcards.ui.theme import get_card_hint, get_list_attr


class ListItem(urwid.WidgetWrap):
    """A selectable list item."""

    def __init__(self, id, title: str, subtitle: str = "", on_select=None):
        self.id = id
        self.title = title
        self.subtitle = subtitle
        self.on_select = on_select

        # Create the display
        if subtitle:
            text = f"{title}  {subtitle}"
        else:
            text = title

        self.text_widget = urwid.Text(text)
        self.attr_map = urwid.AttrMap(
            self.text_widget,
            "list_item",
            focus_map="list_item_focus"
        )
        super().__init__(self.attr_map)

    def set_current(self, is_current: bool):
        """Highlight the item that matches the session cursor."""
        self.attr_map.set_attr_map({None: get_list_attr(is_current)})

    def selectable(self):
        return True

    def keypress(self, size, key):
        if key == "enter" and self.on_select:
            self.on_select(self.id)
            return None
        return key

    def mouse_event(self, size, event, button, col, row, focus):
        if event == "mouse press" and button == 1 and self.on_select:
            self.on_select(self.id)
            return True
        return False


class ListBrowser(urwid.WidgetWrap):
    """A scrollable list browser widget."""

    def __init__(self, on_select=None):
        self.on_select = on_select
        self.items = []
        self.walker = urwid.SimpleFocusListWalker([])
        self.listbox = urwid.ListBox(self.walker)
        super().__init__(self.listbox)

    def set_items(self, items: list[tuple]):
        """Set list items. Each item is (id, title, subtitle)."""
        self.items = items
        self.walker.clear()

        for id, title, subtitle in items:
            item = ListItem(id, title, subtitle, on_select=self.on_select)
            self.walker.append(item)

    def mark_current(self, position: int | None):
        """Highlight the item at position and scroll it into view."""
        for i, widget in enumerate(self.walker):
            widget.set_current(i == position)
        if position is not None and 0 <= position < len(self.walker):
            self.walker.set_focus(position)


def definition_widgets(definition: Definition) -> list[urwid.Widget]:
    """Text widgets for one definition: part of speech, text, sentence, synonyms."""
    widgets = [
        urwid.Text(("pos", definition.part_of_speech.upper())),
        urwid.Text(("definition", definition.definition)),
    ]

    markup = sentence_markup(definition.sentence)
    if markup:
        widgets.append(urwid.Text(markup))

    if definition.synonyms:
        widgets.append(urwid.Text([
            ("synonyms_label", "Synonyms: "),
            ("synonyms", ", ".join(definition.synonyms)),
        ]))

    widgets.append(urwid.Divider())
    return widgets


class CardFace(urwid.WidgetWrap):
    """The flashcard. Clicking it toggles the definitions."""

    def __init__(self, on_click=None):
        self.on_click = on_click

        self.word_text = urwid.Text("", align="center")
        self.hint_text = urwid.Text("", align="center")

        pile = urwid.Pile([
            urwid.Divider(),
            urwid.AttrMap(self.word_text, "card_word"),
            urwid.Divider(),
            urwid.AttrMap(self.hint_text, "card_hint"),
            urwid.Divider(),
        ])
        super().__init__(urwid.AttrMap(urwid.LineBox(pile), "card"))

    def show(self, item: VocabItem | None, revealed: bool):
        """Display item, or the empty-group message when item is None."""
        if item is None:
            self.word_text.set_text("No items in this group.")
            self.hint_text.set_text("")
            return

        self.word_text.set_text(item.word)
        self.hint_text.set_text(get_card_hint(revealed))

    def mouse_event(self, size, event, button, col, row, focus):
        if event == "mouse press" and button == 1 and self.on_click:
            self.on_click()
            return True
        return False


class AdSlot(urwid.WidgetWrap):
    """Placeholder for the external ad widget."""

    def __init__(self, slot_id: str, code: str = ""):
        self.slot_id = slot_id
        self.code = code

        lines = [("ad", f"[{slot_id}]")]
        if code:
            lines.append(("ad", f"\n{code}"))
        text = urwid.Text(lines, align="center")
        super().__init__(urwid.LineBox(text, title="Sponsored"))


class HeaderBar(urwid.WidgetWrap):
    """Title bar with dataset summary."""

    def __init__(self, title: str):
        self.title_text = urwid.Text(f" {title}")
        self.info_text = urwid.Text("", align="right")

        columns = urwid.Columns([
            self.title_text,
            urwid.AttrMap(self.info_text, "header_info"),
        ])
        super().__init__(urwid.AttrMap(columns, "header"))

    def set_counts(self, words: int | None, groups: int = 0):
        """Show "N words • M groups", or nothing when there is no data."""
        if words is None:
            self.info_text.set_text("")
        else:
            self.info_text.set_text(f"{words:,} words • {groups} groups ")


class StatusBar(urwid.WidgetWrap):
    """A status bar showing hints and messages."""

    def __init__(self, text: str = ""):
        self.text_widget = urwid.Text(text)
        widget = urwid.AttrMap(self.text_widget, "footer")
        super().__init__(widget)

    def set_text(self, text: str):
        """Set the status text."""
        self.text_widget.set_text(text)

    def set_error(self, text: str):
        """Show an error message."""
        self.text_widget.set_text(("error", text))
