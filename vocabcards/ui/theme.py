"""Color theme and styling for the TUI."""

# Urwid palette for the application
# Format: (name, foreground, background, mono, foreground_high, background_high)

PALETTE = [
    # UI elements
    ("header", "white", "dark blue"),
    ("header_info", "light gray", "dark blue"),
    ("footer", "white", "dark gray"),

    # List items
    ("list_item", "white", ""),
    ("list_item_focus", "white,bold", "dark cyan"),
    ("list_item_current", "light cyan,bold", ""),

    # Card
    ("card", "white", "dark magenta"),
    ("card_word", "white,bold", "dark magenta"),
    ("card_hint", "light gray", "dark magenta"),
    ("progress", "dark gray", ""),

    # Definitions
    ("pos", "light blue", ""),
    ("definition", "white,bold", ""),
    ("synonyms_label", "light gray,bold", ""),
    ("synonyms", "light gray", ""),

    # Example sentences (rich text)
    ("sentence", "light gray", ""),
    ("sentence_bold", "white,bold", ""),
    ("sentence_italic", "light gray,italics", ""),
    ("sentence_underline", "light gray,underline", ""),
    ("sentence_mark", "black", "yellow"),

    # Ad slot
    ("ad", "dark gray", ""),

    # Status/info
    ("info", "light cyan", ""),
    ("error", "light red", ""),

    # Dialog
    ("button", "white", "dark gray"),
    ("button_focus", "white,bold", "dark blue"),
]


def get_list_attr(is_current: bool) -> str:
    """Get attribute name for a word in the jump list."""
    return "list_item_current" if is_current else "list_item"


def get_card_hint(revealed: bool) -> str:
    """Hint shown under the word on the card."""
    return "[Space]/click to hide" if revealed else "[Space]/click to reveal"
