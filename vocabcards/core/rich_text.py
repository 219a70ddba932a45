"""Render example sentences with a restricted subset of inline HTML.

Sentences in the dataset may carry markup such as ``<b>word</b>``. Only a
handful of inline tags are honoured; everything else is dropped while its
text content is kept, so a crafted upload cannot inject anything beyond
emphasis.
"""

from html.parser import HTMLParser

# tag -> palette attribute
ALLOWED_TAGS = {
    "b": "sentence_bold",
    "strong": "sentence_bold",
    "i": "sentence_italic",
    "em": "sentence_italic",
    "u": "sentence_underline",
    "mark": "sentence_mark",
}

LINE_BREAK_TAGS = {"br"}

# Content of these tags is never shown
SKIPPED_TAGS = {"script", "style", "iframe", "object"}

BASE_ATTR = "sentence"


class _SentenceMarkup(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.markup: list[tuple[str, str]] = []
        self._open: list[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in SKIPPED_TAGS:
            self._skip_depth += 1
        elif tag in LINE_BREAK_TAGS:
            self._append("\n")
        elif tag in ALLOWED_TAGS:
            self._open.append(tag)

    def handle_startendtag(self, tag, attrs):
        if tag in LINE_BREAK_TAGS:
            self._append("\n")

    def handle_endtag(self, tag):
        if tag in SKIPPED_TAGS:
            self._skip_depth = max(self._skip_depth - 1, 0)
            return
        for i in range(len(self._open) - 1, -1, -1):
            if self._open[i] == tag:
                del self._open[i]
                break

    def handle_data(self, data):
        if not self._skip_depth:
            self._append(data)

    def _append(self, text: str):
        attr = ALLOWED_TAGS[self._open[-1]] if self._open else BASE_ATTR
        # Merge adjacent runs with the same attribute
        if self.markup and self.markup[-1][0] == attr:
            self.markup[-1] = (attr, self.markup[-1][1] + text)
        else:
            self.markup.append((attr, text))


def sentence_markup(raw: str | None) -> list[tuple[str, str]]:
    """Convert a sentence to urwid text markup: a list of (attr, text)."""
    if not raw:
        return []
    parser = _SentenceMarkup()
    parser.feed(raw)
    parser.close()
    return [(attr, text) for attr, text in parser.markup if text]

