"""Keyboard shortcuts for the card view."""

from vocabcards.core.session import SessionController


class KeyboardHandler:
    """Map urwid key names to session operations.

    Keys are only interpreted while a group is selected. Each key invokes
    exactly one controller operation.
    """

    BINDINGS = {
        "right": "advance",
        "left": "retreat",
        " ": "toggle_reveal",
        "esc": "reset",
        "s": "shuffle_current_group",
        "u": "unshuffle",
    }

    def __init__(self, controller: SessionController):
        self.controller = controller

    def handle(self, key) -> bool:
        """Run the operation bound to key. Returns True if the key was consumed."""
        # Mouse events and other special input arrive as tuples
        if not isinstance(key, str):
            return False
        if not self.controller.is_group_selected:
            return False

        operation = self.BINDINGS.get(key)
        if operation is None:
            return False

        getattr(self.controller, operation)()
        return True
