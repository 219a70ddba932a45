"""Study session state machine.

A session is either in the "no group selected" state (``selected_group`` is
None) or has a group selected with an active card order, a cursor into that
order and a reveal flag. Every operation replaces the whole SessionState so
no caller ever observes a half-applied transition.
"""

import random
from dataclasses import dataclass, replace
from typing import Optional

from vocabcards.core.errors import InvalidGroupSelection, InvalidIndex
from vocabcards.core.grouping import GroupIndex
from vocabcards.core.models import VocabItem
from vocabcards.core.shuffle import shuffle_items


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the current study session."""
    selected_group: Optional[int] = None
    active_order: tuple[VocabItem, ...] = ()
    cursor: int = 0
    revealed: bool = False
    shuffled: bool = False

    @property
    def is_group_selected(self) -> bool:
        return self.selected_group is not None


NO_GROUP = SessionState()


class SessionController:
    """Owns the SessionState for one GroupIndex."""

    def __init__(self, index: GroupIndex, rng: Optional[random.Random] = None):
        self.index = index
        self.rng = rng
        self.state = NO_GROUP

    @property
    def is_group_selected(self) -> bool:
        return self.state.is_group_selected

    def _navigate(self, cursor: int) -> SessionState:
        self.state = replace(self.state, cursor=cursor, revealed=False)
        return self.state

    def select_group(self, group_id: Optional[int]) -> SessionState:
        """Select a group in canonical order, or reset when group_id is None."""
        if group_id is None:
            return self.reset()
        if group_id not in self.index:
            raise InvalidGroupSelection(group_id)

        self.state = SessionState(
            selected_group=group_id,
            active_order=self.index.items(group_id),
        )
        return self.state

    def shuffle_current_group(self) -> SessionState:
        """Replace the active order with a fresh shuffle of the canonical order."""
        if not self.is_group_selected:
            return self.state

        canonical = self.index.items(self.state.selected_group)
        self.state = replace(
            self.state,
            active_order=tuple(shuffle_items(canonical, self.rng)),
            cursor=0,
            revealed=False,
            shuffled=True,
        )
        return self.state

    def unshuffle(self) -> SessionState:
        """Go back to the canonical order of the selected group."""
        if not self.is_group_selected:
            return self.state
        return self.select_group(self.state.selected_group)

    def advance(self) -> SessionState:
        """Next card, clamped at the last one.

        The reveal flag is cleared even when the cursor is already at the end.
        """
        if not self.is_group_selected:
            return self.state
        last = max(len(self.state.active_order) - 1, 0)
        return self._navigate(min(self.state.cursor + 1, last))

    def retreat(self) -> SessionState:
        """Previous card, clamped at the first one."""
        if not self.is_group_selected:
            return self.state
        return self._navigate(max(self.state.cursor - 1, 0))

    def jump_to(self, index: int) -> SessionState:
        """Move the cursor directly to index."""
        if not self.is_group_selected:
            return self.state
        length = len(self.state.active_order)
        if not 0 <= index < length:
            raise InvalidIndex(index, length)
        return self._navigate(index)

    def toggle_reveal(self) -> SessionState:
        if not self.is_group_selected:
            return self.state
        self.state = replace(self.state, revealed=not self.state.revealed)
        return self.state

    def current_item(self) -> Optional[VocabItem]:
        """The card under the cursor, or None when there is nothing to show."""
        if not self.state.active_order:
            return None
        return self.state.active_order[self.state.cursor]

    def position(self) -> tuple[int, int]:
        """1-based card number and total, (0, 0) when the order is empty."""
        total = len(self.state.active_order)
        if not total:
            return 0, 0
        return self.state.cursor + 1, total

    def reset(self) -> SessionState:
        self.state = NO_GROUP
        return self.state
