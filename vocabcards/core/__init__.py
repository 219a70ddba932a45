"""Core flashcard logic - UI independent."""
from .ads import should_show_ad, ad_slot_id
from .errors import (
    FlashcardError,
    DataLoadFailure,
    InvalidUploadFormat,
    InvalidGroupSelection,
    InvalidIndex,
)
from .grouping import GroupIndex, build_group_index
from .keys import KeyboardHandler
from .models import Definition, VocabItem
from .session import SessionController, SessionState
from .shuffle import shuffle_items

# Note: DeckManager is imported directly where needed; it pulls in the
# storage module

__all__ = [
    "should_show_ad",
    "ad_slot_id",
    "FlashcardError",
    "DataLoadFailure",
    "InvalidUploadFormat",
    "InvalidGroupSelection",
    "InvalidIndex",
    "GroupIndex",
    "build_group_index",
    "KeyboardHandler",
    "Definition",
    "VocabItem",
    "SessionController",
    "SessionState",
    "shuffle_items",
]
