"""Error types raised by the flashcard core."""


class FlashcardError(Exception):
    """Base class for flashcard errors."""
    pass


class DataLoadFailure(FlashcardError):
    """The startup dataset could not be read, fetched or parsed."""
    pass


class InvalidUploadFormat(FlashcardError):
    """Uploaded content is not a JSON array of well-formed entries."""
    pass


class InvalidGroupSelection(FlashcardError):
    """A group id that is not in the current index was selected."""

    def __init__(self, group_id):
        super().__init__(f"No such group: {group_id}")
        self.group_id = group_id


class InvalidIndex(FlashcardError):
    """A jump target outside the active order."""

    def __init__(self, index: int, length: int):
        if length:
            message = f"Index {index} out of range (0..{length - 1})"
        else:
            message = f"Index {index} out of range: there are no cards"
        super().__init__(message)
        self.index = index
        self.length = length
