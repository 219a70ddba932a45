"""Dataset lifecycle: loading, replacing, and the derived session."""

import logging
import random
from pathlib import Path
from typing import Optional

from vocabcards.core.errors import DataLoadFailure
from vocabcards.core.grouping import GroupIndex, build_group_index
from vocabcards.core.keys import KeyboardHandler
from vocabcards.core.models import Dataset
from vocabcards.core.session import SessionController
from vocabcards.storage.fetch import DatasetLoad
from vocabcards.storage.files import DEFAULT_TIMEOUT, parse_dataset, read_dataset_file

logger = logging.getLogger(__name__)


class DeckManager:
    """Owns the current dataset and everything derived from it.

    The GroupIndex, SessionController and KeyboardHandler are rebuilt
    whenever the dataset is replaced, so a replacement always starts a
    fresh session with no group selected.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng
        self.dataset: Optional[Dataset] = None
        self.load_error: Optional[DataLoadFailure] = None
        self._pending: Optional[DatasetLoad] = None
        self._rebuild(())

    def _rebuild(self, items: Dataset) -> None:
        self.index: GroupIndex = build_group_index(items)
        self.session = SessionController(self.index, rng=self.rng)
        self.keys = KeyboardHandler(self.session)

    @property
    def has_data(self) -> bool:
        return self.dataset is not None

    @property
    def loading(self) -> bool:
        return self._pending is not None

    @property
    def word_count(self) -> int:
        return len(self.dataset) if self.dataset else 0

    def group_sizes(self) -> list[tuple[int, int]]:
        """(group id, item count) in ascending group order."""
        return [(gid, len(self.index.items(gid))) for gid in self.index.group_ids]

    # Dataset replacement

    def replace_dataset(self, items: Dataset) -> None:
        """Install a new dataset, discarding any in-flight load."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

        self.dataset = tuple(items)
        self.load_error = None
        self._rebuild(self.dataset)
        logger.info(
            "Dataset replaced: %d words in %d groups",
            len(self.dataset), len(self.index.group_ids),
        )

    def upload_text(self, text: str) -> int:
        """Replace the dataset with uploaded JSON text. Returns word count.

        Raises InvalidUploadFormat and leaves everything unchanged when the
        text is not a valid dataset.
        """
        items = parse_dataset(text)
        self.replace_dataset(items)
        return len(items)

    def upload_file(self, path: str | Path) -> int:
        """Replace the dataset with the contents of a local file."""
        items = read_dataset_file(path)
        logger.info("Uploaded %s", path)
        self.replace_dataset(items)
        return len(items)

    # Startup load

    def begin_load(self, source: str, timeout: float = DEFAULT_TIMEOUT) -> DatasetLoad:
        """Create the pending load for source. The caller runs or starts it."""
        if self._pending is not None:
            self._pending.cancel()
        self._pending = DatasetLoad(source, timeout)
        return self._pending

    def finish_load(self, load: DatasetLoad) -> bool:
        """Apply a completed load. Returns True if the dataset changed.

        Loads that were cancelled, or that are no longer the pending one,
        are discarded.
        """
        if load.cancelled or load is not self._pending:
            logger.info("Discarding stale load of %s", load.source)
            return False

        self._pending = None
        if load.error is not None:
            # Fall back to "no data"; the user can still upload a file
            self.dataset = None
            self.load_error = load.error
            self._rebuild(())
            return False

        self.replace_dataset(load.items or ())
        return True
