"""Background loading of the startup dataset."""

import logging
import threading
from typing import Callable, Optional

from vocabcards.core.errors import DataLoadFailure
from vocabcards.core.models import Dataset
from vocabcards.storage.files import DEFAULT_TIMEOUT, load_dataset

logger = logging.getLogger(__name__)


class DatasetLoad:
    """One fetch of the dataset, run off the UI thread.

    The result is only read back on the UI thread. A load that was
    cancelled before it finished must not be applied.
    """

    def __init__(self, source: str, timeout: float = DEFAULT_TIMEOUT, loader=load_dataset):
        self.source = source
        self.timeout = timeout
        self._loader = loader
        self.items: Optional[Dataset] = None
        self.error: Optional[DataLoadFailure] = None
        self.cancelled = False
        self.done = False
        self._thread: Optional[threading.Thread] = None

    def cancel(self) -> None:
        """Mark the load as superseded."""
        if not self.cancelled:
            logger.info("Cancelled load of %s", self.source)
        self.cancelled = True

    def run(self) -> None:
        """Fetch synchronously, capturing the result or the failure."""
        try:
            self.items = self._loader(self.source, self.timeout)
        except DataLoadFailure as e:
            logger.warning("Load of %s failed: %s", self.source, e)
            self.error = e
        except Exception as e:
            logger.exception("Unexpected error loading %s", self.source)
            self.error = DataLoadFailure(f"Could not load {self.source}: {e!r}")
        finally:
            self.done = True

    def start(self, on_done: Callable[["DatasetLoad"], None]) -> None:
        """Run in a daemon thread and call on_done(self) from that thread."""
        def worker():
            try:
                self.run()
            finally:
                on_done(self)

        self._thread = threading.Thread(target=worker, daemon=True)
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
