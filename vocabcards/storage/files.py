"""Reading vocabulary datasets from JSON files and URLs."""

import json
import logging
from pathlib import Path

import requests

from vocabcards.core.errors import DataLoadFailure, InvalidUploadFormat
from vocabcards.core.models import Dataset, VocabItem

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def is_url(source: str) -> bool:
    """Check if a dataset source is an http(s) URL rather than a path."""
    return source.startswith(("http://", "https://"))


def parse_dataset(text: str) -> Dataset:
    """Parse dataset JSON text.

    Raises InvalidUploadFormat if the text is not a JSON array of
    well-formed entries, or if two entries share a key.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidUploadFormat(f"Not valid JSON: {e}") from e
    except RecursionError as e:
        raise InvalidUploadFormat("JSON is nested too deeply") from e

    return dataset_from_list(data)


def dataset_from_list(data) -> Dataset:
    """Build a Dataset from already-decoded JSON."""
    if not isinstance(data, list):
        raise InvalidUploadFormat("Expected a JSON array of words")

    items = tuple(VocabItem.from_dict(entry) for entry in data)

    seen: set[int] = set()
    for item in items:
        if item.key in seen:
            raise InvalidUploadFormat(f"Duplicate key: {item.key}")
        seen.add(item.key)

    return items


def read_dataset_file(path: str | Path) -> Dataset:
    """Read a user-supplied dataset file."""
    path = Path(path).expanduser()
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidUploadFormat(f"Could not read {path}: {e}") from e

    return parse_dataset(text)


def load_dataset(source: str, timeout: float = DEFAULT_TIMEOUT) -> Dataset:
    """Load the startup dataset from a path or URL.

    Any failure is reported as DataLoadFailure.
    """
    try:
        if is_url(source):
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
            text = response.text
        else:
            with open(Path(source).expanduser(), "r", encoding="utf-8") as f:
                text = f.read()
        items = parse_dataset(text)
    except requests.RequestException as e:
        raise DataLoadFailure(f"Could not fetch {source}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DataLoadFailure(f"Could not read {source}: {e}") from e
    except InvalidUploadFormat as e:
        raise DataLoadFailure(f"Bad data in {source}: {e}") from e

    logger.info("Loaded %d words from %s", len(items), source)
    return items
