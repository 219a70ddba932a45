"""Data models for the flashcard viewer."""

from dataclasses import dataclass, field
from typing import Optional

from vocabcards.core.errors import InvalidUploadFormat


@dataclass(frozen=True)
class Definition:
    """One sense of a word."""
    part_of_speech: str
    definition: str
    sentence: Optional[str] = None  # inline HTML, sanitized at render time
    synonyms: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            "part_of_speech": self.part_of_speech,
            "definition": self.definition,
        }
        if self.sentence is not None:
            data["sentence"] = self.sentence
        if self.synonyms:
            data["synonyms"] = list(self.synonyms)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Definition":
        """Create from dictionary."""
        if not isinstance(data, dict):
            raise InvalidUploadFormat("definition must be an object")

        part_of_speech = data.get("part_of_speech")
        definition = data.get("definition")
        if not isinstance(definition, str):
            raise InvalidUploadFormat("definition text missing")
        if not isinstance(part_of_speech, str):
            raise InvalidUploadFormat("part_of_speech missing")

        sentence = data.get("sentence")
        if sentence is not None and not isinstance(sentence, str):
            raise InvalidUploadFormat("sentence must be a string")

        synonyms = data.get("synonyms")
        if synonyms is None:
            synonyms = []
        if not isinstance(synonyms, list) or not all(isinstance(s, str) for s in synonyms):
            raise InvalidUploadFormat("synonyms must be a list of strings")

        return cls(
            part_of_speech=part_of_speech,
            definition=definition,
            sentence=sentence or None,
            synonyms=tuple(synonyms),
        )


@dataclass(frozen=True)
class VocabItem:
    """A single flashcard entry."""
    key: int
    group: int
    word: str
    definitions: tuple[Definition, ...]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "key": self.key,
            "group": self.group,
            "word": self.word,
            "definitions": [d.to_dict() for d in self.definitions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VocabItem":
        """Create from dictionary.

        Raises InvalidUploadFormat when a required field is missing or has
        the wrong type.
        """
        if not isinstance(data, dict):
            raise InvalidUploadFormat("each entry must be an object")

        key = data.get("key")
        group = data.get("group")
        word = data.get("word")

        # bool is an int subclass; reject it explicitly
        if not isinstance(key, int) or isinstance(key, bool):
            raise InvalidUploadFormat(f"entry {word!r}: key must be an integer")
        if not isinstance(group, int) or isinstance(group, bool):
            raise InvalidUploadFormat(f"entry {key}: group must be an integer")
        if not isinstance(word, str):
            raise InvalidUploadFormat(f"entry {key}: word must be a string")

        raw_definitions = data.get("definitions")
        if not isinstance(raw_definitions, list) or not raw_definitions:
            raise InvalidUploadFormat(f"entry {key}: definitions must be a non-empty list")

        return cls(
            key=key,
            group=group,
            word=word,
            definitions=tuple(Definition.from_dict(d) for d in raw_definitions),
        )


Dataset = tuple[VocabItem, ...]
