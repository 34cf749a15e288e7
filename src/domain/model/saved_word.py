"""Saved word list and reader preference models."""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

from domain.model.language import DEFAULT_DEFINITION_LANGUAGE, DEFAULT_PARAGRAPH_LANGUAGE


@dataclass(frozen=True)
class SavedWord:
    """A word the user tapped, keyed case-insensitively by `word`."""
    word: str
    meaning: str
    date_added: str

    @staticmethod
    def create(word: str, meaning: str, today: date | None = None) -> 'SavedWord':
        return SavedWord(
            word=word.lower(),
            meaning=meaning,
            date_added=(today or date.today()).isoformat(),
        )

    def matches(self, word: str) -> bool:
        return self.word.lower() == word.lower()

    def to_dict(self) -> dict[str, str]:
        return {"word": self.word, "meaning": self.meaning, "dateAdded": self.date_added}

    @classmethod
    def from_dict(cls, data: Any) -> 'SavedWord | None':
        """Parse a stored item; returns None for anything malformed."""
        if not isinstance(data, dict):
            return None
        word = data.get("word")
        if not isinstance(word, str) or not word:
            return None
        meaning = data.get("meaning")
        date_added = data.get("dateAdded")
        return cls(
            word=word,
            meaning=meaning if isinstance(meaning, str) else "",
            date_added=date_added if isinstance(date_added, str) else "",
        )


@dataclass(frozen=True)
class Preferences:
    """The reader's three persisted preference scalars."""
    definition_language: str = DEFAULT_DEFINITION_LANGUAGE
    paragraph_language: str = DEFAULT_PARAGRAPH_LANGUAGE
    sentence_style: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
