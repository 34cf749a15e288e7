"""Saved word list, newest first, unique case-insensitively."""

import json
import logging
from datetime import date

from domain.model.saved_word import SavedWord
from port.storage import KeyValueStorage

logger = logging.getLogger(__name__)

WORDS_STORAGE_KEY = "my_words_v1"


class WordListService:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def list_words(self) -> list[SavedWord]:
        raw = self.storage.get(WORDS_STORAGE_KEY)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except ValueError:
            logger.warning("Stored word list is corrupt, reading as empty")
            return []
        if not isinstance(items, list):
            return []
        words = [SavedWord.from_dict(item) for item in items]
        return [w for w in words if w is not None]

    def _store(self, words: list[SavedWord]) -> None:
        self.storage.set(WORDS_STORAGE_KEY, json.dumps([w.to_dict() for w in words], ensure_ascii=False))

    def is_saved(self, word: str) -> bool:
        return any(w.matches(word) for w in self.list_words())

    def save(self, word: str, meaning: str, today: date | None = None) -> list[SavedWord]:
        """Prepend word unless already saved; returns the resulting list."""
        words = self.list_words()
        if not word or any(w.matches(word) for w in words):
            return words
        updated = [SavedWord.create(word, meaning, today), *words]
        self._store(updated)
        logger.info("Word saved", extra={"word": word.lower(), "count": len(updated)})
        return updated

    def remove(self, word: str) -> list[SavedWord]:
        words = self.list_words()
        remaining = [w for w in words if not w.matches(word)]
        if len(remaining) != len(words):
            self._store(remaining)
        return remaining
