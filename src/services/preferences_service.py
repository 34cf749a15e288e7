"""Reader preferences: definition language, paragraph language, sentence style."""

from domain.model.language import (
    DEFAULT_DEFINITION_LANGUAGE,
    DEFAULT_PARAGRAPH_LANGUAGE,
    resolve_language,
)
from domain.model.saved_word import Preferences
from port.storage import KeyValueStorage

DEF_LANG_STORAGE_KEY = "definition_language_v1"
PARAGRAPH_LANG_STORAGE_KEY = "paragraph_language_v1"
SENTENCE_STYLE_STORAGE_KEY = "sentence_style_v1"


class PreferencesService:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def get(self) -> Preferences:
        return Preferences(
            definition_language=resolve_language(
                self.storage.get(DEF_LANG_STORAGE_KEY), DEFAULT_DEFINITION_LANGUAGE,
            ),
            paragraph_language=resolve_language(
                self.storage.get(PARAGRAPH_LANG_STORAGE_KEY), DEFAULT_PARAGRAPH_LANGUAGE,
            ),
            sentence_style=self.storage.get(SENTENCE_STYLE_STORAGE_KEY) or "",
        )

    def update(
        self,
        definition_language: str | None = None,
        paragraph_language: str | None = None,
        sentence_style: str | None = None,
    ) -> Preferences:
        """Write only the fields that were given; each is stored independently."""
        if definition_language is not None:
            self.storage.set(
                DEF_LANG_STORAGE_KEY,
                resolve_language(definition_language, DEFAULT_DEFINITION_LANGUAGE),
            )
        if paragraph_language is not None:
            self.storage.set(
                PARAGRAPH_LANG_STORAGE_KEY,
                resolve_language(paragraph_language, DEFAULT_PARAGRAPH_LANGUAGE),
            )
        if sentence_style is not None:
            style = sentence_style.strip()
            if style:
                self.storage.set(SENTENCE_STYLE_STORAGE_KEY, style)
            else:
                self.storage.remove(SENTENCE_STYLE_STORAGE_KEY)
        return self.get()
