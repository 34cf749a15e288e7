
"""Reader session: what happens when the reader refreshes, taps or translates.

This is the client-side orchestration API for an embedding front end (a
desktop or notebook reader driving the services in-process). The HTTP app
does not use it: each route is one stateless request, while a session
holds the state of one open reader view.

Ties tokenizer, normalizer and the three provider-backed services to one
client's ledger, word list and preferences. Definition lookups are tagged
with a generation counter; a response that arrives after a newer tap (or a
paragraph refresh) is dropped instead of overwriting newer state.
"""

import logging
import re

from domain.model.definition import DefinitionResult
from domain.model.errors import TranslationError
from domain.model.paragraph import Paragraph
from services.definition_service import DefinitionService
from services.paragraph_service import ParagraphService
from services.preferences_service import PreferencesService
from services.translation_service import TranslationService
from services.usage_ledger import UsageLedger
from services.word_list_service import WordListService
from utils.normalizer import is_actionable, normalize
from utils.tokenizer import tokenize

logger = logging.getLogger(__name__)

TRANSLATION_UNAVAILABLE_TEXT = "(Could not load translation.)"

_RATE_LIMIT_RE = re.compile(r"rate limit|429", re.IGNORECASE)


class FallbackNotice:
    RATE_LIMIT = "rate_limit"
    PROVIDER_ERROR = "provider_error"
    NOT_CONFIGURED = "not_configured"


def fallback_notice(paragraph: Paragraph | None) -> str | None:
    """How a fallback paragraph should be framed to the reader, or None."""
    if paragraph is None or not paragraph.is_fallback:
        return None
    if not paragraph.error_message:
        return FallbackNotice.NOT_CONFIGURED
    if _RATE_LIMIT_RE.search(paragraph.error_message):
        return FallbackNotice.RATE_LIMIT
    return FallbackNotice.PROVIDER_ERROR


class ReaderSession:
    def __init__(
        self,
        definitions: DefinitionService,
        paragraphs: ParagraphService,
        translator: TranslationService,
        ledger: UsageLedger,
        words: WordListService,
        preferences: PreferencesService,
    ):
        self.definitions = definitions
        self.paragraphs = paragraphs
        self.translator = translator
        self.ledger = ledger
        self.words = words
        self.preferences = preferences

        self.paragraph: Paragraph | None = None
        self.selected_word: str | None = None
        self.definition: DefinitionResult | None = None
        self.translation: str | None = None
        self._generation = 0

    @property
    def tokens(self) -> list[str]:
        if self.paragraph is None:
            return []
        return tokenize(self.paragraph.content)

    async def refresh(self, difficulty_level: int = 5, profession: str | None = None) -> Paragraph:
        """Load a new paragraph and clear selection, definition and translation."""
        self._generation += 1
        self.selected_word = None
        self.definition = None
        self.translation = None

        prefs = self.preferences.get()
        paragraph = await self.paragraphs.generate(
            difficulty_level,
            profession=profession,
            style=prefs.sentence_style or None,
            target_lang=prefs.paragraph_language,
        )
        self.paragraph = paragraph
        self.ledger.record(paragraph.usage)
        return paragraph

    async def click(self, raw_token: str) -> DefinitionResult | None:
        """Look up a tapped token.

        Returns None when the token is not a word, or when a newer tap or
        refresh superseded this lookup before it finished.
        """
        word = normalize(raw_token)
        if not is_actionable(word):
            return None

        self._generation += 1
        generation = self._generation
        self.selected_word = word
        self.definition = None

        prefs = self.preferences.get()
        result = await self.definitions.resolve(
            word,
            target_lang=prefs.definition_language,
            source_lang=prefs.paragraph_language,
        )

        if generation != self._generation or self.selected_word != word:
            logger.debug("Discarding stale definition", extra={"word": word})
            return None

        self.definition = result
        self.ledger.record(result.usage)
        if not self.words.is_saved(word):
            self.words.save(word, result.meanings[0] if result.meanings else "")
        return result

    def close_definition(self) -> None:
        self._generation += 1
        self.selected_word = None
        self.definition = None

    async def translate_paragraph(self) -> str | None:
        """Translate the current paragraph into the definition language."""
        if self.paragraph is None or not self.paragraph.content.strip():
            return None

        prefs = self.preferences.get()
        try:
            result = await self.translator.translate(self.paragraph.content, prefs.definition_language)
        except TranslationError as e:
            logger.info("Paragraph translation unavailable", extra={"error": str(e)})
            self.translation = TRANSLATION_UNAVAILABLE_TEXT
            return self.translation

        self.translation = result.translation or TRANSLATION_UNAVAILABLE_TEXT
        self.ledger.record(result.usage)
        return self.translation

    def is_saved(self, token: str) -> bool:
        word = normalize(token)
        return bool(word) and self.words.is_saved(word)
