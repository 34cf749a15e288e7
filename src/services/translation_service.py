"""Whole-paragraph translation service.

Unlike definitions and paragraphs there is no fallback text: every failure
is raised as a TranslationError subtype for the caller to report.
"""

import logging
from dataclasses import dataclass

from domain.model.errors import (
    TranslationError,
    TranslationInputError,
    TranslationUnavailableError,
)
from domain.model.token_usage import TokenUsage
from port.llm import LLMPort
from utils.prompts import build_translation_prompt

logger = logging.getLogger(__name__)

TRANSLATION_MAX_TOKENS = 500
TRANSLATION_TEMPERATURE = 0.3


@dataclass(frozen=True)
class Translation:
    translation: str
    usage: TokenUsage | None = None


class TranslationService:
    def __init__(self, llm: LLMPort | None):
        self.llm = llm

    @property
    def available(self) -> bool:
        return self.llm is not None

    def ensure_available(self) -> None:
        if self.llm is None:
            raise TranslationUnavailableError("OPENAI_API_KEY is not set")

    async def translate(self, text: str | None, target_lang: str) -> Translation:
        """Translate text into target_lang.

        Raises:
            TranslationUnavailableError: No provider configured.
            TranslationInputError: text is missing or blank.
            TranslationError: Provider call failed.
        """
        self.ensure_available()

        cleaned = text.strip() if isinstance(text, str) else ""
        if not cleaned:
            raise TranslationInputError("Missing text")

        try:
            content, stats = await self.llm.call(
                messages=[{"role": "user", "content": build_translation_prompt(cleaned, target_lang)}],
                max_tokens=TRANSLATION_MAX_TOKENS,
                temperature=TRANSLATION_TEMPERATURE,
            )
        except Exception as e:
            logger.error("Translation failed", extra={
                "targetLang": target_lang, "error": str(e), "errorType": type(e).__name__,
            })
            raise TranslationError(str(e) or "Translation failed") from e

        logger.info("Translation completed", extra={
            "targetLang": target_lang, "chars": len(cleaned),
        })
        return Translation(
            translation=(content or "").strip(),
            usage=stats.to_usage() if stats else None,
        )
