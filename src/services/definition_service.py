"""Definition lookup service — orchestrates provider call and fallbacks.

Pipeline: provider (if configured) → parse 1–2 lines
Falls back to the public English dictionary when the target is English and
no source language was given; otherwise to the sentinel definition.
"""

import logging

from domain.model.definition import MAX_MEANINGS, DefinitionResult
from domain.model.language import ENGLISH
from port.dictionary import DictionaryPort
from port.llm import LLMPort
from utils.prompts import build_definition_prompt

logger = logging.getLogger(__name__)

DEFINITION_MAX_TOKENS = 60
DEFINITION_TEMPERATURE = 0.3


def parse_meanings(content: str, limit: int = MAX_MEANINGS) -> list[str]:
    """Split provider output into at most `limit` non-empty trimmed lines."""
    lines = [line.strip() for line in content.splitlines()]
    return [line for line in lines if line][:limit]


class DefinitionService:
    """Resolves short definitions for a tapped word.

    llm is None when no provider credential is configured; in that case no
    provider call is ever attempted.
    """

    def __init__(self, llm: LLMPort | None, dictionary: DictionaryPort):
        self.llm = llm
        self.dictionary = dictionary

    async def resolve(
        self,
        word: str,
        target_lang: str,
        source_lang: str | None = None,
    ) -> DefinitionResult:
        """Return 1–2 meanings for word in target_lang; never raises."""
        if self.llm is None:
            logger.debug("No provider configured, using definition fallback", extra={
                "word": word, "targetLang": target_lang, "sourceLang": source_lang,
            })
            return await self._fallback(word, target_lang, source_lang)

        prompt = build_definition_prompt(word, target_lang, source_lang)
        try:
            content, stats = await self.llm.call(
                messages=[{"role": "user", "content": prompt}],
                max_tokens=DEFINITION_MAX_TOKENS,
                temperature=DEFINITION_TEMPERATURE,
            )
        except Exception as e:
            logger.warning("Definition provider call failed", extra={
                "word": word, "targetLang": target_lang,
                "error": str(e), "errorType": type(e).__name__,
            })
            return await self._fallback(word, target_lang, source_lang)

        meanings = parse_meanings(content)
        if not meanings:
            logger.warning("Definition provider returned no usable lines", extra={"word": word})
            return await self._fallback(word, target_lang, source_lang)

        logger.info("Word definition resolved", extra={
            "word": word, "targetLang": target_lang, "sourceLang": source_lang,
            "meaningCount": len(meanings), "source": "llm",
        })
        return DefinitionResult(
            word=word,
            meanings=meanings,
            usage=stats.to_usage() if stats else None,
        )

    async def _fallback(
        self,
        word: str,
        target_lang: str,
        source_lang: str | None,
    ) -> DefinitionResult:
        """Dictionary lookup for plain English→English, sentinel otherwise."""
        if target_lang != ENGLISH.code or source_lang is not None:
            return DefinitionResult.failed(word)

        try:
            definitions = await self.dictionary.lookup(word, limit=MAX_MEANINGS)
        except Exception as e:
            logger.warning("Dictionary fallback failed", extra={"word": word, "error": str(e)})
            return DefinitionResult.failed(word)

        meanings = [d for d in definitions if d and d.strip()][:MAX_MEANINGS]
        if not meanings:
            return DefinitionResult.failed(word)

        logger.info("Word definition resolved", extra={
            "word": word, "targetLang": target_lang,
            "meaningCount": len(meanings), "source": "dictionary",
        })
        return DefinitionResult(word=word, meanings=meanings)
