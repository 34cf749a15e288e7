"""Paragraph generation service.

Any failure (no provider, empty output, provider error) yields the fixed
fallback paragraph; errors are reported in-band through error_message.
"""

import logging

from domain.model.language import DEFAULT_PARAGRAPH_LANGUAGE
from domain.model.paragraph import Paragraph, clamp_difficulty
from port.llm import LLMPort
from utils.prompts import build_paragraph_prompt

logger = logging.getLogger(__name__)

PARAGRAPH_MAX_TOKENS = 200
PARAGRAPH_TEMPERATURE = 1.0


class ParagraphService:
    def __init__(self, llm: LLMPort | None):
        self.llm = llm

    async def generate(
        self,
        difficulty_level: int | str | None,
        profession: str | None = None,
        style: str | None = None,
        target_lang: str = DEFAULT_PARAGRAPH_LANGUAGE,
    ) -> Paragraph:
        """Generate a reading paragraph; never raises."""
        level = clamp_difficulty(difficulty_level)

        if self.llm is None:
            logger.info("OPENAI_API_KEY is missing or empty, using fallback paragraph")
            return Paragraph.fallback()

        prompt = build_paragraph_prompt(level, profession, style, target_lang)
        try:
            content, stats = await self.llm.call(
                messages=[{"role": "user", "content": prompt}],
                max_tokens=PARAGRAPH_MAX_TOKENS,
                temperature=PARAGRAPH_TEMPERATURE,
            )
            content = (content or "").strip()
            if not content:
                raise ValueError("Empty response from LLM")
        except Exception as e:
            message = str(e) or "Unknown error"
            logger.error("Paragraph generation failed, using fallback", extra={
                "difficulty": level, "targetLang": target_lang,
                "error": message, "errorType": type(e).__name__,
                "status": getattr(e, "status_code", None),
            })
            return Paragraph.fallback(error_message=message)

        logger.info("LLM OK, new paragraph generated", extra={
            "difficulty": level, "targetLang": target_lang,
            "hasProfession": bool(profession and profession.strip()),
            "hasStyle": bool(style and style.strip()),
        })
        return Paragraph.create(content, usage=stats.to_usage() if stats else None)
