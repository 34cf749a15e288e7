"""Paragraph domain models and difficulty rules."""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from domain.model.token_usage import TokenUsage

FALLBACK_ID = "fallback"

FALLBACK_PARAGRAPH = (
    "Morning light filled the kitchen as the smell of fresh coffee drifted through the house. "
    "Outside the window, a small bird sat on the fence and watched the garden below. "
    "The grass was still wet from the rain that had fallen during the night. "
    "A few clouds moved slowly across the sky, but the sun was warm and bright. "
    "It felt like the kind of day when everything moves at a gentle pace. "
    "People walked their dogs along the quiet street, and children rode their bikes on the sidewalk. "
    "The neighborhood was calm and peaceful, just like any other ordinary morning."
)

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 10
DEFAULT_DIFFICULTY = 5


class DifficultyTier:
    """Difficulty 1–10 mapped onto five vocabulary/sentence-length tiers."""

    ELEMENTARY = "elementary"
    EASY = "easy"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    VERY_ADVANCED = "very_advanced"

    @staticmethod
    def for_level(level: int) -> str:
        """Tier for a difficulty level (clamped first).

        Examples:
            DifficultyTier.for_level(1)   → 'elementary'
            DifficultyTier.for_level(6)   → 'intermediate'
            DifficultyTier.for_level(15)  → 'very_advanced'
        """
        n = clamp_difficulty(level)
        if n <= 2:
            return DifficultyTier.ELEMENTARY
        if n <= 4:
            return DifficultyTier.EASY
        if n <= 6:
            return DifficultyTier.INTERMEDIATE
        if n <= 8:
            return DifficultyTier.ADVANCED
        return DifficultyTier.VERY_ADVANCED


def clamp_difficulty(value: int | float | str | None) -> int:
    """Clamp a difficulty to [1, 10]; unparseable or missing values give 5.

    Numeric strings are truncated toward zero, so "7.5" reads as 7.
    """
    try:
        n = int(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_DIFFICULTY
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, n))


@dataclass(frozen=True)
class ParagraphRequest:
    difficulty_level: int
    profession: str | None = None
    style: str | None = None
    target_lang: str = "en"

    @staticmethod
    def build(
        difficulty: int | str | None,
        profession: str | None = None,
        style: str | None = None,
        target_lang: str = "en",
    ) -> 'ParagraphRequest':
        """Clamp difficulty and drop blank free-text fields."""
        return ParagraphRequest(
            difficulty_level=clamp_difficulty(difficulty),
            profession=(profession or "").strip() or None,
            style=(style or "").strip() or None,
            target_lang=target_lang,
        )


@dataclass(frozen=True)
class Paragraph:
    """A generated (or fallback) reading paragraph."""
    id: str
    created_at: datetime
    content: str
    is_fallback: bool = False
    error_message: str | None = None
    usage: TokenUsage | None = None

    @staticmethod
    def create(content: str, usage: TokenUsage | None = None) -> 'Paragraph':
        return Paragraph(
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            content=content,
            usage=usage,
        )

    @staticmethod
    def fallback(error_message: str | None = None) -> 'Paragraph':
        return Paragraph(
            id=FALLBACK_ID,
            created_at=datetime.now(timezone.utc),
            content=FALLBACK_PARAGRAPH,
            is_fallback=True,
            error_message=error_message,
        )
