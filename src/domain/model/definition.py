"""Definition domain models."""

from dataclasses import dataclass, field

from domain.model.token_usage import TokenUsage

# Shown in place of meanings when every lookup path failed
DEFINITION_SENTINEL = "(Could not load definition)"

MAX_MEANINGS = 2


@dataclass(frozen=True)
class DefinitionRequest:
    """A lookup for an already-normalized word."""
    word: str
    target_lang: str
    source_lang: str | None = None

    def __post_init__(self):
        if not self.word:
            raise ValueError("word must be non-empty")


@dataclass(frozen=True)
class DefinitionResult:
    """Immutable result of a definition lookup (Value Object).

    meanings always holds 1–2 non-empty strings; usage is only set when
    the provider reported token counts.
    """
    word: str
    meanings: list[str] = field(default_factory=lambda: [DEFINITION_SENTINEL])
    usage: TokenUsage | None = None

    @classmethod
    def failed(cls, word: str) -> "DefinitionResult":
        return cls(word=word, meanings=[DEFINITION_SENTINEL])

    @property
    def is_sentinel(self) -> bool:
        return self.meanings == [DEFINITION_SENTINEL]
