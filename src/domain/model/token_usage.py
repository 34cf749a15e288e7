"""Domain models for LLM call results and token usage accounting."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LLMCallResult:
    """Result from a single LLM API call (Value Object).

    Attributes:
        model: The model name used for the API call.
        prompt_tokens: Number of tokens in the prompt/input.
        completion_tokens: Number of tokens in the completion/output.
        total_tokens: Total tokens reported by the provider.
        estimated_cost: Provider-side cost estimate in USD (0.0 if unknown).
        provider: Optional provider name (e.g., "openai", "anthropic").
    """
    model: str
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    estimated_cost: float = 0.0
    provider: str | None = field(default=None)

    def to_usage(self) -> "TokenUsage":
        return TokenUsage(
            prompt_tokens=self.prompt_tokens,
            completion_tokens=self.completion_tokens,
            total_tokens=self.total_tokens,
        )


@dataclass(frozen=True)
class TokenUsage:
    """Token counters reported for one or more provider calls (Value Object).

    total_tokens is taken from the provider as reported; it is not
    recomputed from the other two fields.
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        if not isinstance(other, TokenUsage):
            return NotImplemented
        return TokenUsage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "TokenUsage":
        """Build from a stored/reported mapping.

        Missing, negative or non-integer fields read as zero.
        """
        if not isinstance(data, dict):
            return cls()
        return cls(
            prompt_tokens=_as_count(data.get("prompt_tokens")),
            completion_tokens=_as_count(data.get("completion_tokens")),
            total_tokens=_as_count(data.get("total_tokens")),
        )


@dataclass(frozen=True)
class UsageSnapshot:
    """Ledger totals plus the derived cost estimate."""
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    estimated_cost_usd: float


def _as_count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value if value >= 0 else 0
