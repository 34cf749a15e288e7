"""LLM port — outbound interface for large language model calls."""

from typing import Protocol

from domain.model.token_usage import LLMCallResult


class LLMError(Exception):
    """Base exception for LLM port errors."""


class LLMTimeoutError(LLMError):
    """LLM request timed out."""


class LLMRateLimitError(LLMError):
    """LLM provider rate limit exceeded."""


class LLMAuthError(LLMError):
    """LLM provider authentication failed."""


class LLMEmptyResponseError(LLMError):
    """LLM returned no text."""


class LLMPort(Protocol):
    """Port for making LLM API calls with token usage tracking.

    The returned stats are None when the provider did not report usage.
    """

    async def call(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        temperature: float,
        timeout: float = 30.0,
    ) -> tuple[str, LLMCallResult | None]: ...
