"""LiteLLM adapter — implements LLMPort using LiteLLM for provider-agnostic LLM calls."""

import logging

import litellm
from litellm import acompletion, completion_cost

from domain.model.token_usage import LLMCallResult
from port.llm import (
    LLMAuthError,
    LLMEmptyResponseError,
    LLMError,
    LLMRateLimitError,
    LLMTimeoutError,
)

# Suppress LiteLLM's verbose logging (proxy server warnings, etc.)
litellm.suppress_debug_info = True
logging.getLogger("LiteLLM").setLevel(logging.CRITICAL)

logger = logging.getLogger(__name__)


def _extract_provider_from_model(model: str) -> str | None:
    """Extract provider name from model string.

    Args:
        model: Model string (e.g., "gpt-4o-mini", "anthropic/claude-4.5-sonnet")

    Returns:
        Provider name or None if not specified in model string.
    """
    if "/" in model:
        return model.split("/")[0]
    if model.startswith("gpt-") or model.startswith("o1") or model.startswith("o3"):
        return "openai"
    return None


class LiteLLMAdapter:
    """Adapter that implements LLMPort using LiteLLM for provider-agnostic LLM calls."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini"):
        self.api_key = api_key
        self.model = model

    async def call(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        temperature: float,
        timeout: float = 30.0,
    ) -> tuple[str, LLMCallResult | None]:
        """Call the chat completion API with token usage tracking.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
            max_tokens: Upper bound on generated tokens.
            temperature: Sampling temperature.
            timeout: Request timeout in seconds.

        Returns:
            Tuple of (content, stats). stats is None when the provider did
            not report usage.

        Raises:
            ValueError: If messages list is empty.
            LLMTimeoutError, LLMAuthError, LLMRateLimitError, LLMError:
                Provider failures, translated from LiteLLM exceptions.
            LLMEmptyResponseError: If no content is returned.
        """
        if not messages:
            raise ValueError("messages list cannot be empty")

        try:
            response = await acompletion(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
                timeout=timeout,
                api_key=self.api_key,
            )
        except litellm.Timeout as e:
            raise LLMTimeoutError(str(e)) from e
        except litellm.AuthenticationError as e:
            raise LLMAuthError(str(e)) from e
        except litellm.RateLimitError as e:
            raise LLMRateLimitError(str(e)) from e
        except litellm.APIError as e:
            raise LLMError(str(e)) from e

        content = ""
        if response.choices and len(response.choices) > 0:
            message = response.choices[0].message
            if message and message.content:
                content = message.content.strip()

        if not content:
            logger.error("No content in LLM response", extra={
                "model": self.model,
                "response_id": getattr(response, "id", None),
            })
            raise LLMEmptyResponseError("Empty response from LLM")

        usage = getattr(response, "usage", None)
        if not usage:
            logger.debug("LLM response carried no usage", extra={"model": self.model})
            return content, None

        try:
            estimated_cost = completion_cost(completion_response=response)
        except Exception as e:
            logger.debug("Could not calculate cost with LiteLLM", extra={
                "model": self.model, "error": str(e),
            })
            estimated_cost = 0.0

        provider = _extract_provider_from_model(self.model)

        stats = LLMCallResult(
            model=self.model,
            prompt_tokens=usage.prompt_tokens or 0,
            completion_tokens=usage.completion_tokens or 0,
            total_tokens=usage.total_tokens or 0,
            estimated_cost=estimated_cost,
            provider=provider,
        )

        logger.debug("LLM API call completed", extra={
            "model": self.model, "provider": provider,
            "prompt_tokens": stats.prompt_tokens,
            "completion_tokens": stats.completion_tokens,
            "total_tokens": stats.total_tokens,
            "estimated_cost": estimated_cost,
        })

        return content, stats
