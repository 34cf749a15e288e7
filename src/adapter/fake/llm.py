"""In-memory implementation of LLMPort for testing."""

from domain.model.token_usage import LLMCallResult

_DEFAULT_STATS = object()


class FakeLLMAdapter:
    """Fake LLM adapter that returns a preconfigured response or raises.

    Pass stats=None to simulate a provider that reports no usage.
    """

    def __init__(
        self,
        response: str = "",
        stats: LLMCallResult | None | object = _DEFAULT_STATS,
        error: Exception | None = None,
    ):
        self.response = response
        self._stats = stats
        self.error = error
        self.calls: list[dict] = []

    async def call(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        temperature: float,
        timeout: float = 30.0,
    ) -> tuple[str, LLMCallResult | None]:
        self.calls.append({
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "timeout": timeout,
        })
        if self.error is not None:
            raise self.error
        if self._stats is _DEFAULT_STATS:
            stats = LLMCallResult(
                model="gpt-4o-mini",
                prompt_tokens=10,
                completion_tokens=5,
                total_tokens=15,
                estimated_cost=0.0001,
            )
        else:
            stats = self._stats
        return self.response, stats

    @property
    def last_prompt(self) -> str | None:
        if not self.calls:
            return None
        return self.calls[-1]["messages"][0]["content"]
