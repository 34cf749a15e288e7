"""Rate limiter port — per-client admission control."""

from typing import Protocol

from domain.model.rate_limit import RateDecision


class RateLimiterPort(Protocol):
    def check(self, key: str) -> RateDecision:
        """Admit and record one request for key, or deny with retry guidance."""
        ...

    def reset(self) -> None: ...
