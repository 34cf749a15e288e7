"""Admission-control decision returned by rate limiters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RateDecision:
    """Outcome of one admission check.

    retry_after_seconds is set (and positive) only when allowed is False.
    """
    allowed: bool
    retry_after_seconds: int | None = None
