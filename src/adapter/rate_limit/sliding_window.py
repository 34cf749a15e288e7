"""In-process sliding-window rate limiter.

State is owned by one limiter instance (the app holds a single one) rather
than a module-level dict, so tests get isolated instances and a shared
store can replace it behind RateLimiterPort.
"""

import logging
import math
import threading
import time
from collections import deque
from typing import Callable

from domain.model.rate_limit import RateDecision

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 15
DEFAULT_WINDOW_SECONDS = 60.0
DEFAULT_SWEEP_INTERVAL = 100


class SlidingWindowRateLimiter:
    """Admit at most max_requests per key within any trailing window_seconds."""

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: int = DEFAULT_SWEEP_INTERVAL,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._sweep_interval = max(1, sweep_interval)
        self._requests: dict[str, deque[float]] = {}
        self._checks = 0
        self._lock = threading.Lock()

    def check(self, key: str) -> RateDecision:
        """Admit and record one request for key, or deny with retry guidance.

        Pruning, the capacity check and the append happen under one lock
        with no await in between.
        """
        with self._lock:
            now = self._clock()

            self._checks += 1
            if self._checks % self._sweep_interval == 0:
                self._sweep(now)

            timestamps = self._requests.setdefault(key, deque())
            while timestamps and now - timestamps[0] >= self.window_seconds:
                timestamps.popleft()

            if len(timestamps) >= self.max_requests:
                oldest = timestamps[0]
                retry_after = max(1, math.ceil(oldest + self.window_seconds - now))
                logger.info("Rate limit exceeded", extra={"rateKey": key, "retryAfterSeconds": retry_after})
                return RateDecision(allowed=False, retry_after_seconds=retry_after)

            timestamps.append(now)
            return RateDecision(allowed=True)

    def _sweep(self, now: float) -> None:
        """Drop keys whose every timestamp has left the window. Caller holds the lock."""
        stale = [
            key for key, ts in self._requests.items()
            if not ts or now - ts[-1] >= self.window_seconds
        ]
        for key in stale:
            del self._requests[key]
        if stale:
            logger.debug("Rate limiter sweep", extra={"removedKeys": len(stale)})

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._requests)

    def reset(self) -> None:
        with self._lock:
            self._requests.clear()
            self._checks = 0
