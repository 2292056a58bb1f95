"""In-memory request limiter with a fixed backoff period.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: every check-and-mutate runs under one lock.
- Uses a monotonic clock so wall-clock adjustments never shift the windows.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from employee_directory.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


@dataclass
class _LimiterState:
    window_start: float
    count: int = 0
    backoff_start: float | None = None


class InMemoryBackoffRateLimiter(AbstractRateLimiter):
    """Admit up to ``limit`` requests per window, then reject for a backoff period.

    While the limit has not been reached, each call increments the counter and
    is admitted. The first rejected call starts the backoff; every call during
    the backoff is rejected without touching the counter. Once the backoff has
    elapsed the counter and the window restart and the call is admitted.

    A window that ends without the limit being reached simply rolls over.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        backoff_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter.

        Args:
            limit: Maximum number of admitted requests per window.
            window_seconds: Size of the admission window in seconds.
            backoff_seconds: How long to reject everything once the limit is hit.
            clock: Monotonic time source in seconds.

        Raises:
            ValueError: If any of the bounds is invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        if backoff_seconds <= 0:
            raise ValueError("backoff_seconds must be > 0")

        self._limit = limit
        self._window_seconds = window_seconds
        self._backoff_seconds = backoff_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._state = _LimiterState(window_start=clock())

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def backoff_seconds(self) -> float:
        return self._backoff_seconds

    def _restart_window(self, now: float) -> None:
        self._state.window_start = now
        self._state.count = 0
        self._state.backoff_start = None

    def _blocked(self, now: float, backoff_start: float) -> RateLimitResult:
        retry_after = max(1, int(math.ceil(backoff_start + self._backoff_seconds - now)))
        return RateLimitResult(
            allowed=False,
            limit=self._limit,
            remaining=0,
            retry_after_seconds=retry_after,
        )

    def consume(self) -> RateLimitResult:
        now = self._clock()

        with self._lock:
            state = self._state

            if state.backoff_start is not None:
                if now - state.backoff_start < self._backoff_seconds:
                    return self._blocked(now, state.backoff_start)
                self._restart_window(now)
            elif now - state.window_start >= self._window_seconds:
                self._restart_window(now)

            if state.count < self._limit:
                state.count += 1
                return RateLimitResult(
                    allowed=True,
                    limit=self._limit,
                    remaining=self._limit - state.count,
                )

            state.backoff_start = now
            return self._blocked(now, now)
