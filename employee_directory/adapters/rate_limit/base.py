"""Rate limiter interfaces.

The HTTP layer depends on this abstraction (not the concrete implementation)
so the storage backend can be swapped with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Result of an admission check.

    Attributes:
        allowed: Whether the request is admitted.
        limit: Max admissions per window.
        remaining: Admissions left in the current window (0 when blocked).
        retry_after_seconds: Whole seconds until the backoff ends when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    retry_after_seconds: int | None = None


class AbstractRateLimiter(ABC):
    """Interface for request admission gates."""

    @abstractmethod
    def consume(self) -> RateLimitResult:
        """Check admission for one request and record it if admitted.

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    def admit(self) -> bool:
        """Shorthand for ``consume().allowed``."""
        return self.consume().allowed
