"""Rate limiting adapters.

A small abstraction layer so the server tier can start with an in-memory,
per-process limiter and later move to a shared store without changing the
HTTP layer.
"""

from employee_directory.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from employee_directory.adapters.rate_limit.in_memory import InMemoryBackoffRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryBackoffRateLimiter",
    "RateLimitResult",
]
