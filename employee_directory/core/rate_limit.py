"""Rate limiting dependency for the server tier routes.

This module wires the rate limiting adapter into the HTTP layer.

Strategy:
- One process-wide limiter guards every employee route (not per client).
- Once the limit is exceeded, every request is rejected with 429 until the
  backoff period has elapsed.
"""

from __future__ import annotations

import logging
import random

from employee_directory.adapters.rate_limit.base import AbstractRateLimiter
from employee_directory.adapters.rate_limit.in_memory import InMemoryBackoffRateLimiter
from employee_directory.core.config import AppSettings, settings
from employee_directory.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)


_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple | None = None


def _limiter_config_key(app_settings: AppSettings) -> tuple:
    return (
        app_settings.rate_limit_randomize,
        app_settings.rate_limit_requests,
        app_settings.rate_limit_window_seconds,
        app_settings.rate_limit_backoff_seconds,
        app_settings.rate_limit_requests_min,
        app_settings.rate_limit_requests_max,
        app_settings.rate_limit_backoff_min_seconds,
        app_settings.rate_limit_backoff_max_seconds,
    )


def build_rate_limiter(app_settings: AppSettings) -> InMemoryBackoffRateLimiter:
    """Create a limiter from settings.

    With ``rate_limit_randomize`` the limit and backoff are drawn once from
    their configured min/max bounds, so clients cannot rely on fixed numbers.
    """

    if app_settings.rate_limit_randomize:
        low, high = sorted(
            (app_settings.rate_limit_requests_min, app_settings.rate_limit_requests_max)
        )
        limit = random.randint(low, high)
        backoff = random.uniform(
            *sorted(
                (
                    app_settings.rate_limit_backoff_min_seconds,
                    app_settings.rate_limit_backoff_max_seconds,
                )
            )
        )
    else:
        limit = app_settings.rate_limit_requests
        backoff = app_settings.rate_limit_backoff_seconds

    limiter = InMemoryBackoffRateLimiter(
        limit=limit,
        window_seconds=app_settings.rate_limit_window_seconds,
        backoff_seconds=backoff,
    )
    logger.info(
        "rate_limit.configured",
        extra={
            "limit": limit,
            "window_s": app_settings.rate_limit_window_seconds,
            "backoff_s": round(backoff, 3),
            "randomized": app_settings.rate_limit_randomize,
        },
    )
    return limiter


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.
    """

    global _limiter, _limiter_config

    config = _limiter_config_key(settings.app)
    if _limiter is None or _limiter_config != config:
        _limiter = build_rate_limiter(settings.app)
        _limiter_config = config

    return _limiter


def reset_rate_limiter() -> None:
    """Drop the cached limiter so the next request builds a fresh one."""

    global _limiter, _limiter_config
    _limiter = None
    _limiter_config = None


def enforce_rate_limit() -> None:
    """FastAPI dependency enforcing the request rate limit.

    Raises:
        RateLimitAppError: When the request is rejected (mapped to HTTP 429).
    """

    if not settings.app.rate_limit_enabled:
        return

    result = get_rate_limiter().consume()
    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={"limit": result.limit, "remaining": result.remaining},
        )
        return

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "limit": result.limit,
            "retry_after_s": result.retry_after_seconds,
        },
    )
    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message="Rate limit exceeded. Try again later.",
        details={
            "limit": result.limit,
            "remaining": result.remaining,
            "retry_after": result.retry_after_seconds or 0,
        },
    )
