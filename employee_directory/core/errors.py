"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses. Each error carries an
``ErrorKind`` which the HTTP boundary translates to a fixed status code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, NotRequired, TypedDict


class ErrorKind(str, Enum):
    """Closed set of failure categories surfaced to HTTP clients."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.UPSTREAM: 502,
    ErrorKind.INTERNAL: 500,
}


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    hint: str
    field: str
    value: str
    errors: list[dict[str, Any]]
    limit: int
    remaining: int
    retry_after: int
    upstream_status: int
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationAppError(AppError):
    """Raised when input validation fails (malformed id, field constraints)."""

    kind = ErrorKind.VALIDATION


class NotFoundAppError(AppError):
    """Raised when a requested employee or aggregate does not exist."""

    kind = ErrorKind.NOT_FOUND


class RateLimitAppError(AppError):
    """Raised when the request rate limiter rejects a request."""

    kind = ErrorKind.RATE_LIMITED


class UpstreamAppError(AppError):
    """Raised when the employee server tier cannot be reached or fails."""

    kind = ErrorKind.UPSTREAM
