"""Global exception handlers for consistent error responses.

Design:
- AppError subclasses -> the fixed status of their ErrorKind (400, 404, 429, 502)
- Request body/path validation failures -> 400
- Unexpected Exception -> generic 500 (safety net, no internal detail leaked)
- All responses include request_id for tracing
"""

import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from employee_directory.core.config import settings
from employee_directory.core.errors import AppError, ErrorKind
from employee_directory.core.logging import get_request_id

logger = logging.getLogger(__name__)


def _rate_limit_headers(exc: AppError) -> dict[str, str] | None:
    if exc.kind is not ErrorKind.RATE_LIMITED or not settings.app.rate_limit_include_headers:
        return None

    details = exc.details or {}
    headers = {"Retry-After": str(details.get("retry_after", 0))}
    if "limit" in details:
        headers["X-RateLimit-Limit"] = str(details["limit"])
    if "remaining" in details:
        headers["X-RateLimit-Remaining"] = str(details["remaining"])
    return headers


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with consistent JSON format.

    The response body is ``{"error": {"code", "message", "request_id",
    "details"?}}`` and the status code comes from the error's kind.

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with appropriate status code and error details.
    """
    status_code = exc.status_code

    logger.warning(
        "app_error_handled",
        extra={
            "error_code": exc.code,
            "error_kind": exc.kind.value,
            "error_message": exc.message,
            "status_code": status_code,
            "has_details": bool(exc.details),
            "request_path": request.url.path,
        },
    )

    error_content = {
        "code": exc.code,
        "message": exc.message,
        "request_id": get_request_id(),
    }
    if exc.details:
        error_content["details"] = exc.details

    return JSONResponse(
        status_code=status_code,
        content={"error": error_content},
        headers=_rate_limit_headers(exc),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report failed field constraints as 400 instead of FastAPI's default 422."""

    errors = [
        {
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    logger.warning(
        "request_validation_failed",
        extra={
            "request_path": request.url.path,
            "error_count": len(errors),
        },
    )
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(
            {
                "error": {
                    "code": "validation_error",
                    "message": "Request validation failed",
                    "request_id": get_request_id(),
                    "details": {"errors": errors},
                }
            }
        ),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs detailed information for debugging while returning a generic message.

    Args:
        request: FastAPI request object.
        exc: Exception instance (unexpected).

    Returns:
        JSONResponse with generic error (no implementation details leaked).
    """
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": get_request_id(),
            }
        },
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(RequestValidationError)(request_validation_handler)
    app.exception_handler(Exception)(general_exception_handler)
