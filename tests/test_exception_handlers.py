"""Tests for global exception handlers.

Validates that every error kind maps to its fixed HTTP status, that the error
format is consistent, and that unexpected failures leak nothing.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from employee_directory.core.errors import (
    AppError,
    ErrorKind,
    NotFoundAppError,
    RateLimitAppError,
    UpstreamAppError,
    ValidationAppError,
)
from employee_directory.core.exception_handlers import (
    general_exception_handler,
    setup_exception_handlers,
)


@pytest.fixture
def app_with_handlers() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers, raise_server_exceptions=False)


@pytest.mark.parametrize(
    ("error_cls", "expected_status"),
    [
        (ValidationAppError, 400),
        (NotFoundAppError, 404),
        (RateLimitAppError, 429),
        (UpstreamAppError, 502),
    ],
)
def test_error_kind_maps_to_fixed_status(
    client: TestClient, app_with_handlers: FastAPI, error_cls, expected_status: int
) -> None:
    @app_with_handlers.get("/boom")
    async def endpoint():
        raise error_cls(code="some_code", message="Some message")

    response = client.get("/boom")

    assert response.status_code == expected_status
    data = response.json()
    assert data["error"]["code"] == "some_code"
    assert data["error"]["message"] == "Some message"
    assert "request_id" in data["error"]
    assert "details" not in data["error"]


def test_base_app_error_is_internal() -> None:
    error = AppError(code="x", message="y")

    assert error.kind is ErrorKind.INTERNAL
    assert error.status_code == 500
    assert str(error) == "y"


def test_details_are_included(client: TestClient, app_with_handlers: FastAPI) -> None:
    @app_with_handlers.get("/details")
    async def endpoint():
        raise ValidationAppError(
            code="invalid_employee_id",
            message="Invalid employee ID format",
            details={"field": "id"},
        )

    response = client.get("/details")

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"field": "id"}


def test_rate_limit_error_carries_headers(client: TestClient, app_with_handlers: FastAPI) -> None:
    @app_with_handlers.get("/limited")
    async def endpoint():
        raise RateLimitAppError(
            code="rate_limit_exceeded",
            message="Slow down",
            details={"limit": 5, "remaining": 0, "retry_after": 42},
        )

    response = client.get("/limited")

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "42"
    assert response.headers["X-RateLimit-Limit"] == "5"
    assert response.headers["X-RateLimit-Remaining"] == "0"


def test_request_validation_is_bad_request(client: TestClient, app_with_handlers: FastAPI) -> None:
    class Payload(BaseModel):
        age: int = Field(..., ge=16)

    @app_with_handlers.post("/payload")
    async def endpoint(payload: Payload):
        return payload

    response = client.post("/payload", json={"age": 3})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert error["details"]["errors"][0]["loc"] == ["body", "age"]


def test_unexpected_exception_is_generic_500(client: TestClient, app_with_handlers: FastAPI) -> None:
    @app_with_handlers.get("/crash")
    async def endpoint():
        raise RuntimeError("database password is hunter2")

    response = client.get("/crash")

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "internal_server_error"
    assert "hunter2" not in response.text


def test_general_exception_handler_never_leaks_stack_trace() -> None:
    request = AsyncMock()
    request.url.path = "/test"
    request.method = "GET"

    response = asyncio.run(general_exception_handler(request, ValueError("Test error with details")))

    response_text = bytes(response.body).decode()
    data = json.loads(response_text)
    assert response.status_code == 500
    assert "Traceback" not in response_text
    assert "ValueError" not in response_text
    assert "Test error" not in data["error"]["message"]


def test_setup_registers_handlers(app_with_handlers: FastAPI) -> None:
    assert AppError in app_with_handlers.exception_handlers
    assert Exception in app_with_handlers.exception_handlers
