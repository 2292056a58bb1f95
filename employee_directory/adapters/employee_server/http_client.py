"""httpx based client for the employee server tier."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable
from uuid import UUID

import httpx
from pydantic import TypeAdapter, ValidationError

from employee_directory.adapters.employee_server.base import AbstractEmployeeServerClient
from employee_directory.core.errors import (
    NotFoundAppError,
    RateLimitAppError,
    UpstreamAppError,
    ValidationAppError,
)
from employee_directory.schemas.employee import CreateEmployeeInput, Employee

logger = logging.getLogger(__name__)

_EMPLOYEE_LIST = TypeAdapter(list[Employee])


def _retry_after_seconds(response: httpx.Response) -> float | None:
    raw = response.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return max(0.0, float(raw))
    except ValueError:
        return None


class HttpEmployeeServerClient(AbstractEmployeeServerClient):
    """Calls the server tier's REST API and maps its answers to domain types.

    Upstream 429 responses are retried with exponential backoff. The wait
    never exceeds the server's ``Retry-After`` when one is sent.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        max_retries: int = 3,
        retry_backoff_seconds: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            http: Async HTTP client whose base_url points at the server's API root.
            max_retries: Retries on 429 before giving up.
            retry_backoff_seconds: First wait between retries, doubled each time.
            sleep: Awaitable sleep function (injected in tests).
        """
        self._http = http
        self._max_retries = max_retries
        self._retry_backoff_seconds = retry_backoff_seconds
        self._sleep = sleep

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        attempt = 0
        while True:
            try:
                response = await self._http.request(method, path, **kwargs)
            except httpx.TimeoutException as exc:
                logger.error("upstream.timeout", extra={"method": method, "path": path})
                raise UpstreamAppError(
                    code="upstream_timeout",
                    message="Employee server did not respond in time",
                ) from exc
            except httpx.TransportError as exc:
                logger.error(
                    "upstream.unreachable",
                    extra={"method": method, "path": path, "error_type": type(exc).__name__},
                )
                raise UpstreamAppError(
                    code="upstream_unreachable",
                    message="Employee server is unreachable",
                ) from exc

            if response.status_code != httpx.codes.TOO_MANY_REQUESTS:
                return response

            retry_after = _retry_after_seconds(response)
            if attempt >= self._max_retries:
                logger.warning(
                    "upstream.rate_limited",
                    extra={"method": method, "path": path, "attempts": attempt + 1},
                )
                raise RateLimitAppError(
                    code="upstream_rate_limited",
                    message="Employee server is rate limiting requests. Try again later.",
                    details={"retry_after": int(retry_after or 0)},
                )

            wait = self._retry_backoff_seconds * (2 ** attempt)
            if retry_after is not None:
                wait = min(wait, retry_after)
            logger.info(
                "upstream.retry",
                extra={"method": method, "path": path, "attempt": attempt + 1, "wait_s": wait},
            )
            await self._sleep(wait)
            attempt += 1

    def _raise_for_status(self, response: httpx.Response) -> None:
        status_code = response.status_code
        if status_code < 400:
            return
        if status_code == httpx.codes.NOT_FOUND:
            raise NotFoundAppError(code="employee_not_found", message="Employee not found")
        if status_code < 500:
            raise ValidationAppError(
                code="upstream_rejected_request",
                message="Employee server rejected the request",
                details={"upstream_status": status_code},
            )
        raise UpstreamAppError(
            code="upstream_error",
            message="Employee server failed to process the request",
            details={"upstream_status": status_code},
        )

    def _parse(self, adapter: TypeAdapter, payload: Any) -> Any:
        try:
            return adapter.validate_python(payload)
        except ValidationError as exc:
            raise UpstreamAppError(
                code="upstream_invalid_payload",
                message="Employee server returned an unexpected payload",
            ) from exc

    async def list_employees(self) -> list[Employee]:
        response = await self._request("GET", "/employees")
        self._raise_for_status(response)
        return self._parse(_EMPLOYEE_LIST, response.json())

    async def get_employee(self, employee_id: UUID) -> Employee | None:
        response = await self._request("GET", f"/employees/{employee_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        self._raise_for_status(response)
        return self._parse(TypeAdapter(Employee), response.json())

    async def create_employee(self, employee_input: CreateEmployeeInput) -> Employee:
        response = await self._request(
            "POST", "/employees", json=employee_input.model_dump()
        )
        self._raise_for_status(response)
        return self._parse(TypeAdapter(Employee), response.json())

    async def delete_employee(self, employee_id: UUID) -> None:
        response = await self._request("DELETE", f"/employees/{employee_id}")
        self._raise_for_status(response)

    async def aclose(self) -> None:
        await self._http.aclose()
