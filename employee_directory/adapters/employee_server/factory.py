"""Factory for the employee server client used by the api tier."""

import httpx

from employee_directory.adapters.employee_server.base import AbstractEmployeeServerClient
from employee_directory.adapters.employee_server.http_client import HttpEmployeeServerClient
from employee_directory.core.config import ApiSettings, settings
from employee_directory.core.errors import ValidationAppError


def create_employee_server_client(
    api_settings: ApiSettings | None = None,
) -> AbstractEmployeeServerClient:
    """Instantiate the HTTP client from settings.

    Reads configuration from employee_directory.core.config.settings unless
    explicit settings are passed.

    Raises:
        ValidationAppError: If the server base URL is not an http(s) URL.
    """
    cfg = api_settings or settings.api

    if not cfg.server_base_url.startswith(("http://", "https://")):
        raise ValidationAppError(
            code="invalid_server_base_url",
            message=(
                f"API_SERVER_BASE_URL must be an http(s) URL, got '{cfg.server_base_url}'"
            ),
        )

    http = httpx.AsyncClient(
        base_url=cfg.server_base_url,
        timeout=cfg.timeout_seconds,
    )
    return HttpEmployeeServerClient(
        http,
        max_retries=cfg.max_retries,
        retry_backoff_seconds=cfg.retry_backoff_seconds,
    )
