"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Nested BaseSettings don't inherit env_file, so populate os.environ up front
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_app_settings() -> "AppSettings":
    """Build app settings from environment.

    Static type checkers treat BaseSettings fields as constructor arguments,
    which is not how BaseSettings is intended to be used.
    """

    return AppSettings()  # type: ignore[call-arg]


def _build_server_settings() -> "ServerSettings":
    return ServerSettings()  # type: ignore[call-arg]


def _build_api_settings() -> "ApiSettings":
    return ApiSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class AppSettings(BaseSettings):
    """Application-wide configuration shared by both tiers."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable the process-wide request rate limiter on the server tier",
    )
    rate_limit_requests: int = Field(
        10,
        description="Maximum number of requests admitted per window",
        ge=1,
    )
    rate_limit_window_seconds: float = Field(
        60.0,
        description="Admission window size in seconds",
        gt=0,
    )
    rate_limit_backoff_seconds: float = Field(
        30.0,
        description="Backoff period in seconds once the limit is exceeded",
        gt=0,
    )
    rate_limit_randomize: bool = Field(
        False,
        description="Pick limit and backoff at random within the min/max bounds at startup",
    )
    rate_limit_requests_min: int = Field(5, ge=1)
    rate_limit_requests_max: int = Field(10, ge=1)
    rate_limit_backoff_min_seconds: float = Field(30.0, gt=0)
    rate_limit_backoff_max_seconds: float = Field(90.0, gt=0)
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class ServerSettings(BaseSettings):
    """Mock employee server configuration."""

    seed_employees: int = Field(
        50,
        description="Number of fake employees generated at startup",
        ge=0,
    )
    faker_seed: int | None = Field(
        None,
        description="Seed for the Faker generator (reproducible directories)",
    )
    email_template: str = Field(
        "{username}@company.com",
        description="Template used to derive an employee's contact e-mail",
    )
    host: str = Field("0.0.0.0")
    port: int = Field(8112)

    model_config = SettingsConfigDict(
        env_prefix="SERVER_",
        case_sensitive=False,
    )


class ApiSettings(BaseSettings):
    """API tier configuration (client of the employee server)."""

    server_base_url: str = Field(
        "http://localhost:8112/api/v1",
        description="Base URL of the employee server tier",
    )
    timeout_seconds: float = Field(
        10.0,
        description="Upstream request timeout in seconds",
    )
    max_retries: int = Field(
        3,
        description="Retries on upstream 429 before giving up",
        ge=0,
    )
    retry_backoff_seconds: float = Field(
        1.0,
        description="Initial wait between retries (doubled on each attempt)",
        ge=0,
    )
    cache_ttl_seconds: int = Field(
        5,
        description="TTL of the cached upstream employee list used for aggregates",
        ge=0,
    )
    host: str = Field("0.0.0.0")
    port: int = Field(8111)

    model_config = SettingsConfigDict(
        env_prefix="API_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO")
    format: str = Field(
        "json",
        description="Log format: 'json' or 'plain'",
    )
    output: str = Field(
        "stdout",
        description="Log output: 'stdout' or 'file'",
    )
    file_path: str | None = Field(None)
    max_bytes: int | None = Field(
        10 * 1024 * 1024,
        description="Rotate the log file at this size (None disables rotation)",
    )
    backup_count: int = Field(5)
    request_id_header: str = Field("X-Request-ID")
    redact_names: bool = Field(
        True,
        description="Reduce employee names in log extras to initials",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are invalid.
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    server: ServerSettings = Field(default_factory=_build_server_settings)
    api: ApiSettings = Field(default_factory=_build_api_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
