from __future__ import annotations

"""Application factories for the two tiers.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build isolated apps with their own collaborators.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from employee_directory.adapters.employee_server.base import AbstractEmployeeServerClient
from employee_directory.adapters.employee_server.factory import create_employee_server_client
from employee_directory.api.routes import (
    api_employees_router,
    employees_router,
    health_router,
)
from employee_directory.core.config import settings
from employee_directory.core.exception_handlers import setup_exception_handlers
from employee_directory.core.logging import configure_logging
from employee_directory.core.middleware import request_id_middleware
from employee_directory.core.openapi import apply_openapi_customizations
from employee_directory.services.employee_api_service import EmployeeApiService
from employee_directory.services.employee_service import (
    EmployeeService,
    build_employee_service,
)
from employee_directory.utils.simple_cache import SimpleTTLCache

API_PREFIX = "/api/v1"
VERSION = "0.1.0"


def create_server_app(employee_service: EmployeeService | None = None) -> FastAPI:
    """Create the server tier: the rate limited mock employee directory.

    Args:
        employee_service: Directory to serve; a Faker-seeded one by default.

    Returns:
        Configured FastAPI app.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Mock Employee Server",
        description=(
            "In-memory mock employee directory: CRUD plus name search, highest "
            "salary and top earners. Guarded by a per-process rate limiter that "
            "answers 429 during its backoff period."
        ),
        version=VERSION,
    )
    app.state.tier = "server"
    app.state.employee_service = (
        employee_service if employee_service is not None else build_employee_service(settings.server)
    )

    app.middleware("http")(request_id_middleware)
    setup_exception_handlers(app)

    app.include_router(employees_router, prefix=API_PREFIX)
    app.include_router(health_router)

    apply_openapi_customizations(app, rate_limited=True)

    return app


def create_api_app(client: AbstractEmployeeServerClient | None = None) -> FastAPI:
    """Create the api tier, which answers the same contract via the server tier.

    Args:
        client: Upstream client; built from API_* settings by default.

    Returns:
        Configured FastAPI app. The upstream client is closed on shutdown.
    """
    configure_logging(settings.log)

    upstream = client if client is not None else create_employee_server_client(settings.api)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await upstream.aclose()

    app = FastAPI(
        title="Employee API",
        description=(
            "Employee API backed by the mock employee server. Aggregates are "
            "computed over the server's employee list."
        ),
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.tier = "api"
    app.state.employee_api_service = EmployeeApiService(
        upstream,
        cache=SimpleTTLCache(ttl_seconds=settings.api.cache_ttl_seconds, max_entries=8),
    )

    app.middleware("http")(request_id_middleware)
    setup_exception_handlers(app)

    app.include_router(api_employees_router, prefix=API_PREFIX)
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
