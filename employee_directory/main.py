import uvicorn

from employee_directory.core.app_factory import create_api_app, create_server_app
from employee_directory.core.config import settings

server_app = create_server_app()
api_app = create_api_app()


def run_server() -> None:
    """Serve the mock employee directory (console script ``employee-server``)."""
    uvicorn.run(
        "employee_directory.main:server_app",
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


def run_api() -> None:
    """Serve the api tier (console script ``employee-api``)."""
    uvicorn.run(
        "employee_directory.main:api_app",
        host=settings.api.host,
        port=settings.api.port,
        log_config=None,
    )
