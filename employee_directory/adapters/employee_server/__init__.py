"""Employee server adapter layer - how the api tier reaches the server tier."""

from employee_directory.adapters.employee_server.base import AbstractEmployeeServerClient
from employee_directory.adapters.employee_server.factory import create_employee_server_client
from employee_directory.adapters.employee_server.http_client import HttpEmployeeServerClient

__all__ = [
    "AbstractEmployeeServerClient",
    "HttpEmployeeServerClient",
    "create_employee_server_client",
]
