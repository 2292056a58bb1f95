from __future__ import annotations

from employee_directory.api.routes.api_employees import router as api_employees_router
from employee_directory.api.routes.employees import router as employees_router
from employee_directory.api.routes.health import router as health_router

__all__ = ["api_employees_router", "employees_router", "health_router"]
