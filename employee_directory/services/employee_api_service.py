"""API tier service: answers the employee contract by calling the server tier.

Lookups and writes are forwarded. Aggregates (search, highest salary, top
earners) are computed locally over the full list, which is cached briefly and
dropped whenever this tier writes.
"""

from __future__ import annotations

import logging
from uuid import UUID

from employee_directory.adapters.employee_server.base import AbstractEmployeeServerClient
from employee_directory.core.errors import NotFoundAppError
from employee_directory.schemas.employee import CreateEmployeeInput, Employee
from employee_directory.services import employee_queries
from employee_directory.utils.simple_cache import SimpleTTLCache

logger = logging.getLogger(__name__)

ALL_EMPLOYEES_KEY = "employees:all"


class EmployeeApiService:
    """Aggregates calls to the employee server.

    Attributes:
        client: Upstream server client.
        cache: Short-lived cache of the full employee list.
    """

    def __init__(
        self,
        client: AbstractEmployeeServerClient,
        cache: SimpleTTLCache[list[Employee]] | None = None,
    ) -> None:
        self.client = client
        self.cache = cache if cache is not None else SimpleTTLCache(ttl_seconds=0)

    async def get_all_employees(self) -> list[Employee]:
        cached = self.cache.get(ALL_EMPLOYEES_KEY)
        if cached is not None:
            return list(cached)

        employees = await self.client.list_employees()
        self.cache.set(ALL_EMPLOYEES_KEY, employees)
        logger.debug("api.employees_fetched", extra={"count": len(employees)})
        return list(employees)

    async def search_by_name(self, fragment: str) -> list[Employee]:
        return employee_queries.search_by_name(await self.get_all_employees(), fragment)

    async def get_employee_by_id(self, employee_id: UUID) -> Employee | None:
        return await self.client.get_employee(employee_id)

    async def highest_salary(self) -> int | None:
        return employee_queries.highest_salary(await self.get_all_employees())

    async def top_ten_highest_earning_names(self) -> list[str]:
        return employee_queries.top_n_earners(
            await self.get_all_employees(), employee_queries.TOP_EARNERS_LIMIT
        )

    async def create_employee(self, employee_input: CreateEmployeeInput) -> Employee:
        employee = await self.client.create_employee(employee_input)
        self.cache.invalidate(ALL_EMPLOYEES_KEY)
        logger.info("api.employee_created", extra={"employee_id": str(employee.id)})
        return employee

    async def delete_employee_by_id(self, employee_id: UUID) -> str:
        """Delete an employee and return its name.

        The record is fetched first only to learn the name to answer with.

        Raises:
            NotFoundAppError: If the id is unknown or the record vanished
                before the delete went through.
        """
        employee = await self.client.get_employee(employee_id)
        if employee is None:
            raise NotFoundAppError(
                code="employee_not_found",
                message="Employee not found",
                details={"field": "id", "value": str(employee_id)},
            )

        try:
            await self.client.delete_employee(employee_id)
        finally:
            self.cache.invalidate(ALL_EMPLOYEES_KEY)

        logger.info("api.employee_deleted", extra={"employee_id": str(employee_id)})
        return employee.name or ""
