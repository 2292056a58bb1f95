"""Mock employee directory owned by the server tier.

The service exclusively owns the in-memory collection. Every read and write
runs under one lock, so concurrent request threads never observe a partially
applied mutation. Callers receive new lists of immutable ``Employee`` records,
never the underlying storage.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Iterable
from uuid import UUID

from faker import Faker

from employee_directory.core.config import ServerSettings, settings
from employee_directory.schemas.employee import (
    MAX_AGE,
    MIN_AGE,
    CreateEmployeeInput,
    Employee,
)
from employee_directory.services import employee_queries

logger = logging.getLogger(__name__)

SEED_SALARY_RANGE = (30_000, 500_000)


class EmployeeService:
    """Thread-safe CRUD and query operations over the employee collection.

    Attributes:
        faker: Generator used for contact e-mails (and seeding).
        email_template: ``str.format`` template with a ``{username}`` field.
    """

    def __init__(
        self,
        faker: Faker,
        employees: Iterable[Employee] = (),
        *,
        email_template: str = "{username}@company.com",
    ) -> None:
        self.faker = faker
        self.email_template = email_template
        self._employees: list[Employee] = list(employees)
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._employees)

    def _derive_email(self) -> str:
        return self.email_template.format(username=self.faker.user_name().lower())

    def list_all(self) -> list[Employee]:
        with self._lock:
            return list(self._employees)

    def find_by_id(self, employee_id: UUID) -> Employee | None:
        with self._lock:
            return employee_queries.find_by_id(self._employees, employee_id)

    def search_by_name(self, fragment: str) -> list[Employee]:
        logger.debug("employee.search", extra={"fragment_length": len(fragment)})
        with self._lock:
            results = employee_queries.search_by_name(self._employees, fragment)

        logger.debug("employee.search_results", extra={"matches": len(results)})
        return results

    def highest_salary(self) -> int | None:
        with self._lock:
            salary = employee_queries.highest_salary(self._employees)

        if salary is None:
            logger.warning("employee.highest_salary_missing")
        return salary

    def top_n_earners(self, n: int) -> list[str]:
        with self._lock:
            return employee_queries.top_n_earners(self._employees, n)

    def top_ten_highest_earning_names(self) -> list[str]:
        return self.top_n_earners(employee_queries.TOP_EARNERS_LIMIT)

    def create(self, employee_input: CreateEmployeeInput) -> Employee:
        """Append a new employee with a fresh id and derived contact e-mail."""

        employee = Employee(
            id=uuid.uuid4(),
            name=employee_input.name,
            salary=employee_input.salary,
            age=employee_input.age,
            title=employee_input.title,
            email=self._derive_email(),
        )
        with self._lock:
            self._employees.append(employee)
            size = len(self._employees)

        logger.debug(
            "employee.created",
            extra={"employee_id": str(employee.id), "collection_size": size},
        )
        return employee

    def delete_by_name(self, name: str) -> bool:
        """Remove the first employee whose name matches ignoring case."""

        with self._lock:
            index = employee_queries.find_index_by_name(self._employees, name)
            if index is None:
                return False
            removed = self._employees.pop(index)

        logger.debug("employee.deleted_by_name", extra={"employee_id": str(removed.id)})
        return True

    def delete_by_id(self, employee_id: UUID) -> bool:
        with self._lock:
            for index, employee in enumerate(self._employees):
                if employee.id == employee_id:
                    del self._employees[index]
                    break
            else:
                logger.warning(
                    "employee.delete_missing",
                    extra={"employee_id": str(employee_id)},
                )
                return False

        logger.debug("employee.deleted_by_id", extra={"employee_id": str(employee_id)})
        return True


def generate_employees(faker: Faker, count: int, *, email_template: str) -> list[Employee]:
    """Generate ``count`` plausible employees for a fresh directory."""

    return [
        Employee(
            id=uuid.uuid4(),
            name=faker.name(),
            salary=faker.random_int(*SEED_SALARY_RANGE),
            age=faker.random_int(MIN_AGE, MAX_AGE - 5),
            title=faker.job(),
            email=email_template.format(username=faker.user_name().lower()),
        )
        for _ in range(count)
    ]


def build_employee_service(server_settings: ServerSettings | None = None) -> EmployeeService:
    """Create the seeded employee service used by the server tier."""

    cfg = server_settings or settings.server
    faker = Faker()
    if cfg.faker_seed is not None:
        faker.seed_instance(cfg.faker_seed)

    employees = generate_employees(
        faker, cfg.seed_employees, email_template=cfg.email_template
    )
    logger.info("employee.directory_seeded", extra={"collection_size": len(employees)})
    return EmployeeService(faker, employees, email_template=cfg.email_template)
