"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any application import so settings are
built for the test run: a small reproducible directory, rate limiting off by
default (tests that need it switch it on), and quiet logs.
"""

import os
import uuid

os.environ["APP_ENV"] = "testing"
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SERVER_SEED_EMPLOYEES", "5")
os.environ.setdefault("SERVER_FAKER_SEED", "1234")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from faker import Faker

from employee_directory.core.rate_limit import reset_rate_limiter
from employee_directory.schemas.employee import Employee
from employee_directory.services.employee_service import EmployeeService


def make_employee(
    name: str | None = "John Doe",
    salary: int | None = 75000,
    age: int | None = 30,
    title: str | None = "Software Engineer",
    email: str | None = "john.doe@company.com",
) -> Employee:
    return Employee(
        id=uuid.uuid4(),
        name=name,
        salary=salary,
        age=age,
        title=title,
        email=email,
    )


@pytest.fixture
def employees() -> list[Employee]:
    """Three employees with distinct salaries, in insertion order."""
    return [
        make_employee("John Doe", 75000, 30, "Software Engineer", "john.doe@company.com"),
        make_employee("Jane Smith", 85000, 28, "Senior Developer", "jane.smith@company.com"),
        make_employee("Bob Wilson", 95000, 35, "Tech Lead", "bob.wilson@company.com"),
    ]


@pytest.fixture
def faker() -> Faker:
    fake = Faker()
    fake.seed_instance(42)
    return fake


@pytest.fixture
def employee_service(faker: Faker, employees: list[Employee]) -> EmployeeService:
    return EmployeeService(faker, employees)


@pytest.fixture(autouse=True)
def fresh_rate_limiter():
    """Every test starts with a new process-wide limiter."""
    reset_rate_limiter()
    yield
    reset_rate_limiter()
