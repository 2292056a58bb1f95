"""Server tier routes: the mock employee directory.

Every route goes through the process-wide rate limiter first. Handlers are
plain functions, so FastAPI runs them in its threadpool; the service's lock
serializes access to the collection.
"""

import logging
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Request, status
from pydantic import ValidationError

from employee_directory.core.errors import NotFoundAppError, ValidationAppError
from employee_directory.core.rate_limit import enforce_rate_limit
from employee_directory.schemas.employee import (
    CreateEmployeeInput,
    DeleteEmployeeInput,
    Employee,
    Envelope,
)
from employee_directory.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/employees",
    tags=["Employees"],
    dependencies=[Depends(enforce_rate_limit)],
)


def get_employee_service(request: Request) -> EmployeeService:
    """Resolve the directory owned by the running application."""
    return request.app.state.employee_service


ServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]


def parse_employee_id(raw_id: str) -> UUID:
    """Parse a path identifier, rejecting anything that is not a canonical UUID.

    Raises:
        ValidationAppError: If ``raw_id`` is not a valid UUID.
    """
    try:
        parsed = UUID(raw_id)
    except ValueError:
        parsed = None

    # UUID() tolerates braces, urn prefixes and stray whitespace
    if parsed is None or str(parsed) != raw_id.lower():
        raise ValidationAppError(
            code="invalid_employee_id",
            message="Invalid employee ID format",
            details={"field": "id"},
        )
    return parsed


@router.get("", response_model=list[Employee])
def get_all_employees(service: ServiceDep) -> list[Employee]:
    employees = service.list_all()
    logger.info("employees.listed", extra={"count": len(employees)})
    return employees


@router.get("/search/{search_string}", response_model=list[Employee])
def search_employees_by_name(search_string: str, service: ServiceDep) -> list[Employee]:
    """Case-insensitive name search; a blank search string is rejected."""
    if not search_string.strip():
        raise ValidationAppError(
            code="blank_search_string",
            message="Search string must not be blank",
            details={"field": "search_string"},
        )

    employees = service.search_by_name(search_string)
    logger.info("employees.searched", extra={"count": len(employees)})
    return employees


@router.get("/highestSalary", response_model=int)
def get_highest_salary(service: ServiceDep) -> int:
    salary = service.highest_salary()
    if salary is None:
        raise NotFoundAppError(
            code="highest_salary_not_found",
            message="No employee has a salary",
        )
    return salary


@router.get("/topTenHighestEarningEmployeeNames", response_model=list[str])
def get_top_ten_highest_earning_employee_names(service: ServiceDep) -> list[str]:
    names = service.top_ten_highest_earning_names()
    logger.info("employees.top_earners", extra={"count": len(names)})
    return names


@router.get("/{employee_id}", response_model=Employee)
def get_employee_by_id(employee_id: str, service: ServiceDep) -> Employee:
    uuid_ = parse_employee_id(employee_id)
    employee = service.find_by_id(uuid_)
    if employee is None:
        raise NotFoundAppError(
            code="employee_not_found",
            message="Employee not found",
            details={"field": "id", "value": employee_id},
        )
    return employee


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
def create_employee(employee_input: CreateEmployeeInput, service: ServiceDep) -> Employee:
    employee = service.create(employee_input)
    logger.info("employees.created", extra={"employee_id": str(employee.id)})
    return employee


@router.delete("/{employee_id}", response_model=str)
def delete_employee_by_id(employee_id: str, service: ServiceDep) -> str:
    uuid_ = parse_employee_id(employee_id)
    if not service.delete_by_id(uuid_):
        raise NotFoundAppError(
            code="employee_not_found",
            message="Employee not found",
            details={"field": "id", "value": employee_id},
        )
    logger.info("employees.deleted", extra={"employee_id": employee_id})
    return "Employee deleted successfully"


@router.delete("", response_model=Envelope[bool])
def delete_employee_by_name(
    service: ServiceDep,
    payload: Annotated[Any, Body()] = None,
) -> Envelope[bool]:
    """Legacy delete-by-name endpoint answering with a response envelope.

    Invalid payloads yield a failed envelope rather than an HTTP error.
    """
    if payload is None:
        logger.warning("employees.legacy_delete_invalid", extra={"reason": "missing_body"})
        return Envelope[bool].failed("Invalid input: null")

    try:
        delete_input = DeleteEmployeeInput.model_validate(payload)
    except ValidationError as exc:
        logger.warning(
            "employees.legacy_delete_invalid",
            extra={"reason": "validation_failed", "error_count": exc.error_count()},
        )
        return Envelope[bool].failed("Validation failed")

    deleted = service.delete_by_name(delete_input.name)
    logger.info("employees.legacy_delete", extra={"deleted": deleted})
    return Envelope[bool].handled_with(deleted)
