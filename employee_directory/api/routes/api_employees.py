"""API tier routes: the employee contract answered through the server tier."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from employee_directory.api.routes.employees import parse_employee_id
from employee_directory.core.errors import NotFoundAppError, ValidationAppError
from employee_directory.schemas.employee import CreateEmployeeInput, Employee
from employee_directory.services.employee_api_service import EmployeeApiService

router = APIRouter(prefix="/employees", tags=["Employees"])


def get_employee_api_service(request: Request) -> EmployeeApiService:
    return request.app.state.employee_api_service


ApiServiceDep = Annotated[EmployeeApiService, Depends(get_employee_api_service)]


@router.get("", response_model=list[Employee])
async def get_all_employees(service: ApiServiceDep) -> list[Employee]:
    return await service.get_all_employees()


@router.get("/search/{search_string}", response_model=list[Employee])
async def search_employees_by_name(search_string: str, service: ApiServiceDep) -> list[Employee]:
    if not search_string.strip():
        raise ValidationAppError(
            code="blank_search_string",
            message="Search string must not be blank",
            details={"field": "search_string"},
        )
    return await service.search_by_name(search_string)


@router.get("/highestSalary", response_model=int)
async def get_highest_salary(service: ApiServiceDep) -> int:
    salary = await service.highest_salary()
    if salary is None:
        raise NotFoundAppError(
            code="highest_salary_not_found",
            message="No employee has a salary",
        )
    return salary


@router.get("/topTenHighestEarningEmployeeNames", response_model=list[str])
async def get_top_ten_highest_earning_employee_names(service: ApiServiceDep) -> list[str]:
    return await service.top_ten_highest_earning_names()


@router.get("/{employee_id}", response_model=Employee)
async def get_employee_by_id(employee_id: str, service: ApiServiceDep) -> Employee:
    employee = await service.get_employee_by_id(parse_employee_id(employee_id))
    if employee is None:
        raise NotFoundAppError(
            code="employee_not_found",
            message="Employee not found",
            details={"field": "id", "value": employee_id},
        )
    return employee


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(employee_input: CreateEmployeeInput, service: ApiServiceDep) -> Employee:
    return await service.create_employee(employee_input)


@router.delete("/{employee_id}", response_model=str)
async def delete_employee_by_id(employee_id: str, service: ApiServiceDep) -> str:
    """Delete an employee and answer with the deleted employee's name."""
    return await service.delete_employee_by_id(parse_employee_id(employee_id))
