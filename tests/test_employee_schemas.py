"""Tests for employee payload validation and JSON field naming."""

import uuid

import pytest
from pydantic import ValidationError

from employee_directory.schemas.employee import (
    STATUS_ERROR,
    STATUS_HANDLED,
    CreateEmployeeInput,
    DeleteEmployeeInput,
    Employee,
    Envelope,
)


def _payload(**overrides) -> dict:
    payload = {"name": "John Doe", "salary": 75000, "age": 30, "title": "Engineer"}
    payload.update(overrides)
    return payload


class TestEmployee:
    def test_serializes_with_employee_prefixed_names(self) -> None:
        employee_id = uuid.uuid4()
        employee = Employee(
            id=employee_id,
            name="John Doe",
            salary=75000,
            age=30,
            title="Engineer",
            email="jd@company.com",
        )

        assert employee.model_dump(by_alias=True, mode="json") == {
            "id": str(employee_id),
            "employee_name": "John Doe",
            "employee_salary": 75000,
            "employee_age": 30,
            "employee_title": "Engineer",
            "employee_email": "jd@company.com",
        }

    def test_parses_aliased_payload(self) -> None:
        employee = Employee.model_validate(
            {"id": str(uuid.uuid4()), "employee_name": "Jane", "employee_salary": 1}
        )

        assert employee.name == "Jane"
        assert employee.salary == 1
        assert employee.title is None

    def test_is_immutable(self) -> None:
        employee = Employee(id=uuid.uuid4(), name="A")
        with pytest.raises(ValidationError):
            employee.name = "B"


class TestCreateEmployeeInput:
    def test_accepts_valid_payload(self) -> None:
        parsed = CreateEmployeeInput.model_validate(_payload())
        assert parsed.name == "John Doe"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"name": "   "},
            {"title": " "},
            {"salary": 0},
            {"salary": -100},
            {"age": 15},
            {"age": 76},
        ],
    )
    def test_rejects_invalid_fields(self, overrides: dict) -> None:
        with pytest.raises(ValidationError):
            CreateEmployeeInput.model_validate(_payload(**overrides))

    @pytest.mark.parametrize("age", [16, 75])
    def test_age_bounds_are_inclusive(self, age: int) -> None:
        assert CreateEmployeeInput.model_validate(_payload(age=age)).age == age

    @pytest.mark.parametrize("missing", ["name", "salary", "age", "title"])
    def test_all_fields_required(self, missing: str) -> None:
        payload = _payload()
        del payload[missing]
        with pytest.raises(ValidationError):
            CreateEmployeeInput.model_validate(payload)


class TestDeleteEmployeeInput:
    def test_rejects_blank_name(self) -> None:
        with pytest.raises(ValidationError):
            DeleteEmployeeInput(name=" ")

    def test_accepts_name(self) -> None:
        assert DeleteEmployeeInput(name="John").name == "John"


class TestEnvelope:
    def test_handled_with(self) -> None:
        envelope = Envelope[bool].handled_with(True)

        assert envelope.model_dump() == {"data": True, "status": STATUS_HANDLED, "error": None}

    def test_failed(self) -> None:
        envelope = Envelope[bool].failed("Validation failed")

        assert envelope.data is None
        assert envelope.status == STATUS_ERROR
        assert envelope.error == "Validation failed"
