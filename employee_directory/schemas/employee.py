"""Pydantic schemas for employee records and request/response payloads."""

from __future__ import annotations

from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_AGE = 16
MAX_AGE = 75

STATUS_HANDLED = "Successfully processed request."
STATUS_ERROR = "Failed to process request."

T = TypeVar("T")


def _require_text(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be blank")
    return value


class Employee(BaseModel):
    """A single employee record.

    Name and salary are optional: records without them are skipped by the
    aggregate queries instead of failing them.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: UUID
    name: str | None = Field(default=None, alias="employee_name")
    salary: int | None = Field(default=None, alias="employee_salary")
    age: int | None = Field(default=None, alias="employee_age")
    title: str | None = Field(default=None, alias="employee_title")
    email: str | None = Field(default=None, alias="employee_email")


class CreateEmployeeInput(BaseModel):
    """Payload accepted when creating an employee."""

    name: str = Field(..., description="Full name; must not be blank.")
    salary: int = Field(..., gt=0, description="Yearly salary; must be positive.")
    age: int = Field(
        ...,
        ge=MIN_AGE,
        le=MAX_AGE,
        description=f"Age between {MIN_AGE} and {MAX_AGE}.",
    )
    title: str = Field(..., description="Job title; must not be blank.")

    @field_validator("name", "title")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        return _require_text(value)


class DeleteEmployeeInput(BaseModel):
    """Payload of the legacy delete-by-name endpoint."""

    name: str

    @field_validator("name")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        return _require_text(value)


class Envelope(BaseModel, Generic[T]):
    """Legacy response wrapper: ``{"data", "status", "error"}``."""

    data: T | None = None
    status: str
    error: str | None = None

    @classmethod
    def handled_with(cls, data: T) -> "Envelope[T]":
        return cls(data=data, status=STATUS_HANDLED)

    @classmethod
    def failed(cls, message: str) -> "Envelope[T]":
        return cls(status=STATUS_ERROR, error=message)
