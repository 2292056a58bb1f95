"""Read-only queries over a sequence of employee records.

These are pure functions: they never mutate their input and never raise for
"not found", which is expressed as ``None`` or an empty list. Records with a
missing name or salary are skipped by the queries that need those fields.

Both the server tier (over its own collection) and the api tier (over the
list fetched from the server) use them.
"""

from __future__ import annotations

from typing import Sequence
from uuid import UUID

from employee_directory.schemas.employee import Employee

TOP_EARNERS_LIMIT = 10


def find_by_id(employees: Sequence[Employee], employee_id: UUID) -> Employee | None:
    """Return the record with ``employee_id`` or None."""

    return next((employee for employee in employees if employee.id == employee_id), None)


def find_index_by_name(employees: Sequence[Employee], name: str) -> int | None:
    """Return the position of the first record whose name equals ``name`` ignoring case."""

    wanted = name.casefold()
    for index, employee in enumerate(employees):
        if employee.name is not None and employee.name.casefold() == wanted:
            return index
    return None


def search_by_name(employees: Sequence[Employee], fragment: str) -> list[Employee]:
    """Case-insensitive substring match on the employee name.

    A blank fragment matches nothing (it does not return every record).
    """

    if not fragment or not fragment.strip():
        return []

    wanted = fragment.casefold()
    return [
        employee
        for employee in employees
        if employee.name is not None and wanted in employee.name.casefold()
    ]


def highest_salary(employees: Sequence[Employee]) -> int | None:
    """Maximum salary among records that have one, or None."""

    return max(
        (employee.salary for employee in employees if employee.salary is not None),
        default=None,
    )


def top_n_earners(employees: Sequence[Employee], n: int = TOP_EARNERS_LIMIT) -> list[str]:
    """Names of the ``n`` best paid employees, highest salary first.

    Only records with both a name and a salary take part. Ties keep their
    original relative order.
    """

    if n <= 0:
        return []

    ranked = sorted(
        (
            employee
            for employee in employees
            if employee.name is not None and employee.salary is not None
        ),
        key=lambda employee: employee.salary,
        reverse=True,
    )
    return [employee.name for employee in ranked[:n]]
