from abc import ABC, abstractmethod
from uuid import UUID

from employee_directory.schemas.employee import CreateEmployeeInput, Employee


class AbstractEmployeeServerClient(ABC):
	"""Interface for clients of the employee server tier.

	Implementations translate transport and status failures into AppError
	subclasses so callers never deal with HTTP details.
	"""

	@abstractmethod
	async def list_employees(self) -> list[Employee]:
		"""Fetch every employee known to the server."""
		...

	@abstractmethod
	async def get_employee(self, employee_id: UUID) -> Employee | None:
		"""Fetch one employee, or None when the server does not know the id."""
		...

	@abstractmethod
	async def create_employee(self, employee_input: CreateEmployeeInput) -> Employee:
		"""Create an employee and return the record assigned by the server."""
		...

	@abstractmethod
	async def delete_employee(self, employee_id: UUID) -> None:
		"""Delete the employee with ``employee_id``.

		Raises:
			NotFoundAppError: If the server does not know the id.
		"""
		...

	async def aclose(self) -> None:
		"""Release network resources held by the client."""
