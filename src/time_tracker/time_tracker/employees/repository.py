from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Services depend on this interface, not on a concrete database.
    """

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(self, *, employee_id: str, employee_name: str) -> int:
        """Insert and return the row id; raises ConflictError on a duplicate employee_id."""

        raise NotImplementedError

    def delete_by_employee_id(self, employee_id: str) -> bool:
        raise NotImplementedError
