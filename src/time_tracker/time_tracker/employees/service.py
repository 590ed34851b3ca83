from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import ConflictError, NotFoundError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: maintain the employee list shown on the HR dashboard."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get(self, employee_id: str) -> Employee:
        employee_id = require_non_empty(employee_id, "Employee ID")
        employee = self._employees.get_by_employee_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def add_employee(self, *, employee_id: str, employee_name: str) -> int:
        employee_id = require_non_empty(employee_id, "Employee ID")
        employee_name = require_non_empty(employee_name, "Employee name")

        if self._employees.get_by_employee_id(employee_id):
            raise ConflictError("Employee ID already exists")

        row_id = self._employees.create(employee_id=employee_id, employee_name=employee_name)
        logger.info("Added employee %s (%s)", employee_id, employee_name)
        return row_id

    def delete_employee(self, employee_id: str) -> None:
        employee_id = require_non_empty(employee_id, "Employee ID")
        if not self._employees.delete_by_employee_id(employee_id):
            raise NotFoundError("Employee not found")
        logger.info("Deleted employee %s", employee_id)
