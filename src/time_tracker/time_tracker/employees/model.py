from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee who submits daily reports.

    `employee_id` is the business code (e.g. "EMP001"); `id` is the row key.
    """

    id: Optional[int]
    employee_id: str
    employee_name: str

    def as_dict(self) -> dict:
        return {"id": self.id, "employee_id": self.employee_id, "employee_name": self.employee_name}
