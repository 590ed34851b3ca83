from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ProjectStatus
from .model import Project


class ProjectRepository(Protocol):
    def list_for_employee(self, employee_id: str) -> Sequence[Project]:
        raise NotImplementedError

    def get_by_id(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def create(self, *, employee_id: str, project_name: str, start_date: date, end_date: date) -> int:
        raise NotImplementedError

    def update(self, *, project_id: int, project_name: str, start_date: date, end_date: date) -> bool:
        raise NotImplementedError

    def update_status(self, *, project_id: int, status: ProjectStatus) -> bool:
        raise NotImplementedError

    def delete_with_entries(self, project_id: int) -> int:
        """Delete the project and every time entry logged against it.

        Returns the number of deleted time entries.
        """

        raise NotImplementedError
