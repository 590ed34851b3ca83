from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..common.validators import require_non_empty
from ..core.enums import ProjectStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Project
from .repository import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectService:
    """Use case: manage an employee's projects and their status."""

    def __init__(self, projects: ProjectRepository, employees: Optional[EmployeeRepository] = None):
        self._projects = projects
        self._employees = employees

    def list_for_employee(self, employee_id: str) -> Sequence[Project]:
        employee_id = require_non_empty(employee_id, "Employee ID")
        return self._projects.list_for_employee(employee_id)

    def create_project(self, *, employee_id: str, project_name: str, start_date: str, end_date: str) -> int:
        employee_id = require_non_empty(employee_id, "Employee ID")
        project_name = require_non_empty(project_name, "Project name")
        start, end = self._require_date_range(start_date, end_date)

        if self._employees and not self._employees.get_by_employee_id(employee_id):
            raise NotFoundError("Employee not found")

        project_id = self._projects.create(
            employee_id=employee_id,
            project_name=project_name,
            start_date=start,
            end_date=end,
        )
        logger.info("Created project %s %r for %s", project_id, project_name, employee_id)
        return project_id

    def update_project(self, *, project_id: int, project_name: str, start_date: str, end_date: str) -> None:
        project_name = require_non_empty(project_name, "Project name")
        start, end = self._require_date_range(start_date, end_date)

        self._require_project(project_id)
        self._projects.update(project_id=int(project_id), project_name=project_name, start_date=start, end_date=end)

    def update_status(self, *, project_id: int, status: str) -> ProjectStatus:
        try:
            new_status = ProjectStatus(str(status or "").strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in ProjectStatus)
            raise ValidationError(f"Status must be one of: {allowed}")

        self._require_project(project_id)
        self._projects.update_status(project_id=int(project_id), status=new_status)
        return new_status

    def delete_project(self, project_id: int) -> int:
        project = self._require_project(project_id)
        deleted_entries = self._projects.delete_with_entries(int(project_id))
        logger.info(
            "Deleted project %s %r (%d time entries removed)", project.project_id, project.project_name, deleted_entries
        )
        return deleted_entries

    def _require_project(self, project_id: int) -> Project:
        project = self._projects.get_by_id(int(project_id))
        if not project:
            raise NotFoundError("Project not found")
        return project

    @staticmethod
    def _require_date_range(start_date: str, end_date: str) -> tuple[date, date]:
        start = parse_optional_date(start_date, "Start date")
        end = parse_optional_date(end_date, "End date")
        if not start or not end:
            raise ValidationError("Start date and end date are required")
        if start > end:
            raise ValidationError("End date must be after start date")
        return start, end
