from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ProjectStatus
from ..reports.model import ProjectMeta


@dataclass(frozen=True)
class Project:
    """Domain entity: a project an employee logs time against."""

    project_id: int
    employee_id: str
    project_name: str
    start_date: Optional[date]
    end_date: Optional[date]
    status: ProjectStatus = ProjectStatus.ACTIVE

    def to_meta(self) -> ProjectMeta:
        return ProjectMeta(
            project_id=self.project_id,
            project_name=self.project_name,
            start_date=self.start_date,
            end_date=self.end_date,
            status=self.status,
        )

    def as_dict(self) -> dict:
        return {
            "id": self.project_id,
            "employee_id": self.employee_id,
            "project_name": self.project_name,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "status": self.status.value,
        }
