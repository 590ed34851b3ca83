from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import ProjectStatus


@dataclass(frozen=True)
class TimeEntry:
    """One project/time-range/description record inside a daily report."""

    project_name: str
    start_time: str
    end_time: str
    description: str = ""
    project_id: Optional[int] = None


@dataclass(frozen=True)
class DailyReport:
    """Entries an employee submitted for one calendar date (immutable once stored)."""

    report_id: Optional[int]
    employee_id: str
    employee_name: str
    report_date: date
    entries: tuple[TimeEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ProjectMeta:
    """Externally maintained project data joined to aggregates for display."""

    project_name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    project_id: Optional[int] = None


@dataclass(frozen=True)
class DayTotal:
    report_date: date
    entry_count: int
    total_minutes: int


@dataclass(frozen=True)
class ProjectAggregate:
    """Worked time for one project across a set of daily reports (derived, never stored)."""

    project_name: str
    total_minutes: int
    first_date: date
    last_date: date
    start_date: date
    end_date: date
    status: ProjectStatus = ProjectStatus.ACTIVE


@dataclass(frozen=True)
class DurationAnomaly:
    """A stored entry whose end time is not after its start time."""

    report_id: Optional[int]
    report_date: date
    project_name: str
    start_time: str
    end_time: str
    minutes: int
