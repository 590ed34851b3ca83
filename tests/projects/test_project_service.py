from __future__ import annotations

from datetime import date

import pytest

from src.time_tracker.time_tracker.core.enums import ProjectStatus
from src.time_tracker.time_tracker.core.exceptions import NotFoundError, ValidationError
from src.time_tracker.time_tracker.projects.service import ProjectService
from src.time_tracker.time_tracker.reports.model import TimeEntry


@pytest.fixture
def svc(projects, employees) -> ProjectService:
    return ProjectService(projects, employees)


def test_create_and_list_project(svc):
    project_id = svc.create_project(
        employee_id="EMP001", project_name="Apollo", start_date="2024-01-01", end_date="2024-03-31"
    )

    [project] = svc.list_for_employee("EMP001")
    assert project.project_id == project_id
    assert project.start_date == date(2024, 1, 1)
    assert project.status is ProjectStatus.ACTIVE
    assert svc.list_for_employee("EMP002") == []


def test_create_project_requires_known_employee(svc):
    with pytest.raises(NotFoundError, match="Employee not found"):
        svc.create_project(employee_id="EMP404", project_name="Apollo", start_date="2024-01-01", end_date="2024-01-02")


@pytest.mark.parametrize(
    "start_date,end_date,message",
    [
        ("", "2024-01-02", "Start date and end date are required"),
        ("2024-02-01", "2024-01-01", "End date must be after start date"),
        ("01/02/2024", "2024-03-01", "YYYY-MM-DD"),
    ],
)
def test_create_project_validates_dates(svc, start_date, end_date, message):
    with pytest.raises(ValidationError, match=message):
        svc.create_project(employee_id="EMP001", project_name="Apollo", start_date=start_date, end_date=end_date)


def test_update_project(svc, projects):
    project_id = svc.create_project(
        employee_id="EMP001", project_name="Apollo", start_date="2024-01-01", end_date="2024-03-31"
    )

    svc.update_project(project_id=project_id, project_name="Apollo II", start_date="2024-02-01", end_date="2024-04-30")

    project = projects.get_by_id(project_id)
    assert project.project_name == "Apollo II"
    assert project.end_date == date(2024, 4, 30)


def test_update_missing_project(svc):
    with pytest.raises(NotFoundError, match="Project not found"):
        svc.update_project(project_id=99, project_name="X", start_date="2024-01-01", end_date="2024-01-02")


def test_update_status(svc, projects):
    project_id = svc.create_project(
        employee_id="EMP001", project_name="Apollo", start_date="2024-01-01", end_date="2024-03-31"
    )

    assert svc.update_status(project_id=project_id, status=" Paused ") is ProjectStatus.PAUSED
    assert projects.get_by_id(project_id).status is ProjectStatus.PAUSED

    with pytest.raises(ValidationError, match="Status must be one of: active, paused, completed"):
        svc.update_status(project_id=project_id, status="archived")


def test_delete_project_removes_its_entries(svc, reports):
    project_id = svc.create_project(
        employee_id="EMP001", project_name="Apollo", start_date="2024-01-01", end_date="2024-03-31"
    )
    report_id = reports.add(
        "EMP001",
        "Asha Verma",
        date(2024, 1, 10),
        TimeEntry("Apollo", "09:00", "10:00", project_id=project_id),
        TimeEntry("Other", "10:00", "11:00"),
    )

    assert svc.delete_project(project_id) == 1
    assert [e.project_name for e in reports.reports[report_id].entries] == ["Other"]
    with pytest.raises(NotFoundError):
        svc.delete_project(project_id)
