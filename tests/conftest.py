from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

import pytest

from src.time_tracker.time_tracker.container import wire_container
from src.time_tracker.time_tracker.core.enums import ProjectStatus
from src.time_tracker.time_tracker.core.exceptions import ConflictError, MailDeliveryError
from src.time_tracker.time_tracker.employees.model import Employee
from src.time_tracker.time_tracker.projects.model import Project
from src.time_tracker.time_tracker.reports.model import DailyReport, TimeEntry


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_code: dict[str, Employee] = {}
        self._id = 0
        for e in employees:
            self.create(employee_id=e[0], employee_name=e[1])

    def list_all(self):
        return sorted(self._by_code.values(), key=lambda e: e.employee_name)

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_code.get(employee_id)

    def create(self, *, employee_id: str, employee_name: str) -> int:
        if employee_id in self._by_code:
            raise ConflictError("Employee ID already exists")
        self._id += 1
        self._by_code[employee_id] = Employee(id=self._id, employee_id=employee_id, employee_name=employee_name)
        return self._id

    def delete_by_employee_id(self, employee_id: str) -> bool:
        return self._by_code.pop(employee_id, None) is not None


class InMemoryReports:
    def __init__(self):
        self.reports: dict[int, DailyReport] = {}
        self._id = 0

    def get_for_employee_and_date(self, employee_id: str, report_date: date):
        for r in self.reports.values():
            if r.employee_id == employee_id and r.report_date == report_date:
                return r
        return None

    def insert_report_with_entries(self, *, employee_id: str, employee_name: str, report_date: date, entries) -> int:
        if self.get_for_employee_and_date(employee_id, report_date):
            raise ConflictError("A report for this date has already been submitted")
        report_id = self._id + 1
        stored = tuple(self.store_entry(report_id, e) for e in entries)
        self._id = report_id
        self.reports[report_id] = DailyReport(
            report_id=report_id,
            employee_id=employee_id,
            employee_name=employee_name,
            report_date=report_date,
            entries=stored,
        )
        return report_id

    def store_entry(self, report_id: int, entry: TimeEntry) -> TimeEntry:
        return entry

    def list_in_range(self, *, employee_id: str, start_date=None, end_date=None):
        items = [
            replace(r, entries=tuple(sorted(r.entries, key=lambda e: e.start_time)))
            for r in self.reports.values()
            if r.employee_id == employee_id
            and (start_date is None or r.report_date >= start_date)
            and (end_date is None or r.report_date <= end_date)
        ]
        items.sort(key=lambda r: r.report_date, reverse=True)
        return items

    def add(self, employee_id: str, employee_name: str, report_date: date, *entries: TimeEntry) -> int:
        return self.insert_report_with_entries(
            employee_id=employee_id, employee_name=employee_name, report_date=report_date, entries=entries
        )


class InMemoryProjects:
    def __init__(self, reports: Optional[InMemoryReports] = None):
        self.projects: dict[int, Project] = {}
        self._id = 0
        self._reports = reports

    def list_for_employee(self, employee_id: str):
        return [p for p in self.projects.values() if p.employee_id == employee_id]

    def get_by_id(self, project_id: int):
        return self.projects.get(int(project_id))

    def create(self, *, employee_id, project_name, start_date, end_date) -> int:
        self._id += 1
        self.projects[self._id] = Project(
            project_id=self._id,
            employee_id=employee_id,
            project_name=project_name,
            start_date=start_date,
            end_date=end_date,
        )
        return self._id

    def update(self, *, project_id, project_name, start_date, end_date) -> bool:
        p = self.projects.get(int(project_id))
        if not p:
            return False
        self.projects[p.project_id] = replace(p, project_name=project_name, start_date=start_date, end_date=end_date)
        return True

    def update_status(self, *, project_id, status: ProjectStatus) -> bool:
        p = self.projects.get(int(project_id))
        if not p:
            return False
        self.projects[p.project_id] = replace(p, status=status)
        return True

    def delete_with_entries(self, project_id: int) -> int:
        deleted = 0
        if self._reports:
            for rid, r in list(self._reports.reports.items()):
                kept = tuple(e for e in r.entries if e.project_id != project_id)
                deleted += len(r.entries) - len(kept)
                self._reports.reports[rid] = replace(r, entries=kept)
        self.projects.pop(int(project_id), None)
        return deleted


class RecordingMailer:
    def __init__(self):
        self.sent: list[dict] = []

    def send(self, to, subject, html_body, text_body) -> None:
        self.sent.append({"to": list(to), "subject": subject, "html": html_body, "text": text_body})


class FailingMailer:
    def send(self, to, subject, html_body, text_body) -> None:
        raise MailDeliveryError("Failed to send report email")


@pytest.fixture
def employees():
    return InMemoryEmployees([("EMP001", "Asha Verma"), ("EMP002", "Rahul Mehta")])


@pytest.fixture
def reports():
    return InMemoryReports()


@pytest.fixture
def projects(reports):
    return InMemoryProjects(reports)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def container(employees, projects, reports, mailer):
    return wire_container(
        employees_repo=employees,
        projects_repo=projects,
        reports_repo=reports,
        mailer=mailer,
        hr_email="hr@example.com",
        company_name="Test Company",
    )


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.time_tracker.time_tracker.main import create_app

    app = create_app(container)
    return app.test_client()


@pytest.fixture
def failing_container(employees, projects, reports):
    return wire_container(
        employees_repo=employees,
        projects_repo=projects,
        reports_repo=reports,
        mailer=FailingMailer(),
        hr_email="hr@example.com",
        company_name="Test Company",
    )
