from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..common.validators import optional_email, require_non_empty
from ..core.constants import DEFAULT_HR_EMAIL
from ..core.exceptions import ConflictError, MailDeliveryError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..mail.mailer import Mailer
from ..mail.renderer import ReportMailRenderer
from ..projects.repository import ProjectRepository
from .assembler import DailySummary, DateRange, MonthlySummary, ReportAssembler
from .model import TimeEntry
from .repository import ReportRepository
from .time_math import duration_minutes, parse_clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    report_id: int
    summary: DailySummary
    recipients: tuple[str, ...]

    @property
    def emailed(self) -> bool:
        return bool(self.recipients)


@dataclass(frozen=True)
class MonthlyMailResult:
    summary: MonthlySummary
    recipients: tuple[str, ...]


class ReportService:
    """Use cases around daily and monthly reports.

    Validates submissions, stores them, feeds stored data to the pure
    ReportAssembler and hands the rendered result to the mailer.
    """

    def __init__(
        self,
        reports: ReportRepository,
        employees: EmployeeRepository,
        projects: Optional[ProjectRepository] = None,
        *,
        mailer: Mailer,
        renderer: Optional[ReportMailRenderer] = None,
        assembler: Optional[ReportAssembler] = None,
        hr_email: str = DEFAULT_HR_EMAIL,
    ):
        self._reports = reports
        self._employees = employees
        self._projects = projects
        self._mailer = mailer
        self._renderer = renderer or ReportMailRenderer()
        self._assembler = assembler or ReportAssembler()
        self._hr_email = hr_email

    # Daily reports

    def parse_entries(self, raw_entries: Any, *, employee_id: Optional[str] = None) -> list[TimeEntry]:
        """Validate raw entry dicts from a request; reject any entry that does not end after it starts."""
        if raw_entries is None:
            return []
        if not isinstance(raw_entries, (list, tuple)):
            raise ValidationError("Entries must be a list")

        entries: list[TimeEntry] = []
        for i, raw in enumerate(raw_entries, start=1):
            if not isinstance(raw, dict):
                raise ValidationError(f"Entry {i}: must be an object")

            project_id = self._parse_project_id(raw.get("project_id"), i)
            project_name = str(raw.get("project_name") or "").strip()
            if project_id is not None and self._projects:
                project = self._projects.get_by_id(project_id)
                if not project or (employee_id and project.employee_id != employee_id):
                    raise ValidationError(f"Entry {i}: project {project_id} does not exist for this employee")
                project_name = project_name or project.project_name
            if not project_name:
                raise ValidationError(f"Entry {i}: project name is required")

            start_time = self._clock(raw.get("start_time"), i)
            end_time = self._clock(raw.get("end_time"), i)
            if duration_minutes(start_time, end_time) <= 0:
                raise ValidationError(f"Entry {i}: end time must be after start time")

            entries.append(
                TimeEntry(
                    project_id=project_id,
                    project_name=project_name,
                    start_time=start_time,
                    end_time=end_time,
                    description=str(raw.get("description") or "").strip(),
                )
            )
        return entries

    def preview_daily(self, *, employee_name: str, report_date: str, entries: Any) -> DailySummary:
        employee_name = require_non_empty(employee_name, "Employee name")
        day = self._require_date(report_date, "Date")
        return self._assembler.build_daily_summary(self.parse_entries(entries), employee_name, day)

    def submit_daily_report(
        self,
        *,
        employee_id: str,
        report_date: str,
        entries: Any,
        additional_email: Optional[str] = None,
    ) -> SubmissionResult:
        employee = self._require_employee(employee_id)
        day = self._require_date(report_date, "Date")
        extra = optional_email(additional_email, "Additional email")
        parsed = self.parse_entries(entries, employee_id=employee.employee_id)

        if self._reports.get_for_employee_and_date(employee.employee_id, day):
            raise ConflictError(f"A report for {day.isoformat()} has already been submitted")

        report_id = self._reports.insert_report_with_entries(
            employee_id=employee.employee_id,
            employee_name=employee.employee_name,
            report_date=day,
            entries=parsed,
        )
        logger.info("Stored report %s for %s on %s (%d entries)", report_id, employee.employee_id, day, len(parsed))

        summary = self._assembler.build_daily_summary(parsed, employee.employee_name, day)
        if not parsed:
            return SubmissionResult(report_id=report_id, summary=summary, recipients=())

        recipients = self._recipients(extra)
        mail = self._renderer.render_daily(summary, submitted_by=f"{employee.employee_id}-{employee.employee_name}")
        try:
            self._mailer.send(recipients, mail.subject, mail.html_body, mail.text_body)
        except MailDeliveryError as e:
            raise MailDeliveryError(str(e), report_id=report_id) from e
        return SubmissionResult(report_id=report_id, summary=summary, recipients=tuple(recipients))

    # Monthly reports

    def monthly_summary(
        self,
        *,
        employee_id: str,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> MonthlySummary:
        employee = self._require_employee(employee_id)
        date_range = self._date_range(from_date, to_date)

        reports = self._reports.list_in_range(
            employee_id=employee.employee_id,
            start_date=date_range.from_date,
            end_date=date_range.to_date,
        )
        meta = [p.to_meta() for p in self._projects.list_for_employee(employee.employee_id)] if self._projects else None

        return self._assembler.build_monthly_summary(
            reports,
            meta,
            date_range,
            employee_name=employee.employee_name,
        )

    def send_monthly_report(
        self,
        *,
        employee_id: str,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        additional_email: Optional[str] = None,
    ) -> MonthlyMailResult:
        extra = optional_email(additional_email, "Additional email")
        summary = self.monthly_summary(employee_id=employee_id, from_date=from_date, to_date=to_date)
        if not summary.reports:
            raise ValidationError("No reports found for the selected criteria")

        recipients = self._recipients(extra)
        mail = self._renderer.render_monthly(summary, employee_id=str(employee_id).strip())
        self._mailer.send(recipients, mail.subject, mail.html_body, mail.text_body)
        return MonthlyMailResult(summary=summary, recipients=tuple(recipients))

    @staticmethod
    def export_rows(summary: MonthlySummary) -> list[dict]:
        """One flat row per entry, for CSV export."""
        rows: list[dict] = []
        for r in summary.as_dict()["reports"]:
            for e in r["entries"]:
                rows.append(
                    {
                        "report_date": r["report_date"],
                        "employee_id": r["employee_id"],
                        "employee_name": r["employee_name"],
                        "project_name": e["project_name"],
                        "start_time": e["start_time"],
                        "end_time": e["end_time"],
                        "duration_minutes": e["duration_minutes"],
                        "duration": e["duration"],
                        "description": e["description"],
                    }
                )
        return rows

    # Helpers

    def _require_employee(self, employee_id: str) -> Employee:
        employee_id = require_non_empty(employee_id, "Employee ID")
        employee = self._employees.get_by_employee_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _recipients(self, extra: Optional[str]) -> list[str]:
        recipients = [self._hr_email]
        if extra and extra.lower() != self._hr_email.lower():
            recipients.append(extra)
        return recipients

    @staticmethod
    def _require_date(value: Optional[str], field_name: str) -> date:
        day = parse_optional_date(value, field_name)
        if not day:
            raise ValidationError(f"{field_name} is required")
        return day

    @staticmethod
    def _date_range(from_date: Optional[str], to_date: Optional[str]) -> DateRange:
        start = parse_optional_date(from_date, "From date")
        end = parse_optional_date(to_date, "To date")
        if start and end and start > end:
            raise ValidationError("From date must be before or equal to To date")
        return DateRange(from_date=start, to_date=end)

    @staticmethod
    def _parse_project_id(value: Any, index: int) -> Optional[int]:
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Entry {index}: project_id must be a number")

    @staticmethod
    def _clock(value: Any, index: int) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"Entry {index}: start and end times are required")
        try:
            return parse_clock(value).strftime("%H:%M")
        except ValidationError as e:
            raise ValidationError(f"Entry {index}: {e}")
