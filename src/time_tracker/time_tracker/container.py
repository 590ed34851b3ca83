from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_COMPANY_NAME, DEFAULT_HR_EMAIL
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .mail.mailer import MailSettings, Mailer, SMTPMailer
from .mail.renderer import ReportMailRenderer
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.repository import ProjectRepository
from .projects.service import ProjectService
from .reports.assembler import ReportAssembler
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    projects_repo: ProjectRepository
    reports_repo: ReportRepository
    mailer: Mailer

    employee_service: EmployeeService
    project_service: ProjectService
    report_service: ReportService

    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    projects_repo: ProjectRepository,
    reports_repo: ReportRepository,
    mailer: Mailer,
    hr_email: str = DEFAULT_HR_EMAIL,
    company_name: str = DEFAULT_COMPANY_NAME,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any repository/mailer implementations."""

    employee_service = EmployeeService(employees_repo)
    project_service = ProjectService(projects_repo, employees_repo)
    report_service = ReportService(
        reports_repo,
        employees_repo,
        projects_repo,
        mailer=mailer,
        renderer=ReportMailRenderer(company_name=company_name),
        assembler=ReportAssembler(),
        hr_email=hr_email,
    )

    return Container(
        employees_repo=employees_repo,
        projects_repo=projects_repo,
        reports_repo=reports_repo,
        mailer=mailer,
        employee_service=employee_service,
        project_service=project_service,
        report_service=report_service,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    mail_config: Optional[dict] = None,
    hr_email: str = DEFAULT_HR_EMAIL,
    company_name: str = DEFAULT_COMPANY_NAME,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        projects_repo=MySQLProjectRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        mailer=SMTPMailer(MailSettings.from_dict(mail_config or {})),
        hr_email=hr_email,
        company_name=company_name,
        conn=conn,
    )
