from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..common.datetime_utils import format_long_date, mail_timestamp
from ..core.constants import DEFAULT_COMPANY_NAME, SYSTEM_NAME
from ..reports.assembler import DailySummary, MonthlySummary

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


@dataclass(frozen=True)
class RenderedMail:
    subject: str
    html_body: str
    text_body: str


class ReportMailRenderer:
    """Turns assembled summaries into email subject + HTML/text bodies."""

    def __init__(self, *, company_name: str = DEFAULT_COMPANY_NAME, template_dir: Path = TEMPLATE_DIR):
        self._company_name = company_name
        self._env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def _render(self, name: str, **context) -> str:
        return self._env.get_template(name).render(**context)

    def _footer(self, generated_at: Optional[datetime]) -> dict:
        generated_at = generated_at or mail_timestamp()
        return {
            "company_name": self._company_name,
            "system_name": SYSTEM_NAME,
            "generated_on": generated_at.strftime("%Y-%m-%d %H:%M"),
        }

    def render_daily(
        self,
        summary: DailySummary,
        *,
        submitted_by: str,
        generated_at: Optional[datetime] = None,
    ) -> RenderedMail:
        context = {
            "summary": summary.as_dict(),
            "report_date_label": format_long_date(summary.report_date),
            "submitted_by": submitted_by,
            **self._footer(generated_at),
        }
        return RenderedMail(
            subject=f"Daily Time Report - {summary.employee_name} ({context['report_date_label']})",
            html_body=self._render("daily_report.html", **context),
            text_body=self._render("daily_report.txt", **context),
        )

    def render_monthly(
        self,
        summary: MonthlySummary,
        *,
        employee_id: str,
        generated_at: Optional[datetime] = None,
    ) -> RenderedMail:
        employee_name = summary.employee_name or employee_id
        context = {
            "summary": summary.as_dict(),
            "employee_name": employee_name,
            "employee_id": employee_id,
            **self._footer(generated_at),
        }
        return RenderedMail(
            subject=f"Monthly Time Report - {employee_name} ({summary.date_range_label})",
            html_body=self._render("monthly_report.html", **context),
            text_body=self._render("monthly_report.txt", **context),
        )
