from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailyReport, TimeEntry


class ReportRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: str, report_date: date) -> Optional[DailyReport]:
        raise NotImplementedError

    def insert_report_with_entries(
        self,
        *,
        employee_id: str,
        employee_name: str,
        report_date: date,
        entries: Sequence[TimeEntry],
    ) -> int:
        """Store a report and its entries as one unit and return the report id.

        Either both are stored or neither is. Raises ConflictError when the
        employee already has a report for `report_date`.
        """

        raise NotImplementedError

    def list_in_range(
        self,
        *,
        employee_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[DailyReport]:
        """Reports newest first, each with its entries ordered by start time."""

        raise NotImplementedError
