from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, mysql_time_to_clock
from .model import DailyReport, TimeEntry
from .repository import ReportRepository


def _to_entry(row: dict) -> TimeEntry:
    return TimeEntry(
        project_id=int(row["project_id"]) if row.get("project_id") is not None else None,
        project_name=row["project_name"],
        start_time=mysql_time_to_clock(row["start_time"]),
        end_time=mysql_time_to_clock(row["end_time"]),
        description=row.get("task_description") or "",
    )


def _to_report(row: dict, entries: Sequence[TimeEntry] = ()) -> DailyReport:
    return DailyReport(
        report_id=int(row["id"]),
        employee_id=str(row["employee_id"]),
        employee_name=row["employee_name"],
        report_date=row["report_date"],
        entries=tuple(entries),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, report_date: date) -> Optional[DailyReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, employee_id, employee_name, report_date
                FROM daily_reports
                WHERE employee_id=%s AND report_date=%s
                """,
                (employee_id, report_date),
            )
            row = fetchone(cur)
            if not row:
                return None
            cur.execute(
                """
                SELECT report_id, project_id, project_name, start_time, end_time, task_description
                FROM daily_report_projects
                WHERE report_id=%s
                ORDER BY start_time ASC, id ASC
                """,
                (int(row["id"]),),
            )
            return _to_report(row, [_to_entry(r) for r in fetchall(cur)])

    def insert_report_with_entries(
        self,
        *,
        employee_id: str,
        employee_name: str,
        report_date: date,
        entries: Sequence[TimeEntry],
    ) -> int:
        # One transaction: a failed entry insert must not leave an empty report behind.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO daily_reports(employee_id, employee_name, report_date) VALUES(%s,%s,%s)",
                    (employee_id, employee_name, report_date),
                )
                report_id = int(cur.lastrowid)
                if entries:
                    cur.executemany(
                        """
                        INSERT INTO daily_report_projects(report_id, project_id, project_name, start_time, end_time, task_description)
                        VALUES(%s,%s,%s,%s,%s,%s)
                        """,
                        [
                            (report_id, e.project_id, e.project_name, e.start_time, e.end_time, e.description or "")
                            for e in entries
                        ],
                    )
                return report_id
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("A report for this date has already been submitted") from e
            raise

    def list_in_range(
        self,
        *,
        employee_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[DailyReport]:
        where = ["employee_id=%s"]
        params: list = [employee_id]
        if start_date:
            where.append("report_date >= %s")
            params.append(start_date)
        if end_date:
            where.append("report_date <= %s")
            params.append(end_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, employee_id, employee_name, report_date
                FROM daily_reports
                WHERE {' AND '.join(where)}
                ORDER BY report_date DESC
                """,
                tuple(params),
            )
            reports = fetchall(cur)
            if not reports:
                return []

            report_ids = [int(r["id"]) for r in reports]
            placeholders = ",".join(["%s"] * len(report_ids))
            cur.execute(
                f"""
                SELECT report_id, project_id, project_name, start_time, end_time, task_description
                FROM daily_report_projects
                WHERE report_id IN ({placeholders})
                ORDER BY start_time ASC, id ASC
                """,
                tuple(report_ids),
            )
            by_report: dict[int, list[TimeEntry]] = {}
            for row in fetchall(cur):
                by_report.setdefault(int(row["report_id"]), []).append(_to_entry(row))

            return [_to_report(r, by_report.get(int(r["id"]), [])) for r in reports]
