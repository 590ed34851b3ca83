from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ProjectStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Project
from .repository import ProjectRepository

_COLUMNS = "id, employee_id, project_name, start_date, end_date, status"


def _to_project(row: dict) -> Project:
    return Project(
        project_id=int(row["id"]),
        employee_id=str(row["employee_id"]),
        project_name=row["project_name"],
        start_date=row.get("start_date"),
        end_date=row.get("end_date"),
        status=ProjectStatus(row.get("status") or ProjectStatus.ACTIVE.value),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: str) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM projects
                WHERE employee_id=%s
                ORDER BY created_at DESC, id DESC
                """,
                (employee_id,),
            )
            return [_to_project(r) for r in fetchall(cur)]

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE id=%s", (int(project_id),))
            row = fetchone(cur)
            return _to_project(row) if row else None

    def create(self, *, employee_id: str, project_name: str, start_date: date, end_date: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO projects(employee_id, project_name, start_date, end_date, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (employee_id, project_name, start_date, end_date, ProjectStatus.ACTIVE.value),
            )
            return int(cur.lastrowid)

    def update(self, *, project_id: int, project_name: str, start_date: date, end_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE projects
                SET project_name=%s, start_date=%s, end_date=%s
                WHERE id=%s
                """,
                (project_name, start_date, end_date, int(project_id)),
            )
            return cur.rowcount > 0

    def update_status(self, *, project_id: int, status: ProjectStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE projects SET status=%s WHERE id=%s", (status.value, int(project_id)))
            return cur.rowcount > 0

    def delete_with_entries(self, project_id: int) -> int:
        # One transaction: entries and project go together or not at all.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM daily_report_projects WHERE project_id=%s", (int(project_id),))
            deleted_entries = int(cur.rowcount)
            cur.execute("DELETE FROM projects WHERE id=%s", (int(project_id),))
            return deleted_entries
