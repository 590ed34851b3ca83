from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(row: dict) -> Employee:
    return Employee(
        id=int(row["id"]),
        employee_id=str(row["employee_id"]),
        employee_name=row["employee_name"],
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, employee_id, employee_name FROM employees ORDER BY employee_name ASC")
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, employee_id, employee_name FROM employees WHERE employee_id=%s",
                (employee_id,),
            )
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def create(self, *, employee_id: str, employee_name: str) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO employees(employee_id, employee_name) VALUES(%s,%s)",
                    (employee_id, employee_name),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Employee ID already exists") from e
            raise

    def delete_by_employee_id(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (employee_id,))
            return cur.rowcount > 0
