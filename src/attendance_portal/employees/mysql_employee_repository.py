from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

import mysql.connector

from ..core.enums import EmployeeState
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone, is_duplicate_key
from .model import UPDATABLE_FIELDS, Employee
from .repository import EmployeeRepository

_COLUMNS = """
    employee_id, name, email, telegram_id, telegram_username,
    department, position, is_hr, state, created_at
"""


def row_to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        email=r["email"],
        telegram_id=str(r["telegram_id"]),
        telegram_username=r.get("telegram_username"),
        department=r.get("department"),
        position=r.get("position"),
        is_hr=as_bool(r.get("is_hr")),
        state=EmployeeState(r.get("state") or EmployeeState.ACTIVE.value),
        created_at=r.get("created_at"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select_one(self, where: str, params: tuple) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {where}", params)
            row = fetchone(cur)
            return row_to_employee(row) if row else None

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._select_one("employee_id=%s", (int(employee_id),))

    def get_by_telegram_id(self, telegram_id: str) -> Optional[Employee]:
        return self._select_one("telegram_id=%s", (str(telegram_id),))

    def find_conflicting(
        self,
        *,
        email: Optional[str],
        telegram_id: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> Optional[Employee]:
        clauses = []
        params: list[object] = []
        if email:
            clauses.append("email=%s")
            params.append(email)
        if telegram_id:
            clauses.append("telegram_id=%s")
            params.append(str(telegram_id))
        if not clauses:
            return None

        where = "(" + " OR ".join(clauses) + ")"
        if exclude_id is not None:
            where += " AND employee_id<>%s"
            params.append(int(exclude_id))
        return self._select_one(where + " LIMIT 1", tuple(params))

    def list_all(self, *, include_inactive: bool = False) -> Sequence[Employee]:
        where = "" if include_inactive else "WHERE state='active'"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees {where} ORDER BY name ASC")
            return [row_to_employee(r) for r in fetchall(cur)]

    def count_active(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM employees WHERE state='active'")
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def create(
        self,
        *,
        name: str,
        email: str,
        telegram_id: str,
        telegram_username: Optional[str],
        department: Optional[str],
        position: Optional[str],
        is_hr: bool,
    ) -> Employee:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(name, email, telegram_id, telegram_username, department, position, is_hr, state)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,'active')
                    """,
                    (name, email, telegram_id, telegram_username, department, position, int(is_hr)),
                )
                new_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Employee with this email or Telegram ID already exists") from e
            raise

        employee = self.get_by_id(new_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def update(self, employee_id: int, fields: Mapping[str, Any]) -> Optional[Employee]:
        assignments = []
        params: list[object] = []
        for column in UPDATABLE_FIELDS:
            if column not in fields:
                continue
            value = fields[column]
            if isinstance(value, EmployeeState):
                value = value.value
            elif isinstance(value, bool):
                value = int(value)
            assignments.append(f"{column}=%s")
            params.append(value)

        if assignments:
            params.append(int(employee_id))
            try:
                with db_cursor(self._conn_factory) as (_, cur):
                    cur.execute(
                        f"UPDATE employees SET {', '.join(assignments)} WHERE employee_id=%s",
                        tuple(params),
                    )
            except mysql.connector.IntegrityError as e:
                if is_duplicate_key(e):
                    raise ConflictError("Email or Telegram ID already in use") from e
                raise

        return self.get_by_id(employee_id)
