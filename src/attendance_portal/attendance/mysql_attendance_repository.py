from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, is_duplicate_key
from ..employees.mysql_employee_repository import row_to_employee
from .model import AttendanceRecord, AttendanceView, TimeEntry
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    ar.attendance_id, ar.employee_id, ar.work_date,
    ar.check_in_time, ar.check_in_modified_by, ar.check_in_original_time, ar.check_in_modified_at,
    ar.check_out_time, ar.check_out_modified_by, ar.check_out_original_time, ar.check_out_modified_at,
    ar.total_hours, ar.status, ar.notes
"""

_VIEW_SELECT = f"""
    SELECT {_RECORD_COLUMNS},
        e.name, e.email, e.telegram_id, e.telegram_username, e.department, e.position,
        e.is_hr, e.state, e.created_at,
        ui.name AS check_in_modified_by_name,
        uo.name AS check_out_modified_by_name
    FROM attendance_records ar
    JOIN employees e ON e.employee_id = ar.employee_id
    LEFT JOIN users ui ON ui.user_id = ar.check_in_modified_by
    LEFT JOIN users uo ON uo.user_id = ar.check_out_modified_by
"""


def _entry(r: dict, prefix: str) -> TimeEntry:
    modified_by = r.get(f"{prefix}_modified_by")
    return TimeEntry(
        time=r.get(f"{prefix}_time"),
        modified_by=int(modified_by) if modified_by is not None else None,
        original_time=r.get(f"{prefix}_original_time"),
        modified_at=r.get(f"{prefix}_modified_at"),
    )


def row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in=_entry(r, "check_in"),
        check_out=_entry(r, "check_out"),
        total_hours=as_float(r.get("total_hours")),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes") or "",
    )


def row_to_view(r: dict) -> AttendanceView:
    return AttendanceView(
        record=row_to_record(r),
        employee=row_to_employee(r),
        check_in_modified_by_name=r.get("check_in_modified_by_name"),
        check_out_modified_by_name=r.get("check_out_modified_by_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM attendance_records ar WHERE ar.attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return row_to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.employee_id=%s AND ar.work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return row_to_record(r) if r else None

    def create_checkin(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, check_in_time, status, notes)
                    VALUES(%s,%s,%s,%s,'')
                    """,
                    (int(employee_id), work_date, check_in_time, status.value),
                )
                new_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Already checked in today") from e
            raise

        return AttendanceRecord(
            attendance_id=new_id,
            employee_id=int(employee_id),
            work_date=work_date,
            check_in=TimeEntry(time=check_in_time),
            status=status,
        )

    def save(self, record: AttendanceRecord) -> bool:
        ci, co = record.check_in, record.check_out
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_in_modified_by=%s, check_in_original_time=%s, check_in_modified_at=%s,
                    check_out_time=%s, check_out_modified_by=%s, check_out_original_time=%s, check_out_modified_at=%s,
                    total_hours=%s, status=%s, notes=%s
                WHERE attendance_id=%s
                """,
                (
                    ci.time, ci.modified_by, ci.original_time, ci.modified_at,
                    co.time, co.modified_by, co.original_time, co.modified_at,
                    record.total_hours, record.status.value, record.notes,
                    int(record.attendance_id),
                ),
            )
            # rowcount is 0 when nothing changed, so re-check existence instead.
            cur.execute("SELECT 1 AS ok FROM attendance_records WHERE attendance_id=%s", (int(record.attendance_id),))
            return fetchone(cur) is not None

    def list_views(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceView]:
        clauses: list[str] = []
        params: list[object] = []

        if start_date is not None:
            clauses.append("ar.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.work_date <= %s")
            params.append(end_date)
        if employee_id is not None:
            clauses.append("ar.employee_id = %s")
            params.append(int(employee_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_VIEW_SELECT} {where} ORDER BY ar.work_date DESC, ar.attendance_id DESC",
                tuple(params),
            )
            return [row_to_view(r) for r in fetchall(cur)]

    def get_view(self, attendance_id: int) -> Optional[AttendanceView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_VIEW_SELECT} WHERE ar.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return row_to_view(r) if r else None

    def count_checked_in(self, work_date: date, *, after: Optional[datetime] = None) -> int:
        sql = "SELECT COUNT(*) AS n FROM attendance_records WHERE work_date=%s AND check_in_time IS NOT NULL"
        params: list[object] = [work_date]
        if after is not None:
            sql += " AND check_in_time > %s"
            params.append(after)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def hours_between(self, start: date, end_exclusive: date) -> Sequence[float]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT total_hours
                FROM attendance_records
                WHERE work_date >= %s AND work_date < %s AND total_hours IS NOT NULL AND total_hours <> 0
                """,
                (start, end_exclusive),
            )
            return [as_float(r["total_hours"]) for r in fetchall(cur)]
