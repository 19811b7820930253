from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Mapping, Optional

from werkzeug.security import generate_password_hash

from attendance_portal.attendance.model import AttendanceRecord, AttendanceView, TimeEntry
from attendance_portal.core.enums import AttendanceStatus, EmployeeState, Role
from attendance_portal.core.exceptions import ConflictError
from attendance_portal.employees.model import Employee
from attendance_portal.users.model import User


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._id = 0

    def add(self, *, name: str, email: str, password: str, role: Role) -> User:
        self._id += 1
        user = User(
            user_id=self._id,
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
        )
        self._by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> int:
        if self.get_by_email(email):
            raise ConflictError("User already exists")
        self._id += 1
        self._by_id[self._id] = User(user_id=self._id, name=name, email=email, password_hash=password_hash, role=role)
        return self._id

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, name=name, email=email)
        return True

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, password_hash=password_hash)
        return True


class InMemoryEmployees:
    def __init__(self):
        self._by_id: dict[int, Employee] = {}
        self._id = 0

    def add(self, name: str, telegram_id: str, *, email: Optional[str] = None, active: bool = True) -> Employee:
        return self.update(
            self.create(
                name=name,
                email=email or f"{name.lower().replace(' ', '.')}@example.com",
                telegram_id=telegram_id,
                telegram_username=None,
                department=None,
                position=None,
                is_hr=False,
            ).employee_id,
            {"state": EmployeeState.ACTIVE if active else EmployeeState.INACTIVE},
        )

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))

    def get_by_telegram_id(self, telegram_id: str) -> Optional[Employee]:
        return next((e for e in self._by_id.values() if e.telegram_id == telegram_id), None)

    def find_conflicting(self, *, email, telegram_id, exclude_id=None) -> Optional[Employee]:
        for e in self._by_id.values():
            if exclude_id is not None and e.employee_id == exclude_id:
                continue
            if (email and e.email == email) or (telegram_id and e.telegram_id == telegram_id):
                return e
        return None

    def list_all(self, *, include_inactive: bool = False):
        items = [e for e in self._by_id.values() if include_inactive or e.is_active]
        return sorted(items, key=lambda e: e.name)

    def count_active(self) -> int:
        return sum(1 for e in self._by_id.values() if e.is_active)

    def create(self, *, name, email, telegram_id, telegram_username, department, position, is_hr) -> Employee:
        if self.find_conflicting(email=email, telegram_id=telegram_id):
            raise ConflictError("Employee with this email or Telegram ID already exists")
        self._id += 1
        employee = Employee(
            employee_id=self._id,
            name=name,
            email=email,
            telegram_id=telegram_id,
            telegram_username=telegram_username,
            department=department,
            position=position,
            is_hr=is_hr,
            created_at=datetime(2026, 1, 1, 8, 0),
        )
        self._by_id[self._id] = employee
        return employee

    def update(self, employee_id: int, fields: Mapping[str, Any]) -> Optional[Employee]:
        employee = self._by_id.get(int(employee_id))
        if not employee:
            return None
        updated = replace(employee, **dict(fields))
        self._by_id[employee.employee_id] = updated
        return updated


class InMemoryAttendance:
    def __init__(self, employees: Optional[InMemoryEmployees] = None, users: Optional[InMemoryUsers] = None):
        self._by_id: dict[int, AttendanceRecord] = {}
        self._id = 0
        self._employees = employees
        self._users = users
        self.saves = 0

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert a fully-formed record (test setup)."""
        self._id += 1
        record = replace(record, attendance_id=self._id)
        self._by_id[self._id] = record
        return record

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(int(attendance_id))

    def _find(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self._by_id.values() if r.employee_id == employee_id and r.work_date == work_date),
            None,
        )

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._find(employee_id, work_date)

    def create_checkin(self, *, employee_id, work_date, check_in_time, status) -> AttendanceRecord:
        # Mirrors the UNIQUE (employee_id, work_date) key.
        if self._find(employee_id, work_date):
            raise ConflictError("Already checked in today")
        return self.add(
            AttendanceRecord(
                attendance_id=0,
                employee_id=employee_id,
                work_date=work_date,
                check_in=TimeEntry(time=check_in_time),
                status=status,
            )
        )

    def save(self, record: AttendanceRecord) -> bool:
        if record.attendance_id not in self._by_id:
            return False
        self.saves += 1
        self._by_id[record.attendance_id] = record
        return True

    def _view(self, record: AttendanceRecord) -> AttendanceView:
        def name_of(user_id):
            user = self._users.get_by_id(user_id) if (self._users and user_id) else None
            return user.name if user else None

        return AttendanceView(
            record=record,
            employee=self._employees.get_by_id(record.employee_id) if self._employees else None,
            check_in_modified_by_name=name_of(record.check_in.modified_by),
            check_out_modified_by_name=name_of(record.check_out.modified_by),
        )

    def list_views(self, *, start_date=None, end_date=None, employee_id=None):
        items = [
            r
            for r in self._by_id.values()
            if (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
            and (employee_id is None or r.employee_id == employee_id)
        ]
        items.sort(key=lambda r: (r.work_date, r.attendance_id), reverse=True)
        return [self._view(r) for r in items]

    def get_view(self, attendance_id: int) -> Optional[AttendanceView]:
        record = self.get_by_id(attendance_id)
        return self._view(record) if record else None

    def count_checked_in(self, work_date: date, *, after: Optional[datetime] = None) -> int:
        return sum(
            1
            for r in self._by_id.values()
            if r.work_date == work_date
            and r.check_in.time is not None
            and (after is None or r.check_in.time > after)
        )

    def hours_between(self, start: date, end_exclusive: date):
        return [r.total_hours for r in self._by_id.values() if start <= r.work_date < end_exclusive and r.total_hours]


def present(employee_id: int, check_in: datetime, check_out: Optional[datetime] = None, hours: float = 0.0) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=0,
        employee_id=employee_id,
        work_date=check_in.date(),
        check_in=TimeEntry(time=check_in),
        check_out=TimeEntry(time=check_out),
        total_hours=hours,
        status=AttendanceStatus.PRESENT,
    )
