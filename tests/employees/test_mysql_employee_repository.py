from __future__ import annotations

import pytest

from attendance_portal.core.exceptions import NotFoundError
from attendance_portal.employees.mysql_employee_repository import MySQLEmployeeRepository


class FakeCursor:
    def __init__(self, rows):
        self._rows = rows
        self.lastrowid = None
        self.statements = []

    def execute(self, sql, params=None):
        self.statements.append(" ".join(sql.split()))
        if sql.lstrip().upper().startswith("INSERT"):
            self.lastrowid = 41

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        return []

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, rows=None):
        self.cursor = FakeCursor(list(rows or []))

    def connect(self):
        return FakeConnection(self.cursor)


def _create(repo):
    return repo.create(
        name="Alice",
        email="alice@example.com",
        telegram_id="1001",
        telegram_username=None,
        department=None,
        position=None,
        is_hr=False,
    )


def test_create_reads_back_inserted_row():
    row = {
        "employee_id": 41,
        "name": "Alice",
        "email": "alice@example.com",
        "telegram_id": "1001",
        "is_hr": 0,
        "state": "active",
    }
    factory = FakeConnFactory(rows=[row])

    employee = _create(MySQLEmployeeRepository(factory))

    assert employee.employee_id == 41
    assert employee.is_active
    assert factory.cursor.statements[0].startswith("INSERT INTO employees")


def test_create_with_vanished_row_raises_not_found():
    factory = FakeConnFactory(rows=[])

    with pytest.raises(NotFoundError, match="Employee not found"):
        _create(MySQLEmployeeRepository(factory))
