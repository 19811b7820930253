from __future__ import annotations

from datetime import datetime

import pytest

from attendance_portal.container import wire_container
from attendance_portal.core.enums import Role
from attendance_portal.main import create_app
from tests.fakes import InMemoryAttendance, InMemoryEmployees, InMemoryUsers


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 5, 0)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def attendance(employees, users) -> InMemoryAttendance:
    return InMemoryAttendance(employees, users)


@pytest.fixture
def container(users, employees, attendance):
    return wire_container(
        users_repo=users,
        employees_repo=employees,
        attendance_repo=attendance,
        jwt_secret="test-jwt-secret",
    )


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def hr_user(users):
    return users.add(name="Hana HR", email="hr@example.com", password="secret123", role=Role.HR)


@pytest.fixture
def hr_headers(container, hr_user) -> dict:
    return {"x-auth-token": container.token_service.issue(hr_user)}
