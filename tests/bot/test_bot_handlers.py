from __future__ import annotations

import asyncio
from types import SimpleNamespace

from telegram.constants import ParseMode

from attendance_portal.bot import handlers, messages
from attendance_portal.bot.client import PortalError


class FakeMessage:
    def __init__(self):
        self.replies = []

    async def reply_text(self, text, parse_mode=None):
        self.replies.append((text, parse_mode))


class FakePortal:
    def __init__(self, **results):
        self.results = results
        self.calls = []

    def _answer(self, name, telegram_id):
        self.calls.append((name, telegram_id))
        result = self.results[name]
        if isinstance(result, Exception):
            raise result
        return result

    def check_in(self, telegram_id):
        return self._answer("check_in", telegram_id)

    def check_out(self, telegram_id):
        return self._answer("check_out", telegram_id)

    def today(self, telegram_id):
        return self._answer("today", telegram_id)

    def employee_by_telegram(self, telegram_id):
        return self._answer("employee_by_telegram", telegram_id)


def _run(handler, portal):
    message = FakeMessage()
    update = SimpleNamespace(
        effective_user=SimpleNamespace(id=1001, first_name="Alice"),
        effective_message=message,
    )
    context = SimpleNamespace(application=SimpleNamespace(bot_data={handlers.PORTAL_KEY: portal}))
    asyncio.run(handler(update, context))
    return message.replies


def test_login_checks_in_with_telegram_id():
    portal = FakePortal(check_in={"checkIn": {"time": "2026-02-02T09:05:00"}})

    replies = _run(handlers.login_command, portal)

    assert portal.calls == [("check_in", "1001")]
    text, mode = replies[0]
    assert "09:05:00" in text
    assert mode == ParseMode.MARKDOWN


def test_login_for_unregistered_user():
    portal = FakePortal(check_in=PortalError(404, "Employee not found"))

    replies = _run(handlers.login_command, portal)

    assert replies[0][0] == messages.NOT_REGISTERED


def test_logout_reports_hours():
    portal = FakePortal(
        check_out={"checkOut": {"time": "2026-02-02T17:35:00"}, "totalHours": 8.5},
    )

    replies = _run(handlers.logout_command, portal)

    assert "8.5 hours" in replies[0][0]


def test_logout_when_already_out():
    portal = FakePortal(check_out=PortalError(400, "Already checked out today"))

    replies = _run(handlers.logout_command, portal)

    assert "Already checked out today" in replies[0][0]


def test_status_without_record():
    portal = FakePortal(today={"employee": {"name": "Alice"}, "record": None})

    replies = _run(handlers.status_command, portal)

    assert "Not checked in today" in replies[0][0]


def test_employee_lookup_failure():
    portal = FakePortal(employee_by_telegram=PortalError(None, "refused"))

    replies = _run(handlers.employee_command, portal)

    assert "retrieve your information" in replies[0][0]


def test_start_greets_without_markdown():
    replies = _run(handlers.start_command, FakePortal())

    text, mode = replies[0]
    assert text.startswith("Hello Alice!")
    assert mode is None


def test_build_application_registers_commands():
    portal = FakePortal()
    app = handlers.build_application("123456:TEST-TOKEN", portal)

    commands = {c for group in app.handlers.values() for h in group for c in h.commands}
    assert commands == {"start", "help", "login", "logout", "status", "employee"}
    assert app.bot_data[handlers.PORTAL_KEY] is portal
