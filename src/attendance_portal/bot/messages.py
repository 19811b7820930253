"""Reply templates for the attendance bot (Telegram Markdown)."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from telegram.helpers import escape_markdown

from .client import PortalError

COMMANDS = (
    "/login - Check in for work\n"
    "/logout - Check out from work\n"
    "/status - Check your current status\n"
    "/employee - Show your employee information\n"
)

NOT_REGISTERED = (
    "❌ *Error:* Your Telegram account is not registered in the system. "
    "Please contact HR to register your account."
)


def _md(value: object) -> str:
    return escape_markdown(str(value), version=1)


def clock(value: Optional[str]) -> Optional[str]:
    """ISO timestamp -> HH:MM:SS, or None."""
    if not value:
        return None
    return datetime.fromisoformat(value).strftime("%H:%M:%S")


def welcome(first_name: str) -> str:
    return (
        f"Hello {first_name}! 👋\n\n"
        "I'm your attendance tracking bot. You can use the following commands:\n\n"
        f"{COMMANDS}/help - Show available commands"
    )


def help_text() -> str:
    return f"*Available Commands:*\n\n{COMMANDS}/help - Show this help message"


def checked_in(first_name: str, record: dict) -> str:
    return (
        "✅ *Check-in Successful!*\n\n"
        f"Hello {_md(first_name)}, you have been checked in at *{clock(record['checkIn']['time'])}*.\n\n"
        "Have a productive day! 🚀"
    )


def checked_out(first_name: str, record: dict) -> str:
    return (
        "✅ *Check-out Successful!*\n\n"
        f"Goodbye {_md(first_name)}, you have been checked out at *{clock(record['checkOut']['time'])}*.\n\n"
        f"Total hours worked today: *{record['totalHours']} hours*\n\n"
        "Have a great evening! 👋"
    )


def status(record: Optional[dict]) -> str:
    if not record:
        return "*Status:* Not checked in today.\n\nUse /login to check in."

    check_in = clock(record["checkIn"]["time"])
    check_out = clock(record["checkOut"]["time"])
    if not check_in:
        state = "Not checked in"
    elif not check_out:
        state = "Currently working (Checked in)"
    else:
        state = "Checked out"

    return (
        "*Today's Attendance Status*\n\n"
        f"*Status:* {state}\n"
        f"*Check-in Time:* {check_in or 'Not checked in'}\n"
        f"*Check-out Time:* {check_out or 'Not checked out'}\n"
        f"*Total Hours:* {record.get('totalHours') or 0} hours"
    )


def employee_info(employee: dict) -> str:
    return (
        "*Your Employee Information*\n\n"
        f"*Name:* {_md(employee['name'])}\n"
        f"*Email:* {_md(employee['email'])}\n"
        f"*Department:* {_md(employee.get('department') or 'Not specified')}\n"
        f"*Position:* {_md(employee.get('position') or 'Not specified')}"
    )


def check_in_error(error: PortalError) -> str:
    if error.status == 404:
        return NOT_REGISTERED
    if error.status == 400:
        return f"ℹ️ *Notice:* {_md(error.message or 'You have already checked in today.')}"
    return "❌ *Error:* Unable to check in. Please try again later or contact HR."


def check_out_error(error: PortalError) -> str:
    if error.status == 404:
        if error.message == "Employee not found":
            return NOT_REGISTERED
        return f"❌ *Error:* {_md(error.message or 'No check-in record found for today. Please check in first.')}"
    if error.status == 400:
        return f"ℹ️ *Notice:* {_md(error.message or 'You must check in before checking out.')}"
    return "❌ *Error:* Unable to check out. Please try again later or contact HR."


def lookup_error(error: PortalError, action: str) -> str:
    if error.status == 404:
        return NOT_REGISTERED
    return f"❌ *Error:* Unable to {action}. Please try again later or contact HR."
