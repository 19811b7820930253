"""Attendance portal package.

Organized by feature modules (employees, attendance, reporting, users, bot)
with a thin Flask controller layer over service/repository layers, plus a
Telegram bot that relays chat commands to the REST API.
"""
from __future__ import annotations

from .main import create_app

__all__ = ["create_app"]
