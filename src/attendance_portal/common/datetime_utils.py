from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD (or a full ISO timestamp) into a date."""
    value = value.strip()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return parse_iso_datetime(value).date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    A trailing 'Z' or explicit offset is converted to local time first.
    """
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_clock(value: str) -> time:
    """Parse HH:MM into a time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def isoformat_or_none(value: datetime | date | None) -> str | None:
    return value.isoformat() if value is not None else None
