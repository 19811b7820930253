from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_text(value: object, field_name: str) -> str:
    """Accept only JSON strings; missing counts as empty."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    value = require_text(value, field_name)
    if len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def normalize_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Email").lower()
    if "@" not in email:
        raise ValidationError("Email is not valid")
    return email


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
