from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an HR/admin actor who signs in to the admin panel.

    Note: plain data object, no database access here.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    created_at: Optional[datetime] = None

    @property
    def is_hr(self) -> bool:
        return self.role in (Role.HR, Role.ADMIN)

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "createdAt": isoformat_or_none(self.created_at),
        }


@dataclass(frozen=True)
class Actor:
    """Identity carried by a verified token."""

    user_id: int
    role: Role

    @property
    def is_hr(self) -> bool:
        return self.role in (Role.HR, Role.ADMIN)
