from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for the employee directory.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_telegram_id(self, telegram_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def find_conflicting(
        self,
        *,
        email: Optional[str],
        telegram_id: Optional[str],
        exclude_id: Optional[int] = None,
    ) -> Optional[Employee]:
        """Return another employee already using ``email`` or ``telegram_id``."""
        raise NotImplementedError

    def list_all(self, *, include_inactive: bool = False) -> Sequence[Employee]:
        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        telegram_id: str,
        telegram_username: Optional[str],
        department: Optional[str],
        position: Optional[str],
        is_hr: bool,
    ) -> Employee:
        raise NotImplementedError

    def update(self, employee_id: int, fields: Mapping[str, Any]) -> Optional[Employee]:
        """Apply ``fields`` (keys from ``UPDATABLE_FIELDS``) and return the fresh row."""
        raise NotImplementedError
