from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for actors.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> int:
        raise NotImplementedError

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        raise NotImplementedError

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError
