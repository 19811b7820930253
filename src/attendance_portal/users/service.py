from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import normalize_email, require_min_length, require_non_empty, require_text
from ..core.constants import DEFAULT_TOKEN_HOURS, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from .model import Actor, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class TokenService:
    """Issue and verify the signed tokens sent in the ``x-auth-token`` header."""

    def __init__(self, secret: str, *, algorithm: str = "HS256", expires_hours: int = DEFAULT_TOKEN_HOURS):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.expires_hours = int(expires_hours)

    def issue(self, user: User, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "user": {"id": user.user_id, "role": user.role.value},
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(hours=self.expires_hours)).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Actor:
        """
        Decode a token into the acting user.

        Raises:
            AuthenticationError: If the token is expired, forged or malformed
        """
        try:
            payload: Dict[str, Any] = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Token is not valid") from e

        user = payload.get("user") or {}
        try:
            return Actor(user_id=int(user["id"]), role=Role(user["role"]))
        except (KeyError, TypeError, ValueError) as e:
            raise AuthenticationError("Token is not valid") from e


class AuthService:
    """Use case: authenticate an actor (login)."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def login(self, email: str, password: str) -> tuple[str, User]:
        email = require_text(email, "Email").strip().lower()
        password = require_text(password, "Password")
        user = self._users.get_by_email(email) if email else None
        if not user:
            raise InvalidCredentialsError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("Failed login for %s", email)
            raise InvalidCredentialsError("Invalid credentials")

        logger.info("User %s logged in", user.user_id)
        return self._tokens.issue(user), user


class UserService:
    """Use case: actor profile management."""

    def __init__(self, users: UserRepository):
        self._users = users

    def me(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: int, *, name: Optional[str], email: Optional[str]) -> User:
        user = self.me(user_id)
        new_name = require_non_empty(name, "Name") if name else user.name
        new_email = normalize_email(email) if email else user.email

        if new_email != user.email and self._users.get_by_email(new_email):
            raise ConflictError("Email already in use")

        self._users.update_profile(user.user_id, name=new_name, email=new_email)
        return self.me(user.user_id)

    def change_password(self, user_id: int, *, current_password: str, new_password: str) -> None:
        user = self.me(user_id)
        current_password = require_text(current_password, "Current password")
        require_min_length(new_password, "New password", MIN_PASSWORD_LENGTH)

        try:
            ok = check_password_hash(user.password_hash, current_password)
        except ValueError:
            ok = False
        if not ok:
            raise ValidationError("Current password is incorrect")

        self._users.update_password(user.user_id, password_hash=generate_password_hash(new_password))
        logger.info("User %s changed password", user.user_id)

    def ensure_user(self, *, name: str, email: str, password: str, role: Role = Role.ADMIN) -> tuple[User, bool]:
        """Create the actor unless one with this email exists. Returns (user, created)."""
        email = normalize_email(email)
        existing = self._users.get_by_email(email)
        if existing:
            return existing, False

        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        user_id = self._users.create_user(
            name=require_non_empty(name, "Name"),
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
        )
        return self.me(user_id), True
