from __future__ import annotations

from typing import Optional

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, name, email, password_hash, role, created_at
                FROM users
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, name, email, password_hash, role, created_at
                FROM users
                WHERE email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO users(name, email, password_hash, role) VALUES(%s,%s,%s,%s)",
                    (name, email, password_hash, role.value),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("User already exists") from e
            raise

    def update_profile(self, user_id: int, *, name: str, email: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("UPDATE users SET name=%s, email=%s WHERE user_id=%s", (name, email, int(user_id)))
                cur.execute("SELECT 1 AS ok FROM users WHERE user_id=%s", (int(user_id),))
                return fetchone(cur) is not None
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Email already in use") from e
            raise

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0
