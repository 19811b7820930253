from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_duplicate_key(exc: mysql.connector.Error) -> bool:
    """True when MySQL rejected a write because of a UNIQUE index (ER_DUP_ENTRY)."""
    return getattr(exc, "errno", None) == 1062


def as_bool(value: Any) -> bool:
    return bool(int(value)) if value is not None else False


def as_float(value: Any) -> float:
    return float(value) if value is not None else 0.0
