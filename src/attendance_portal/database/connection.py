from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        """Build from the settings' ``DB_CONFIG`` mapping, filling local defaults."""
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "attendance_portal")),
            connect_timeout=int(db_config.get("connect_timeout", 10)),
        )


class DatabaseConnection:
    """Process-wide factory for MySQL connections.

    Each repository call opens and closes its own connection, so the
    factory is safe to share between Flask worker threads.
    """

    _shared: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._shared is None or cls._shared.config != config:
            cls._shared = cls(config)
        return cls._shared

    def connect(self, *, with_database: bool = True):
        params = {
            "host": self.config.host,
            "port": self.config.port,
            "user": self.config.user,
            "password": self.config.password,
            "connection_timeout": self.config.connect_timeout,
            "charset": "utf8mb4",
            "use_pure": True,
        }
        # Bootstrap connects without a database to CREATE it first.
        if with_database:
            params["database"] = self.config.database
        return mysql.connector.connect(**params)
