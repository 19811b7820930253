from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_clock
from .common.http import register_error_handlers
from .common.logging_utils import configure_logging, install_access_log
from .container import Container, build_container
from .core.constants import DEFAULT_WORK_START
from .core.enums import Role
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .reporting.controller import register as register_reporting
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def load_settings(settings_module: Optional[str] = None):
    load_dotenv(override=False)
    return importlib.import_module(settings_module or get_settings_module())


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Build the API.

    ``container`` lets tests supply in-memory repositories; otherwise the
    MySQL-backed container is built from the settings' ``DB_CONFIG``.
    """
    settings = load_settings(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["TRUST_TELEGRAM_ID"] = bool(getattr(settings, "TRUST_TELEGRAM_ID", True))
    app.config["BOT_API_KEY"] = getattr(settings, "BOT_API_KEY", "")
    app.json.sort_keys = False

    if app.config["TRUST_TELEGRAM_ID"]:
        logger.warning(
            "TRUST_TELEGRAM_ID is on: check-in/check-out accept a bare Telegram id "
            "with no proof of identity; anyone who can reach the API can record attendance for any employee"
        )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings.__name__,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_expires_hours=int(getattr(settings, "JWT_EXPIRES_HOURS", 5)),
            work_start=parse_clock(getattr(settings, "WORK_START", DEFAULT_WORK_START)),
            stats_window_days=int(getattr(settings, "STATS_WINDOW_DAYS", 7)),
        )

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            admin = getattr(settings, "DEFAULT_ADMIN")
            _, created = container.user_service.ensure_user(role=Role.ADMIN, **admin)
            if created:
                logger.warning("Created default admin %s; change its password after first login", admin["email"])

    app.extensions["attendance_portal"] = container

    register_error_handlers(app)
    install_access_log(app)

    @app.route("/", endpoint="index")
    def index():
        return "Telegram Attendance Portal API is running"

    register_users(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_reporting(app, container)

    return app


def main() -> None:
    settings = load_settings()
    app = create_app()
    app.run(host=getattr(settings, "HOST", "0.0.0.0"), port=int(getattr(settings, "PORT", 5000)))


if __name__ == "__main__":
    main()
