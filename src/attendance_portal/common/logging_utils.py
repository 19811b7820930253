from __future__ import annotations

import logging
import time

from flask import Flask, g, request

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("attendance_portal.access")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the API process or the bot process."""
    logging.basicConfig(format=LOG_FORMAT, level=getattr(logging, str(level).upper(), logging.INFO))


def install_access_log(app: Flask) -> None:
    """Log one line per request: method, path, status and elapsed milliseconds."""

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.pop("request_started", None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        logger.info("%s %s %s %.1fms", request.method, request.path, response.status_code, elapsed_ms)
        return response
