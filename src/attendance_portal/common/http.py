from __future__ import annotations

import hmac
import logging
from datetime import date
from functools import wraps
from typing import Any, Callable, Optional

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.constants import AUTH_HEADER, BOT_KEY_HEADER
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)


def error_response(message: str, status: int):
    return jsonify({"message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return error_response(str(e), e.status_code)

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Server error", 500)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_date(name: str) -> Optional[date]:
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a date (YYYY-MM-DD)")


def query_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def make_auth_guards(tokens) -> tuple[Callable, Callable]:
    """Build ``token_required`` / ``hr_required`` decorators bound to a TokenService.

    ``token_required`` stores the verified actor on ``flask.g.actor``.
    """

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = request.headers.get(AUTH_HEADER)
            if not token:
                raise AuthenticationError("No token, authorization denied")
            g.actor = tokens.verify(token)
            return view(*args, **kwargs)

        return wrapper

    def hr_required(view):
        @token_required
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not g.actor.is_hr:
                raise AuthorizationError("Access denied. HR or admin role required")
            return view(*args, **kwargs)

        return wrapper

    return token_required, hr_required


def make_bot_guard(*, trust_telegram_id: bool, bot_api_key: str) -> Callable:
    """Guard for endpoints keyed only by a Telegram id.

    With ``trust_telegram_id`` on, any caller may act for any Telegram id.
    With it off, the caller must present the shared bot key.
    """

    def bot_endpoint(view):
        @wraps(view)
        def wrapper(*args: Any, **kwargs: Any):
            if not trust_telegram_id:
                presented = request.headers.get(BOT_KEY_HEADER, "")
                if not bot_api_key or not hmac.compare_digest(presented, bot_api_key):
                    raise AuthorizationError("Invalid bot key")
            return view(*args, **kwargs)

        return wrapper

    return bot_endpoint
