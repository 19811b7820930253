from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..core.constants import AUTH_HEADER, BOT_KEY_HEADER

logger = logging.getLogger(__name__)


class PortalError(Exception):
    """A failed API call: ``status`` is the HTTP status, or ``None`` when the API was unreachable."""

    def __init__(self, status: Optional[int], message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class PortalClient:
    """Thin client for the attendance REST API.

    Credentials belong to the client instance: ``with_token`` returns a new
    client, so one caller's login never leaks into another's requests.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        bot_key: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.bot_key = bot_key
        self.timeout = timeout
        self._session = session or requests.Session()

    def with_token(self, token: str) -> "PortalClient":
        return PortalClient(
            self.base_url,
            token=token,
            bot_key=self.bot_key,
            timeout=self.timeout,
            session=self._session,
        )

    def _headers(self) -> dict:
        headers = {}
        if self.token:
            headers[AUTH_HEADER] = self.token
        if self.bot_key:
            headers[BOT_KEY_HEADER] = self.bot_key
        return headers

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise PortalError(None, str(e)) from e

        if response.status_code >= 400:
            try:
                message = response.json().get("message") or response.reason
            except ValueError:
                message = response.text or response.reason
            raise PortalError(response.status_code, message)

        return response.json()

    def login(self, email: str, password: str) -> "PortalClient":
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self.with_token(data["token"])

    def check_in(self, telegram_id: str) -> dict:
        return self._request("POST", "/attendance/check-in", json={"telegramId": str(telegram_id)})

    def check_out(self, telegram_id: str) -> dict:
        return self._request("POST", "/attendance/check-out", json={"telegramId": str(telegram_id)})

    def today(self, telegram_id: str) -> dict:
        return self._request("GET", f"/attendance/today/{telegram_id}")

    def employee_by_telegram(self, telegram_id: str) -> dict:
        return self._request("GET", f"/employees/telegram/{telegram_id}")
