from __future__ import annotations

import pytest
import requests

from attendance_portal.bot.client import PortalClient, PortalError


class FakeResponse:
    def __init__(self, status_code: int, payload=None, *, reason: str = "", text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.reason = reason
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def test_check_in_posts_telegram_id():
    session = FakeSession(FakeResponse(200, {"status": "present"}))
    client = PortalClient("http://api.local/api/", session=session)

    assert client.check_in(1001) == {"status": "present"}

    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert url == "http://api.local/api/attendance/check-in"
    assert kwargs["json"] == {"telegramId": "1001"}
    assert kwargs["headers"] == {}


def test_bot_key_header_is_sent_when_configured():
    session = FakeSession(FakeResponse(200, {"name": "Alice"}))
    client = PortalClient("http://api.local/api", bot_key="k", session=session)

    client.employee_by_telegram("1001")

    assert session.calls[0][2]["headers"] == {"x-bot-key": "k"}


def test_api_error_carries_status_and_message():
    session = FakeSession(FakeResponse(400, {"message": "Already checked in today"}))
    client = PortalClient("http://api.local/api", session=session)

    with pytest.raises(PortalError) as e:
        client.check_in("1001")

    assert e.value.status == 400
    assert e.value.message == "Already checked in today"


def test_non_json_error_falls_back_to_reason():
    session = FakeSession(FakeResponse(502, reason="Bad Gateway"))
    client = PortalClient("http://api.local/api", session=session)

    with pytest.raises(PortalError) as e:
        client.today("1001")

    assert e.value.status == 502
    assert e.value.message == "Bad Gateway"


def test_unreachable_api_has_no_status():
    session = FakeSession(requests.ConnectionError("refused"))
    client = PortalClient("http://api.local/api", session=session)

    with pytest.raises(PortalError) as e:
        client.check_out("1001")

    assert e.value.status is None


def test_login_returns_new_client_and_leaves_original_anonymous():
    session = FakeSession(
        FakeResponse(200, {"token": "t-1", "user": {"id": 1}}),
        FakeResponse(200, {"status": "present"}),
        FakeResponse(200, {"status": "present"}),
    )
    anonymous = PortalClient("http://api.local/api", session=session)

    authed = anonymous.login("hr@example.com", "secret123")
    authed.check_in("1")
    anonymous.check_in("2")

    assert authed is not anonymous
    assert session.calls[1][2]["headers"] == {"x-auth-token": "t-1"}
    assert session.calls[2][2]["headers"] == {}
