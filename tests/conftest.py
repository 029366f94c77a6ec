import json
import threading
from typing import Any, Dict, List, Optional

import httpx
import pytest

from fcmclient.infrastructure.config import settings
from fcmclient.infrastructure.fcm.fcm_client import FCMClient

TEST_API_KEY = "test-server-key"

OK_BODY = {
    "multicast_id": 1,
    "success": 1,
    "failure": 0,
    "canonical_ids": 0,
    "results": [{"message_id": "m1"}],
}


class FakeGateway:
    """Scriptable stand-in for the FCM endpoint, served through httpx.MockTransport.

    Set ``status_code``, ``json_body`` / ``text_body`` and ``headers`` to shape
    the next responses; every request received is recorded in ``requests``.
    """

    def __init__(self):
        self.status_code = 200
        self.json_body: Any = OK_BODY
        self.text_body: Optional[str] = None
        self.headers: Dict[str, str] = {}
        self.raise_error: Optional[Exception] = None
        self.requests: List[httpx.Request] = []
        self._lock = threading.Lock()

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body, headers=self.headers)
        return httpx.Response(self.status_code, json=self.json_body, headers=self.headers)

    @property
    def last_payload(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def api_key():
    return TEST_API_KEY


@pytest.fixture
def fcm_client(gateway, api_key):
    """FCMClient wired to the fake gateway."""
    client = FCMClient(api_key, transport=httpx.MockTransport(gateway.handler))
    yield client
    client.close()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keeps tests away from ~/.fcmclient/config.yaml, .env files and FCM_* variables."""
    monkeypatch.setattr(settings, "_loaded", True)
    monkeypatch.setattr(settings, "_config", {})
    for name in ("FCM_API_KEY", "FCM_SERVER_URL", "FCM_CONNECTION_TIMEOUT", "LOGGING_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    yield
    settings.clear_test_config()
