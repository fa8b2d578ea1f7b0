from __future__ import annotations

import copy
import json
from typing import Any, Optional

import pytest
import requests

BASE_URL = "http://hr.test/api"

_BULK_KEYS = {
    "/users/bulk": ("/users", "users"),
    "/attendance/bulk": ("/attendance", "attendance"),
    "/leaves/bulk": ("/leaves", "leaves"),
    "/leave-balances/bulk": ("/leave-balances", "balances"),
    "/rosters/bulk": ("/rosters", "rosters"),
}


class StubResponse:
    """Just enough of requests.Response for ApiClient.handle_response."""

    def __init__(self, status_code: int = 200, body: Any = None, *, text: Optional[str] = None,
                 content_type: str = "application/json", url: str = ""):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)
        self.headers = {"content-type": content_type}
        self.url = url
        self.reason = "OK" if status_code < 400 else "Error"

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._body is None and self.text:
            return json.loads(self.text)
        return self._body


class FakeHrApi:
    """In-memory HR API behind a requests.Session-shaped object."""

    def __init__(self):
        self.healthy = True
        self.unreachable = False
        self.collections: dict[str, Any] = {
            "/users": [],
            "/attendance": [],
            "/leaves": [],
            "/leave-balances": [],
            "/holidays": [],
            "/rosters": [],
            "/config": {"timezone": "UTC+0:00 (GMT)", "workStartTime": "09:00", "gracePeriodMinutes": 15},
        }
        self.overrides: dict[str, StubResponse] = {}
        self.calls: list[tuple[str, str, Optional[dict]]] = []

    def _path(self, url: str) -> str:
        assert "/api/" in url, url
        return "/" + url.split("/api/", 1)[1]

    def get(self, url, headers=None, timeout=None):
        path = self._path(url)
        self.calls.append(("GET", path, headers))
        if self.unreachable:
            raise requests.ConnectionError("connection refused")
        if path in self.overrides:
            return self.overrides[path]
        if path == "/health":
            return StubResponse(200 if self.healthy else 503, {"status": "ok" if self.healthy else "down"}, url=url)
        if path not in self.collections:
            return StubResponse(404, {"message": "not found"}, url=url)
        return StubResponse(200, copy.deepcopy(self.collections[path]), url=url)

    def post(self, url, json=None, headers=None, timeout=None):
        path = self._path(url)
        self.calls.append(("POST", path, headers))
        if self.unreachable:
            raise requests.ConnectionError("connection refused")
        if path in self.overrides:
            return self.overrides[path]
        collection, key = _BULK_KEYS[path]
        self.collections[collection] = copy.deepcopy(json[key])
        return StubResponse(200, {"success": True}, url=url)


@pytest.fixture
def fake_api() -> FakeHrApi:
    return FakeHrApi()


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def stub_response():
    return StubResponse
