# tests/conftest.py
"""
Pytest configuration and shared fixtures for the harness tests.

FakePage / FakeResponse stand in for Playwright's async Page and Response:
they expose exactly what ResponseObserver touches (page.on /
page.remove_listener, response.status / headers / url / json() / request.headers).
"""

import asyncio
import json
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest

from harness_fixtures import (  # noqa: F401
    authenticated_session,
    correlation_store,
    correlation_test_id,
    gorest_service,
    harness_environment,
    login_page,
    observe_page,
)

JSON_HEADERS = {"content-type": "application/json; charset=utf-8"}


class FakePage:
    """Minimal event source with Playwright's listener API."""

    def __init__(self):
        self.listeners: Dict[str, List[Callable]] = {}

    def on(self, event: str, callback: Callable) -> None:
        self.listeners.setdefault(event, []).append(callback)

    def remove_listener(self, event: str, callback: Callable) -> None:
        self.listeners[event].remove(callback)

    def listener_count(self, event: str = "response") -> int:
        return len(self.listeners.get(event, []))

    def emit(self, event: str, payload: Any) -> None:
        for callback in list(self.listeners.get(event, [])):
            callback(payload)


class FakeResponse:
    """
    Response whose json() can be held back with an asyncio.Event to control
    the order in which bodies "arrive".
    """

    def __init__(
        self,
        body: Any = None,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
        request_headers: Optional[Dict[str, str]] = None,
        url: str = "https://api.example.com/api/prequalification",
        raw_body: Optional[str] = None,
        gate: Optional[asyncio.Event] = None,
    ):
        self.status = status
        self.headers = dict(JSON_HEADERS) if headers is None else headers
        self.url = url
        self.request = SimpleNamespace(headers=request_headers or {}, url=url)
        self._body = body
        self._raw_body = raw_body
        self._gate = gate
        self.json_calls = 0

    async def json(self) -> Any:
        self.json_calls += 1
        if self._gate is not None:
            await self._gate.wait()
        if self._raw_body is not None:
            return json.loads(self._raw_body)
        return self._body


@pytest.fixture
def fake_page():
    return FakePage()


@pytest.fixture
def make_response():
    def _make(*args, **kwargs):
        return FakeResponse(*args, **kwargs)
    return _make


@pytest.fixture
def env_dir(tmp_path, monkeypatch):
    """Point the dotenv directory at a temp folder for tests touching env files."""
    import utils.env as env_module

    env_path = tmp_path / "envs"
    env_path.mkdir()
    monkeypatch.setitem(env_module.CONFIG, "environment", {"env_dir": str(env_path), "env_var": "ENV"})
    return env_path
