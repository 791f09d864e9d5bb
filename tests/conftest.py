"""
Pytest configuration and shared fixtures for storefront-client tests.

HTTP is faked at the ``requests.Session.request`` seam: a FakeApi routes each
(method, path) to a handler that returns a real ``requests.Response``.
"""

import json
import os
import tempfile
import threading
import time
from dataclasses import dataclass, field
from http import HTTPStatus
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock

import pytest
import requests

from storefront.api import ApiClient, Storefront
from storefront.auth import MemoryCredentialStore

BASE_URL = "http://shop.test"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast isolated tests")
    config.addinivalue_line("markers", "integration: multi-component flows over the fake API")


def make_response(status_code: int = 200, json_body: Any = None,
                  body: Optional[Any] = None, reason: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    try:
        response.reason = reason or HTTPStatus(status_code).phrase
    except ValueError:
        response.reason = reason
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    elif body is not None:
        response._content = body if isinstance(body, bytes) else body.encode("utf-8")
    else:
        response._content = b""
    return response


@dataclass
class RecordedCall:
    method: str
    path: str
    headers: Dict[str, str]
    data: Any = None
    files: Any = None
    timeout: Any = None

    @property
    def json(self) -> Any:
        return json.loads(self.data) if self.data else None


@dataclass
class FakeApi:
    """Scripted API server behind ``requests.Session.request``."""

    base_url: str = BASE_URL
    routes: Dict[tuple, Callable[[RecordedCall], requests.Response]] = field(default_factory=dict)
    calls: List[RecordedCall] = field(default_factory=list)

    def __post_init__(self):
        self._lock = threading.Lock()

    def route(self, method: str, path: str, handler=None, **response_kwargs) -> None:
        """Register a handler, or a fixed response built from ``response_kwargs``."""
        if handler is None:
            handler = respond(**response_kwargs)
        self.routes[(method, path)] = handler

    def __call__(self, method, url, headers=None, data=None, files=None, timeout=None, **kwargs):
        path = url[len(self.base_url):] if url.startswith(self.base_url) else url
        call = RecordedCall(method, path, dict(headers or {}), data, files, timeout)
        with self._lock:
            self.calls.append(call)
        handler = self.routes.get((method, path))
        if handler is None:
            return make_response(404, {"message": f"no route for {method} {path}"})
        return handler(call)

    def calls_to(self, method: str, path: str) -> List[RecordedCall]:
        with self._lock:
            return [c for c in self.calls if c.method == method and c.path == path]


def respond(status_code: int = 200, json_body: Any = None, body: Any = None,
            reason: Optional[str] = None):
    return lambda call: make_response(status_code, json_body, body, reason)


def in_sequence(*handlers):
    """Handler returning each scripted handler's response in turn; the last repeats."""
    remaining = list(handlers)
    lock = threading.Lock()

    def handler(call):
        with lock:
            current = remaining.pop(0) if len(remaining) > 1 else remaining[0]
        return current(call)
    return handler


def requires_token(token: str, json_body: Any = None):
    """200 with ``json_body`` for ``Bearer <token>``, 401 otherwise."""
    def handler(call):
        if call.headers.get("Authorization") == f"Bearer {token}":
            return make_response(200, json_body if json_body is not None else {})
        return make_response(401, {"message": "Token expired"})
    return handler


def wait_for(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def config_file(temp_dir):
    return temp_dir / ".config" / "storefront" / "config.toml"


@pytest.fixture
def clean_environment(monkeypatch):
    """Ensure no STOREFRONT_* variable leaks into a test."""
    for var in list(os.environ):
        if var.startswith("STOREFRONT_"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tempfile.gettempdir())
    yield


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def session(fake_api):
    session = requests.Session()
    session.request = Mock(side_effect=fake_api)
    return session


@pytest.fixture
def store():
    return MemoryCredentialStore()


@pytest.fixture
def sleep():
    return Mock()


@pytest.fixture
def client(session, store, sleep):
    api_client = ApiClient(BASE_URL, store=store, session=session, sleep=sleep, timeout=5)
    yield api_client
    api_client.close()


@pytest.fixture
def shop(client):
    return Storefront(client)


@pytest.fixture
def logged_in(store):
    store.save_auth("T1", {"id": "u1", "name": "Asha", "email": "asha@example.com",
                           "role": "user"}, "R1")
    return store
