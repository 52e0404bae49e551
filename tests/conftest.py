"""Shared test fixtures for ovhapi.

Provides a fake API server backed by :class:`httpx.MockTransport`, a fixed
clock, and isolation from the user's ``ovh.conf`` files and ``OVH_*``
environment variables.  Fixtures are discovered by pytest automatically.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from ovhapi.output import reset_output

BASE_URL = "https://eu.api.ovh.com/1.0"
SERVER_TIME = 1_366_560_945


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr, which
    go stale once a CliRunner invocation finishes.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration lookups to *tmp_path*.

    Clears every ``OVH_*`` variable, points the home directory at
    ``tmp_path/home`` and changes the working directory to ``tmp_path``.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    for var in [
        "OVH_ENDPOINT",
        "OVH_APPLICATION_KEY",
        "OVH_APPLICATION_SECRET",
        "OVH_CONSUMER_KEY",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Fake API
# ---------------------------------------------------------------------------


class FakeClock:
    """Settable stand-in for :func:`time.time`."""

    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeAPI:
    """In-memory API answering requests through :class:`httpx.MockTransport`.

    ``/auth/time`` answers :attr:`server_time` unless overridden.  Other
    routes are registered with :meth:`route`; unknown routes answer 404 with
    a structured error body.  Every request received is kept in
    :attr:`requests`.
    """

    def __init__(self, server_time: int = SERVER_TIME) -> None:
        self.base_url = BASE_URL
        self.server_time = server_time
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.route("GET", "/auth/time", lambda request: httpx.Response(200, json=self.server_time))
        self.http = httpx.Client(transport=httpx.MockTransport(self._handle))

    def route(
        self,
        method: str,
        path: str,
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
        *,
        status_code: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
    ) -> None:
        """Register a response for ``method path`` (path relative to BASE_URL)."""
        if handler is None:

            def handler(request: httpx.Request) -> httpx.Response:
                if content is not None:
                    return httpx.Response(status_code, content=content)
                return httpx.Response(status_code, json=json_body)

        self._routes[(method, BASE_URL + path)] = handler

    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        handler = self._routes.get((request.method, url))
        if handler is None:
            body = {"errorCode": "NOT_FOUND", "httpCode": "404 Not Found", "message": "Not found"}
            return httpx.Response(404, content=json.dumps(body).encode())
        return handler(request)


@pytest.fixture
def fake_api() -> FakeAPI:
    api = FakeAPI()
    yield api
    api.http.close()


@pytest.fixture
def clock() -> FakeClock:
    """Local clock running 5 seconds ahead of the fake server."""
    return FakeClock(SERVER_TIME + 5)
