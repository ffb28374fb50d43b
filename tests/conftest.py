"""
Common fixtures for the store export tests.

Provides a fake clock, an environment with Ecwid credentials, and a fake
Ecwid backend served through ``httpx.MockTransport``.
"""

import json
import logging

import httpx
import pytest

from shared.clients.store.ecwid.StoreClientEcwid import StoreClientEcwid
from shared.helper.HelperClock import HelperClock
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import ColorLogger

STORE_ID = "12345"
ACCESS_TOKEN = "secret_token_abc"

_ENV_KEYS = [
    "STORE_ENGINE",
    "STORE_TIMEOUT",
    "STORE_REQUEST_DELAY_MS",
    "STORE_ECWID_BASE_URL",
    "STORE_ECWID_STORE_ID",
    "STORE_ECWID_ACCESS_TOKEN",
    "STORE_ECWID_AUTH_MODE",
    "EXPORT_POLL_DELAY_MS",
    "EXPORT_POLL_TIMEOUT_MS",
    "EXPORT_OUTPUT_DIR",
    "EXPORT_FILE_SUFFIX",
    "EXPORT_EXACT_PAGES",
]


class FakeClock(HelperClock):
    """Clock that only moves when someone sleeps or the test advances it."""

    def __init__(self, start: float = 1000.0):
        self.current = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.current

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if seconds > 0:
            self.current += seconds

    def advance(self, seconds: float) -> None:
        self.current += seconds


class FakeEcwid:
    """In-memory Ecwid backend: item count, batch submission and ticket polling.

    Each ticket reports ``QUEUED`` for ``pending_polls`` status requests and
    ``COMPLETED`` afterwards, or forever if ``never_complete`` is set.
    """

    def __init__(self, total: int, pending_polls: int = 0, never_complete: bool = False, clock: FakeClock | None = None):
        self.total = total
        self.pending_polls = pending_polls
        self.never_complete = never_complete
        self.clock = clock
        self.requests: list[httpx.Request] = []
        self.request_times: list[float] = []
        self.batches: dict[str, list[dict]] = {}
        self.polls: dict[str, int] = {}

    def count_requests(self, method: str, path_suffix: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path.endswith(path_suffix))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.clock is not None:
            self.request_times.append(self.clock.now())

        if request.url.params.get("token") != ACCESS_TOKEN and request.headers.get("Authorization") != f"Bearer {ACCESS_TOKEN}":
            return httpx.Response(403, json={"errorMessage": "Invalid token"})

        path = request.url.path
        if request.method == "POST" and path.endswith("/batch"):
            ticket = f"ticket-{len(self.batches) + 1}"
            self.batches[ticket] = json.loads(request.content)
            self.polls[ticket] = 0
            return httpx.Response(200, json={"ticket": ticket})

        if request.method == "GET" and path.endswith("/batch"):
            ticket = request.url.params.get("ticket")
            if ticket not in self.batches:
                return httpx.Response(404, json={"errorMessage": "Unknown ticket"})
            self.polls[ticket] += 1
            if self.never_complete or self.polls[ticket] <= self.pending_polls:
                return httpx.Response(200, json={"status": "QUEUED", "totalRequests": len(self.batches[ticket])})
            return httpx.Response(200, json={
                "status": "COMPLETED",
                "totalRequests": len(self.batches[ticket]),
                "responses": [
                    {"id": page["path"], "status": "COMPLETED", "httpBody": {"offset": int(page["path"].rsplit("=", 1)[1])}}
                    for page in self.batches[ticket]
                ],
            })

        if request.method == "GET":
            return httpx.Response(200, json={"total": self.total, "count": 1, "offset": 0, "limit": 1, "items": []})

        return httpx.Response(405, json={"errorMessage": "Method not allowed"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def logger():
    return ColorLogger(logging.getLogger("store_export.tests"))


@pytest.fixture
def store_env(monkeypatch):
    """Clean environment holding only the Ecwid credentials."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("STORE_ECWID_STORE_ID", STORE_ID)
    monkeypatch.setenv("STORE_ECWID_ACCESS_TOKEN", ACCESS_TOKEN)
    return monkeypatch


@pytest.fixture
def helper_config(store_env, logger):
    return HelperConfig(logger=logger)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store_client(helper_config, clock):
    return StoreClientEcwid(helper_config=helper_config, clock=clock)
