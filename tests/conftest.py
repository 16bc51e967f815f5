"""Shared fixtures: a config and an aiohttp-shaped fake session."""

import pytest

from debt_walk.config import ClientConfig
from debt_walk.token_store import InMemoryKeyValueStore


class FakeResponse:
    def __init__(self, status=200, json_data=None, reason="OK"):
        self.status = status
        self.reason = reason
        self._json = json_data

    @property
    def ok(self):
        return self.status < 400

    async def json(self):
        return self._json


class _RequestContext:
    def __init__(self, outcome):
        self._outcome = outcome

    async def __aenter__(self):
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Replays queued responses (or exceptions) and records every request."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.closed = False

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if not self.outcomes:
            raise AssertionError(f"unexpected request {method} {url}")
        return _RequestContext(self.outcomes.pop(0))

    def get(self, url, **kwargs):
        return self._request("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._request("POST", url, **kwargs)

    async def close(self):
        self.closed = True


@pytest.fixture
def config():
    return ClientConfig(
        client_id="186960",
        client_secret="secret",
        redirect_uri="https://example.github.io/debt-walk/",
        athlete_id=162881641,
        goal_miles=364,
    )


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


def activity(name="Debt Walk", distance=1609.34, **extra):
    record = {"id": extra.pop("id", 1), "name": name, "distance": distance,
              "start_date": "2025-01-01T10:00:00Z", "moving_time": 1200}
    record.update(extra)
    return record


@pytest.fixture
def root_logging():
    """Put the root logger back the way pytest set it up."""
    import logging

    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in saved_handlers:
            handler.close()
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)
