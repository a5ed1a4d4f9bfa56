"""
Pytest fixtures for vectorclient tests.
"""

import pytest
from typing import Any, Dict, List, Optional

from vectorclient.connection.base import Connection


class FakeConnection(Connection):
    """In-memory connection that records calls and replays canned responses."""

    def __init__(self, responses: Optional[Dict[str, Any]] = None):
        self.calls: List[tuple] = []
        self.responses: Dict[str, Any] = dict(responses or {})
        self.closed = False

    def _reply(self, method: str, path: str, body: Any = None) -> Any:
        self.calls.append((method, path, body))
        response = self.responses.get(method, {})
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(path, body)
        return response

    def get(self, path, params=None):
        return self._reply("GET", path, params)

    def post(self, path, data=None):
        return self._reply("POST", path, data)

    def put(self, path, data=None):
        return self._reply("PUT", path, data)

    def patch(self, path, data=None):
        return self._reply("PATCH", path, data)

    def delete(self, path):
        return self._reply("DELETE", path)

    def head(self, path):
        return self._reply("HEAD", path)

    def close(self):
        self.closed = True


class SleepRecorder:
    """Stand-in for time.sleep that records requested delays."""

    def __init__(self):
        self.delays: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def connection() -> FakeConnection:
    """Fake connection with no canned responses."""
    return FakeConnection()


@pytest.fixture
def sleeper() -> SleepRecorder:
    """Recorder used in place of time.sleep."""
    return SleepRecorder()


@pytest.fixture
def article_envelope() -> Dict[str, Any]:
    """GraphQL envelope with two Article objects."""
    return {
        "data": {
            "Get": {
                "Article": [
                    {"title": "First", "_additional": {"id": "u1"}},
                    {"title": "Second", "views": 10, "_additional": {"id": "u2"}},
                ]
            }
        }
    }
