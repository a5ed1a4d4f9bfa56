"""
Unit tests for the requests-based HTTP connection.
"""

import json

import pytest
import requests
from unittest.mock import MagicMock

from vectorclient.connection.http import HttpConnection
from vectorclient.core.exceptions import (
    ConnectionFailureError,
    InsufficientPermissionsError,
    NotFoundError,
    ParseError,
    RequestTimeoutError,
    RetryExhaustedError,
    TransportError,
    UnexpectedStatusError,
)
from vectorclient.retry.executor import RetryExecutor


def make_response(status=200, body=None, raw=None):
    response = requests.Response()
    response.status_code = status
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    return response


@pytest.fixture
def session():
    """Mocked requests session."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def http(session):
    """Connection over the mocked session."""
    return HttpConnection("http://localhost:8080/", session=session, timeout=5.0)


class TestRequests:
    """Tests for request construction and decoding."""

    def test_get(self, http, session):
        session.request.return_value = make_response(body={"hello": "world"})

        assert http.get("/v1/meta", {"a": "b"}) == {"hello": "world"}
        session.request.assert_called_once_with(
            "GET",
            "http://localhost:8080/v1/meta",
            params={"a": "b"},
            json=None,
            headers={"Accept": "application/json"},
            timeout=5.0,
        )

    def test_post_sends_json(self, http, session):
        session.request.return_value = make_response(body={"id": "u1"})

        assert http.post("/v1/objects", {"class": "Article"}) == {"id": "u1"}
        args, kwargs = session.request.call_args
        assert args == ("POST", "http://localhost:8080/v1/objects")
        assert kwargs["json"] == {"class": "Article"}

    @pytest.mark.parametrize("method", ["put", "patch"])
    def test_put_patch(self, http, session, method):
        session.request.return_value = make_response(status=204)

        assert getattr(http, method)("/v1/objects/Article/u1", {"properties": {}}) == {}
        assert session.request.call_args[0][0] == method.upper()

    def test_delete(self, http, session):
        session.request.return_value = make_response(status=204)

        assert http.delete("/v1/objects/Article/u1") is True

    def test_head(self, http, session):
        session.request.return_value = make_response(status=200)
        assert http.head("/v1/objects/Article/u1") is True

        session.request.return_value = make_response(status=404)
        assert http.head("/v1/objects/Article/u1") is False

    def test_api_key_header(self, session):
        conn = HttpConnection(
            "http://localhost:8080", api_key="secret", headers={"X-Extra": "1"}, session=session
        )
        session.request.return_value = make_response(body={})

        conn.get("/v1/meta")

        headers = session.request.call_args[1]["headers"]
        assert headers["Authorization"] == "Bearer secret"
        assert headers["X-Extra"] == "1"

    def test_invalid_json(self, http, session):
        session.request.return_value = make_response(raw=b"<html>")

        with pytest.raises(ParseError):
            http.get("/v1/meta")


class TestErrors:
    """Tests for transport error mapping."""

    def test_connection_error(self, http, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(ConnectionFailureError) as exc_info:
            http.get("/v1/meta")

        assert exc_info.value.url == "http://localhost:8080/v1/meta"
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_timeout(self, http, session):
        session.request.side_effect = requests.ReadTimeout("slow")

        with pytest.raises(RequestTimeoutError) as exc_info:
            http.get("/v1/meta")

        assert exc_info.value.timeout == 5.0

    def test_connect_timeout_is_timeout(self, http, session):
        session.request.side_effect = requests.ConnectTimeout("slow connect")

        with pytest.raises(RequestTimeoutError):
            http.get("/v1/meta")

    def test_dropped_body_is_connection_failure(self, http, session):
        session.request.side_effect = requests.exceptions.ChunkedEncodingError("reset mid-body")

        with pytest.raises(ConnectionFailureError) as exc_info:
            http.get("/v1/meta")

        assert isinstance(exc_info.value.__cause__, requests.exceptions.ChunkedEncodingError)

    @pytest.mark.parametrize(
        "error",
        [
            requests.TooManyRedirects("loop"),
            requests.exceptions.InvalidURL("bad url"),
            requests.exceptions.ContentDecodingError("bad gzip"),
        ],
    )
    def test_other_request_errors(self, http, session, error):
        session.request.side_effect = error

        with pytest.raises(TransportError) as exc_info:
            http.get("/v1/meta")

        assert exc_info.value.__cause__ is error
        assert exc_info.value.context["error_type"] == type(error).__name__

    def test_not_found(self, http, session):
        session.request.return_value = make_response(status=404, body={"error": "nope"})

        with pytest.raises(NotFoundError) as exc_info:
            http.get("/v1/objects/Article/missing")

        assert exc_info.value.status_code == 404
        assert "nope" in exc_info.value.response_text

    def test_forbidden(self, http, session):
        session.request.return_value = make_response(status=403)

        with pytest.raises(InsufficientPermissionsError):
            http.post("/v1/graphql", {"query": "{}"})

    def test_unexpected_status(self, http, session):
        session.request.return_value = make_response(status=500, raw=b"oops")

        with pytest.raises(UnexpectedStatusError) as exc_info:
            http.delete("/v1/objects/Article/u1")

        assert exc_info.value.status_code == 500
        assert exc_info.value.context["operation"] == "DELETE /v1/objects/Article/u1"


class TestRetry:
    """Tests for the optional retry executor."""

    def test_retries_transient_status(self, session, sleeper):
        conn = HttpConnection(
            "http://localhost:8080",
            session=session,
            retry_executor=RetryExecutor(max_retries=2, sleep=sleeper),
        )
        session.request.side_effect = [
            make_response(status=503),
            make_response(body={"ok": True}),
        ]

        assert conn.get("/v1/meta") == {"ok": True}
        assert session.request.call_count == 2
        assert sleeper.delays == [1.0]

    def test_exhaustion_description(self, session, sleeper):
        conn = HttpConnection(
            "http://localhost:8080",
            session=session,
            retry_executor=RetryExecutor(max_retries=1, sleep=sleeper),
        )
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(RetryExhaustedError) as exc_info:
            conn.post("/v1/graphql", {"query": "{}"})

        assert exc_info.value.description == "POST /v1/graphql"
        assert session.request.call_count == 2

    def test_dropped_body_is_retried(self, session, sleeper):
        conn = HttpConnection(
            "http://localhost:8080",
            session=session,
            retry_executor=RetryExecutor(max_retries=1, sleep=sleeper),
        )
        session.request.side_effect = requests.exceptions.ChunkedEncodingError("reset mid-body")

        with pytest.raises(RetryExhaustedError):
            conn.get("/v1/meta")

        assert session.request.call_count == 2
        assert sleeper.delays == [1.0]

    def test_not_found_not_retried(self, session, sleeper):
        conn = HttpConnection(
            "http://localhost:8080",
            session=session,
            retry_executor=RetryExecutor(sleep=sleeper),
        )
        session.request.return_value = make_response(status=404)

        with pytest.raises(NotFoundError):
            conn.get("/v1/objects/Article/u1")

        assert session.request.call_count == 1
        assert sleeper.delays == []


class TestLifecycle:
    """Tests for session ownership."""

    def test_injected_session_not_closed(self, http, session):
        http.close()

        session.close.assert_not_called()

    def test_context_manager_closes_own_session(self, monkeypatch):
        created = MagicMock(spec=requests.Session)
        monkeypatch.setattr(requests, "Session", lambda: created)

        with HttpConnection("http://localhost:8080"):
            pass

        created.close.assert_called_once()
