"""
Unit tests for the exception hierarchy.
"""

import pytest

from vectorclient.core.exceptions import (
    ConnectionFailureError,
    InsufficientPermissionsError,
    NotFoundError,
    OperationCancelledError,
    ParseError,
    QueryError,
    RequestTimeoutError,
    RetryExhaustedError,
    TransportError,
    UnexpectedStatusError,
    ValidationError,
    VectorClientError,
)
from vectorclient.retry.executor import AttemptRecord, ErrorKind


@pytest.mark.parametrize(
    "error_class",
    [ValidationError, ParseError, QueryError, TransportError, RetryExhaustedError,
     OperationCancelledError],
)
def test_all_derive_from_base(error_class):
    assert issubclass(error_class, VectorClientError)


@pytest.mark.parametrize(
    "error_class",
    [ConnectionFailureError, RequestTimeoutError, UnexpectedStatusError,
     NotFoundError, InsufficientPermissionsError],
)
def test_transport_errors(error_class):
    assert issubclass(error_class, TransportError)


class TestContext:
    """Tests for error context."""

    def test_default_context(self):
        error = VectorClientError("boom")

        assert error.context == {}
        assert error.detailed_message() == "boom"

    def test_add_context(self):
        error = VectorClientError("boom").add_context("operation", "GET /v1/meta")

        assert error.context == {"operation": "GET /v1/meta"}
        assert "GET /v1/meta" in error.detailed_message()

    def test_context_is_copied(self):
        context = {"a": 1}
        error = VectorClientError("boom", context)
        error.add_context("b", 2)

        assert context == {"a": 1}


class TestStatusErrors:
    """Tests for HTTP status errors."""

    def test_not_found(self):
        error = NotFoundError()

        assert error.status_code == 404
        assert str(error) == "Resource not found"

    def test_forbidden(self):
        assert InsufficientPermissionsError().status_code == 403

    def test_unexpected_status(self):
        error = UnexpectedStatusError("failed", 502, response_text="bad gateway")

        assert error.status_code == 502
        assert error.response_text == "bad gateway"
        assert error.context["status_code"] == 502


class TestOtherErrors:
    """Tests for parse, query and retry errors."""

    def test_parse_error_segment(self):
        error = ParseError("missing", segment="Get")

        assert error.segment == "Get"
        assert error.context["segment"] == "Get"

    def test_query_error(self):
        error = QueryError("failed", [{"message": "x"}])

        assert error.errors == [{"message": "x"}]

    def test_retry_exhausted(self):
        last = RequestTimeoutError("slow")
        attempts = [
            AttemptRecord(1, "slow", "RequestTimeoutError", ErrorKind.TIMEOUT, 1.0, 1.0),
            AttemptRecord(2, "slow", "RequestTimeoutError", ErrorKind.TIMEOUT, 2.0, None),
        ]

        error = RetryExhaustedError("GET /v1/meta", 2, attempts, "slow", last)

        assert str(error) == "'GET /v1/meta' failed after 2 attempts. Final error: slow"
        assert error.attempts == attempts
        assert error.last_error is last
        assert error.context["attempts"][1]["delay_before_next"] is None

    def test_cancelled(self):
        error = OperationCancelledError("op", [])

        assert "cancelled" in str(error)
        assert error.last_error is None
