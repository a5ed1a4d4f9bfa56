"""
Integration tests for the query pipeline over HTTP.
"""

import json
import threading
from datetime import datetime, timezone

import pytest
import requests
from unittest.mock import MagicMock

from vectorclient import (
    Filter,
    HttpConnection,
    NotFoundError,
    OperationCancelledError,
    QueryError,
    RetryExecutor,
    RetryExhaustedError,
    VectorStoreClient,
)


def make_response(status=200, body=None):
    response = requests.Response()
    response.status_code = status
    response._content = json.dumps(body).encode("utf-8") if body is not None else b""
    return response


@pytest.fixture
def session():
    """Mocked requests session."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session, sleeper):
    """Client whose connection retries through the sleep recorder."""
    connection = HttpConnection(
        "http://store:8080",
        session=session,
        retry_executor=RetryExecutor.for_connection(sleep=sleeper),
    )
    return VectorStoreClient(connection)


def sent_query(session, call_index=-1):
    return session.request.call_args_list[call_index][1]["json"]["query"]


class TestQueryPipeline:
    """Filter -> compile -> POST -> parse."""

    def test_filtered_query(self, client, session, article_envelope):
        session.request.return_value = make_response(body=article_envelope)
        published = Filter.by_property("status").equal("published")
        popular = Filter.by_property("views").greater_than_or_equal(10)

        records = (
            client.collection("Article", tenant="acme")
            .query()
            .where(published & popular)
            .return_properties(["title", "views"])
            .limit(5)
            .fetch_objects()
        )

        assert records == [
            {"title": "First", "id": "u1"},
            {"title": "Second", "views": 10, "id": "u2"},
        ]
        args = session.request.call_args[0]
        assert args == ("POST", "http://store:8080/v1/graphql")
        assert sent_query(session) == (
            '{ Get { Article(where: {operator: And, operands: ['
            '{path: ["status"], operator: Equal, valueText: "published"}, '
            '{path: ["views"], operator: GreaterThanEqual, valueInt: 10}]}, '
            'limit: 5, tenant: "acme") { title views _additional { id } } } }'
        )

    def test_date_and_id_filters(self, client, session):
        session.request.return_value = make_response(body={"data": {"Get": {"Article": []}}})
        since = datetime(2024, 1, 1, tzinfo=timezone.utc)
        where = Filter.by_property("published").greater_than(since) | Filter.by_id().equal("u9")

        assert client.collection("Article").query().where(where).fetch_objects() == []

        query = sent_query(session)
        assert 'valueDate: "2024-01-01T00:00:00+00:00"' in query
        assert '{path: ["id"], operator: Equal, valueText: "u9"}' in query
        assert "operator: Or" in query

    def test_graphql_errors(self, client, session):
        session.request.return_value = make_response(
            body={"errors": [{"message": "no such class"}], "data": None}
        )

        with pytest.raises(QueryError) as exc_info:
            client.collection("Missing").query().fetch_objects()

        assert "no such class" in str(exc_info.value)
        # GraphQL errors are not transient
        assert session.request.call_count == 1


class TestRetryOverHttp:
    """Transport retries wrapped around real request handling."""

    def test_recovers_from_transient_failures(self, client, session, sleeper, article_envelope):
        session.request.side_effect = [
            requests.ConnectionError("refused"),
            make_response(status=503),
            make_response(body=article_envelope),
        ]

        records = client.collection("Article").find_by({"title": "First"})

        assert len(records) == 2
        assert sleeper.delays == [0.5, 1.0]

    def test_exhaustion(self, client, session, sleeper):
        session.request.side_effect = requests.ReadTimeout("slow")

        with pytest.raises(RetryExhaustedError) as exc_info:
            client.collection("Article").query().fetch_objects()

        error = exc_info.value
        assert error.attempt_count == 4
        assert error.description == "POST /v1/graphql"
        assert [a.delay_before_next for a in error.attempts] == [0.5, 1.0, 2.0, None]
        assert sleeper.delays == [0.5, 1.0, 2.0]

    def test_not_found_propagates(self, client, session, sleeper):
        session.request.return_value = make_response(status=404)

        with pytest.raises(NotFoundError):
            client.collection("Article").data().get("u1")

        assert sleeper.delays == []

    def test_query_level_retry_with_cancellation(self, session, sleeper):
        connection = HttpConnection("http://store:8080", session=session)
        query = VectorStoreClient(connection).collection("Article").query()
        session.request.side_effect = requests.ConnectionError("refused")
        cancel = threading.Event()

        def cancel_after_first(seconds):
            cancel.set()

        executor = RetryExecutor.for_query(sleep=cancel_after_first)

        with pytest.raises(OperationCancelledError) as exc_info:
            executor.execute(query.fetch_objects, "fetch Article", cancel_event=cancel)

        # first failure sleeps (and cancels), second failure stops before sleeping
        assert session.request.call_count == 2
        assert len(exc_info.value.attempts) == 2
