"""
Filter composition, query compilation and retry handling.

Compiling queries does not need a running store; the final section does.
"""

import threading
from datetime import datetime

from vectorclient import (
    Filter,
    QueryCompiler,
    RetryExecutor,
    RetryExhaustedError,
    VectorStoreClient,
)
from vectorclient.utils.logging import setup_logger


def show_compiled_queries():
    print("Compiled queries")
    print("-" * 60)

    where = (
        Filter.by_property("status").equal("published")
        & (
            Filter.by_property("rating").greater_than(4.5)
            | Filter.by_property("published").greater_than(datetime(2024, 1, 1))
        )
    )
    query = QueryCompiler(None, "Article", tenant="acme").where(where).limit(20)
    print(query.return_properties(["title", "rating"]).compile().text)

    by_criteria = Filter.from_criteria({"owner": None, "lang": "en"})
    print(QueryCompiler(None, "Article").where(by_criteria).compile().text)

    ids = Filter.by_id().contains_any(["a1", "b2"])
    print(QueryCompiler(None, "Article").where(ids).compile().text)


def run_with_retry():
    print("\nRetrying a query")
    print("-" * 60)

    client = VectorStoreClient.connect("http://localhost:8080", timeout=5.0)
    query = client.collection("Article").query().return_properties(["title"])
    cancel = threading.Event()

    try:
        records = RetryExecutor.for_query().execute(
            query.fetch_objects, "fetch Article titles", cancel_event=cancel
        )
        print(f"Fetched {len(records)} objects")
    except RetryExhaustedError as e:
        print(e)
        for attempt in e.attempts:
            print(f"  attempt {attempt.number}: {attempt.error_type} ({attempt.kind.value})")
    finally:
        client.close()


if __name__ == "__main__":
    setup_logger("vectorclient", level="DEBUG")
    show_compiled_queries()
    run_with_retry()
