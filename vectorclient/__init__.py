"""
vectorclient - A client library for remote vector-object stores.

Example:
    >>> from vectorclient import VectorStoreClient, Filter, RetryExecutor
    >>>
    >>> client = VectorStoreClient.connect("http://localhost:8080")
    >>> articles = client.collection("Article")
    >>>
    >>> # Query with a filter
    >>> query = (
    ...     articles.query()
    ...     .where(Filter.by_property("status").equal("published"))
    ...     .return_properties(["title"])
    ...     .limit(10)
    ... )
    >>>
    >>> # Retry transient failures
    >>> results = RetryExecutor.for_query().execute(query.fetch_objects)
"""

from .core import (
    # Main classes
    VectorStoreClient,
    Collection,
    DataOperations,
    # Exceptions
    VectorClientError,
    ValidationError,
    ParseError,
    QueryError,
    TransportError,
    ConnectionFailureError,
    RequestTimeoutError,
    UnexpectedStatusError,
    NotFoundError,
    InsufficientPermissionsError,
    RetryExhaustedError,
    OperationCancelledError,
)

from .query import (
    Filter,
    FilterOperator,
    Comparison,
    NullCheck,
    Conjunction,
    ConjunctionKind,
    QueryCompiler,
    CompiledQuery,
    EmptySelection,
    criteria_to_filter,
)

from .retry import (
    RetryExecutor,
    RetryConfig,
    AttemptRecord,
    ErrorKind,
)

from .connection import Connection, HttpConnection

__version__ = "0.1.0"
__author__ = "vectorclient Team"

__all__ = [
    # Main classes
    "VectorStoreClient",
    "Collection",
    "DataOperations",
    # Query
    "Filter",
    "FilterOperator",
    "Comparison",
    "NullCheck",
    "Conjunction",
    "ConjunctionKind",
    "QueryCompiler",
    "CompiledQuery",
    "EmptySelection",
    "criteria_to_filter",
    # Retry
    "RetryExecutor",
    "RetryConfig",
    "AttemptRecord",
    "ErrorKind",
    # Connection
    "Connection",
    "HttpConnection",
    # Exceptions
    "VectorClientError",
    "ValidationError",
    "ParseError",
    "QueryError",
    "TransportError",
    "ConnectionFailureError",
    "RequestTimeoutError",
    "UnexpectedStatusError",
    "NotFoundError",
    "InsufficientPermissionsError",
    "RetryExhaustedError",
    "OperationCancelledError",
]
