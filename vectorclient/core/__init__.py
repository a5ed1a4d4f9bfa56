"""
Core components for vectorclient.
"""

from .exceptions import (
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
from .data import DataOperations
from .collection import Collection
from .client import VectorStoreClient

__all__ = [
    # Client
    "VectorStoreClient",
    "Collection",
    "DataOperations",
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
