"""
Retry handling for vectorclient operations.

Example:
    >>> from vectorclient.retry import RetryExecutor
    >>>
    >>> executor = RetryExecutor.for_query()
    >>> objects = executor.execute(query.fetch_objects, description="fetch Article")
"""

from .executor import (
    RetryExecutor,
    RetryConfig,
    AttemptRecord,
    ErrorKind,
    RETRY_ELIGIBILITY,
    RETRIABLE_STATUS_CODES,
    classify_error,
    is_retriable,
)

__all__ = [
    "RetryExecutor",
    "RetryConfig",
    "AttemptRecord",
    "ErrorKind",
    "RETRY_ELIGIBILITY",
    "RETRIABLE_STATUS_CODES",
    "classify_error",
    "is_retriable",
]
