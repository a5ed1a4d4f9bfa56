"""
Custom exceptions for vectorclient.

Every error raised by the library derives from VectorClientError and
carries an optional ``context`` dictionary with diagnostic details.
"""

import json
from typing import Any, Dict, List, Optional


class VectorClientError(Exception):
    """Base exception for vectorclient."""

    def __init__(self, message: str = "", context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})

    def add_context(self, key: str, value: Any) -> "VectorClientError":
        """Attach an extra context item and return self."""
        self.context[key] = value
        return self

    def detailed_message(self) -> str:
        """Message followed by the JSON-encoded context, if any."""
        if not self.context:
            return self.message
        return f"{self.message}\nContext: {json.dumps(self.context, indent=2, default=str)}"


class ValidationError(VectorClientError):
    """Input validation error (malformed filter, bad limit, bad name)."""
    pass


class ParseError(VectorClientError):
    """A response did not have the expected structure."""

    def __init__(
        self,
        message: str,
        segment: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.segment = segment
        if segment is not None:
            self.context.setdefault("segment", segment)


class QueryError(VectorClientError):
    """The store rejected a GraphQL query."""

    def __init__(
        self,
        message: str,
        errors: Optional[List[Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.errors = list(errors or [])
        self.context.setdefault("graphql_errors", self.errors)


class TransportError(VectorClientError):
    """Error raised by the connection layer."""
    pass


class ConnectionFailureError(TransportError):
    """The store could not be reached."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.url = url
        if url is not None:
            self.context.setdefault("url", url)


class RequestTimeoutError(TransportError):
    """A request did not complete in time."""

    def __init__(
        self,
        message: str,
        timeout: Optional[float] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.timeout = timeout
        if timeout is not None:
            self.context.setdefault("timeout", timeout)


class UnexpectedStatusError(TransportError):
    """The store answered with an error status code."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response_text: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.status_code = status_code
        self.response_text = response_text
        self.context.setdefault("status_code", status_code)


class NotFoundError(UnexpectedStatusError):
    """Requested resource does not exist (404)."""

    def __init__(
        self,
        message: str = "Resource not found",
        response_text: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, 404, response_text, context)


class InsufficientPermissionsError(UnexpectedStatusError):
    """Credentials lack the rights for the operation (403)."""

    def __init__(
        self,
        message: str = "Insufficient permissions to perform this operation",
        response_text: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, 403, response_text, context)


class RetryExhaustedError(VectorClientError):
    """
    Raised when every retry attempt of an operation failed.

    Attributes:
        description: Description of the retried operation
        attempt_count: Total number of attempts made
        attempts: Ordered AttemptRecord list, one per attempt
        last_error_message: Message of the final failure
        last_error: The final underlying exception (also ``__cause__``)
    """

    def __init__(
        self,
        description: str,
        attempt_count: int,
        attempts: List[Any],
        last_error_message: str,
        last_error: Optional[BaseException] = None,
    ):
        message = (
            f"'{description}' failed after {attempt_count} attempts. "
            f"Final error: {last_error_message}"
        )
        super().__init__(
            message,
            context={
                "operation": description,
                "attempt_count": attempt_count,
                "attempts": [a.to_dict() for a in attempts],
                "final_error": last_error_message,
            },
        )
        self.description = description
        self.attempt_count = attempt_count
        self.attempts = list(attempts)
        self.last_error_message = last_error_message
        self.last_error = last_error


class OperationCancelledError(VectorClientError):
    """A retried operation was cancelled before its next attempt."""

    def __init__(
        self,
        description: str,
        attempts: List[Any],
        last_error: Optional[BaseException] = None,
    ):
        super().__init__(
            f"'{description}' cancelled after {len(attempts)} attempts",
            context={
                "operation": description,
                "attempts": [a.to_dict() for a in attempts],
            },
        )
        self.description = description
        self.attempts = list(attempts)
        self.last_error = last_error
