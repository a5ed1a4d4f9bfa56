"""
Retry execution with exponential backoff.

Wraps any zero-argument callable and retries it on transient transport
failures (connection failures, timeouts, 502/503/504 responses). Other
failures propagate unchanged after the first attempt.

Example:
    >>> executor = RetryExecutor(max_retries=3)
    >>> schema = executor.execute(
    ...     lambda: connection.get("/v1/schema/Article"),
    ...     description="get Article schema",
    ... )
    >>>
    >>> # Presets
    >>> RetryExecutor.for_connection()   # 3 retries, 0.5s base, 10s cap
    >>> RetryExecutor.for_query()        # 2 retries, 1.0s base, 30s cap
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Optional, TypeVar
import threading
import time

from ..core.exceptions import (
    ConnectionFailureError,
    OperationCancelledError,
    RequestTimeoutError,
    RetryExhaustedError,
    UnexpectedStatusError,
    ValidationError,
)
from ..utils.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories used for retry eligibility."""

    CONNECTION_FAILURE = "connection_failure"
    TIMEOUT = "timeout"
    GATEWAY_STATUS = "gateway_status"     # 502, 503, 504
    OTHER_STATUS = "other_status"
    OTHER = "other"


RETRIABLE_STATUS_CODES: FrozenSet[int] = frozenset({502, 503, 504})

RETRY_ELIGIBILITY: Dict[ErrorKind, bool] = {
    ErrorKind.CONNECTION_FAILURE: True,
    ErrorKind.TIMEOUT: True,
    ErrorKind.GATEWAY_STATUS: True,
    ErrorKind.OTHER_STATUS: False,
    ErrorKind.OTHER: False,
}


def classify_error(error: BaseException) -> ErrorKind:
    """Map an exception to its ErrorKind."""
    if isinstance(error, ConnectionFailureError):
        return ErrorKind.CONNECTION_FAILURE
    if isinstance(error, RequestTimeoutError):
        return ErrorKind.TIMEOUT
    if isinstance(error, UnexpectedStatusError):
        if error.status_code in RETRIABLE_STATUS_CODES:
            return ErrorKind.GATEWAY_STATUS
        return ErrorKind.OTHER_STATUS
    return ErrorKind.OTHER


def is_retriable(error: BaseException) -> bool:
    """Whether the retry policy allows another attempt after this error."""
    return RETRY_ELIGIBILITY[classify_error(error)]


@dataclass
class RetryConfig:
    """Backoff configuration."""

    max_retries: int = 4
    base_delay: float = 1.0
    max_delay: float = 60.0
    enabled: bool = True

    def __post_init__(self):
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ValidationError("max_retries must be an integer")
        if self.max_retries < 0:
            raise ValidationError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.base_delay < 0:
            raise ValidationError(f"base_delay must be >= 0, got {self.base_delay}")
        if self.max_delay < 0:
            raise ValidationError(f"max_delay must be >= 0, got {self.max_delay}")


@dataclass
class AttemptRecord:
    """One failed attempt of an execute() call."""

    number: int
    error: str
    error_type: str
    kind: ErrorKind
    timestamp: float = field(default_factory=time.time)
    delay_before_next: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "error": self.error,
            "error_type": self.error_type,
            "kind": self.kind.value,
            "timestamp": self.timestamp,
            "delay_before_next": self.delay_before_next,
        }


class RetryExecutor:
    """
    Executes operations with retry and capped exponential backoff.

    Attempt n+1 (n >= 1) is preceded by a sleep of
    ``min(base_delay * 2 ** (n - 1), max_delay)`` seconds.
    """

    def __init__(
        self,
        max_retries: int = 4,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the executor.

        Args:
            max_retries: Retries after the initial attempt
            base_delay: Delay before the first retry, in seconds
            max_delay: Upper bound for any single delay, in seconds
            sleep: Blocking sleep function (injectable for tests)
            clock: Wall-clock source for attempt timestamps
        """
        self._config = RetryConfig(
            max_retries=max_retries,
            base_delay=base_delay,
            max_delay=max_delay,
        )
        self._sleep = sleep
        self._clock = clock

    @classmethod
    def from_config(cls, config: RetryConfig, **kwargs) -> "RetryExecutor":
        return cls(config.max_retries, config.base_delay, config.max_delay, **kwargs)

    @classmethod
    def for_connection(cls, **kwargs) -> "RetryExecutor":
        """Preset for connection-level operations."""
        return cls(max_retries=3, base_delay=0.5, max_delay=10.0, **kwargs)

    @classmethod
    def for_query(cls, **kwargs) -> "RetryExecutor":
        """Preset for query operations."""
        return cls(max_retries=2, base_delay=1.0, max_delay=30.0, **kwargs)

    @property
    def max_retries(self) -> int:
        return self._config.max_retries

    @property
    def base_delay(self) -> float:
        return self._config.base_delay

    @property
    def max_delay(self) -> float:
        return self._config.max_delay

    def calculate_delay(self, attempt: int) -> float:
        """
        Delay before a retry.

        Args:
            attempt: Retry number, 1-based (1 = first retry)

        Returns:
            Delay in seconds
        """
        if attempt < 1:
            raise ValueError(f"attempt must be >= 1, got {attempt}")
        # float exponent capped below the float range
        delay = self.base_delay * 2.0 ** min(attempt - 1, 1023)
        return min(delay, self.max_delay)

    def should_retry(self, error: BaseException) -> bool:
        return is_retriable(error)

    def execute(
        self,
        operation: Callable[[], T],
        description: str = "operation",
        cancel_event: Optional[threading.Event] = None,
    ) -> T:
        """
        Run an operation, retrying transient failures.

        Args:
            operation: Zero-argument callable to run
            description: Human-readable name used in errors and logs
            cancel_event: Optional event checked before each backoff sleep

        Returns:
            The operation's result

        Raises:
            RetryExhaustedError: Every attempt failed with a retriable error
            OperationCancelledError: cancel_event was set before a retry
            Exception: Any non-retriable error, unchanged
        """
        attempts: List[AttemptRecord] = []
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            if attempt > 0:
                if cancel_event is not None and cancel_event.is_set():
                    logger.info(f"'{description}' cancelled after {attempt} attempts")
                    raise OperationCancelledError(description, attempts, last_error) from last_error
                self._sleep(self.calculate_delay(attempt))

            try:
                result = operation()
            except Exception as e:
                last_error = e
                kind = classify_error(e)

                if not RETRY_ELIGIBILITY[kind]:
                    logger.debug(
                        f"'{description}' failed with non-retriable {type(e).__name__}: {e}"
                    )
                    raise

                has_next = attempt < self.max_retries
                record = AttemptRecord(
                    number=attempt + 1,
                    error=str(e),
                    error_type=type(e).__name__,
                    kind=kind,
                    timestamp=self._clock(),
                    delay_before_next=self.calculate_delay(attempt + 1) if has_next else None,
                )
                attempts.append(record)

                if has_next:
                    logger.warning(
                        f"'{description}' attempt {record.number} failed ({kind.value}): {e}; "
                        f"retrying in {record.delay_before_next:.2f}s"
                    )
            else:
                if attempts:
                    logger.info(
                        f"'{description}' succeeded after {len(attempts) + 1} attempts"
                    )
                return result

        logger.error(
            f"'{description}' failed after {len(attempts)} attempts: {attempts[-1].error}"
        )
        raise RetryExhaustedError(
            description,
            len(attempts),
            attempts,
            attempts[-1].error,
            last_error,
        ) from last_error

