"""
VectorStoreClient - main entry point.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Union

from .collection import Collection
from ..config.settings import Settings, load_config
from ..connection.base import Connection
from ..connection.http import HttpConnection
from ..query.compiler import EmptySelection
from ..retry.executor import RetryExecutor
from ..utils.logging import get_logger, set_level


logger = get_logger(__name__)


class VectorStoreClient:
    """
    Client for a remote vector-object store.

    Example:
        >>> with VectorStoreClient.connect("http://localhost:8080") as client:
        ...     articles = client.collection("Article")
        ...     results = articles.find_by({"status": "published"}, limit=5)
        >>>
        >>> # From a YAML configuration file
        >>> client = VectorStoreClient.from_config("./vectorclient.yaml")
    """

    def __init__(
        self,
        connection: Connection,
        empty_selection: EmptySelection = EmptySelection.ID_ONLY,
    ):
        self._connection = connection
        self._empty_selection = EmptySelection(empty_selection)

    @classmethod
    def connect(
        cls,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        retry_executor: Optional[RetryExecutor] = None,
    ) -> "VectorStoreClient":
        """Create a client over HTTP."""
        connection = HttpConnection(
            url,
            api_key=api_key,
            timeout=timeout,
            headers=headers,
            retry_executor=retry_executor,
        )
        logger.info(f"Connected client to {connection.base_url}")
        return cls(connection)

    @classmethod
    def from_settings(cls, settings: Settings) -> "VectorStoreClient":
        """Create a client from loaded settings."""
        set_level(settings.log_level)

        retry_executor = None
        if settings.retry.enabled:
            retry_executor = RetryExecutor.from_config(settings.retry)

        connection = HttpConnection(
            settings.connection.url,
            api_key=settings.connection.api_key,
            timeout=settings.connection.timeout,
            headers=settings.connection.headers,
            retry_executor=retry_executor,
        )
        return cls(connection, empty_selection=settings.query.empty_selection)

    @classmethod
    def from_config(cls, config_path: Optional[str] = None) -> "VectorStoreClient":
        """Create a client from a YAML configuration file."""
        return cls.from_settings(load_config(config_path))

    @property
    def connection(self) -> Connection:
        return self._connection

    def collection(
        self,
        name: str,
        tenant: Optional[str] = None,
        default_fields: Union[str, Iterable[str], None] = None,
    ) -> Collection:
        """Get a handle on a collection."""
        return Collection(
            self._connection,
            name,
            tenant=tenant,
            default_fields=default_fields,
            empty_selection=self._empty_selection,
        )

    def is_ready(self) -> bool:
        """Whether the store reports itself ready."""
        return self._connection.head("/v1/.well-known/ready")

    def close(self) -> None:
        self._connection.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
