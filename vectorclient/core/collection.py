"""
Collection handle: entry point for queries and object operations.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .data import DataOperations
from ..connection.base import Connection
from ..query.compiler import EmptySelection, QueryCompiler
from ..query.filters import Filter
from ..utils.validation import validate_collection_name, validate_tenant


class Collection:
    """
    A named collection of objects on the store.

    Collections are cheap, immutable handles; ``with_tenant`` and
    ``with_default_fields`` return new handles.

    Example:
        >>> articles = client.collection("Article").with_tenant("acme")
        >>>
        >>> # Fluent query
        >>> results = (
        ...     articles.query()
        ...     .where(Filter.by_property("status").equal("published"))
        ...     .limit(10)
        ...     .fetch_objects()
        ... )
        >>>
        >>> # Criteria lookup
        >>> drafts = articles.find_by({"status": "draft", "publishedAt": None})
    """

    def __init__(
        self,
        connection: Connection,
        name: str,
        tenant: Optional[str] = None,
        default_fields: Union[str, Iterable[str], None] = None,
        empty_selection: EmptySelection = EmptySelection.ID_ONLY,
    ):
        self._connection = connection
        self._name = validate_collection_name(name)
        self._tenant = validate_tenant(tenant)
        self._default_fields = default_fields
        self._empty_selection = EmptySelection(empty_selection)

    @property
    def name(self) -> str:
        return self._name

    @property
    def tenant(self) -> Optional[str]:
        return self._tenant

    def _copy(self, **overrides: Any) -> "Collection":
        kwargs: Dict[str, Any] = {
            "tenant": self._tenant,
            "default_fields": self._default_fields,
            "empty_selection": self._empty_selection,
        }
        kwargs.update(overrides)
        return Collection(self._connection, self._name, **kwargs)

    def with_tenant(self, tenant: Optional[str]) -> "Collection":
        """Handle scoped to a tenant."""
        return self._copy(tenant=tenant)

    def with_default_fields(self, fields: Union[str, Iterable[str], None]) -> "Collection":
        """Handle whose queries select these fields by default."""
        return self._copy(default_fields=fields)

    def query(self) -> QueryCompiler:
        """Start a new query on this collection."""
        return QueryCompiler(
            self._connection,
            self._name,
            tenant=self._tenant,
            default_fields=self._default_fields,
            empty_selection=self._empty_selection,
        )

    def data(self) -> DataOperations:
        """Object CRUD operations on this collection."""
        return DataOperations(self._connection, self._name, self._tenant)

    def find_by(
        self,
        criteria: Mapping[str, Any],
        limit: Optional[int] = None,
        properties: Optional[Iterable[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch objects matching a ``property -> value`` mapping.

        None values match null properties; several keys are combined with AND.
        """
        query = self.query().where(Filter.from_criteria(criteria)).limit(limit)
        if properties is not None:
            query.return_properties(properties)
        return query.fetch_objects()

    def find_one_by(
        self,
        criteria: Mapping[str, Any],
        properties: Optional[Iterable[str]] = None,
    ) -> Optional[Dict[str, Any]]:
        """First object matching the criteria, or None."""
        results = self.find_by(criteria, limit=1, properties=properties)
        return results[0] if results else None

    def __repr__(self) -> str:
        return f"Collection(name={self._name!r}, tenant={self._tenant!r})"
