"""
GraphQL query compilation for vectorclient.

Turns a query configuration (collection, tenant, selected properties,
filter, limit) into one GraphQL ``Get`` request and unwraps the response
envelope into plain object records.

Example:
    >>> query = (
    ...     QueryCompiler(connection, "Article")
    ...     .where(Filter.by_property("status").equal("published"))
    ...     .return_properties(["title", "publishedAt"])
    ...     .limit(10)
    ... )
    >>> query.compile().text
    '{ Get { Article(where: {path: ["status"], operator: Equal, valueText: "published"}, limit: 10) { title publishedAt _additional { id } } } }'
    >>> objects = query.fetch_objects()
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
import json
import re

from .filters import Filter
from ..connection.base import Connection
from ..core.exceptions import ParseError, QueryError, ValidationError
from ..utils.logging import get_logger
from ..utils.validation import validate_collection_name, validate_limit, validate_tenant


logger = get_logger(__name__)

GRAPHQL_PATH = "/v1/graphql"

# Metadata selection always added to the field list
METADATA_KEY = "_additional"
ID_FIELD = "_additional { id }"
ID_FIELD_PATTERN = re.compile(r"_additional\s*\{\s*id\s*\}")

# Keys whose string values are GraphQL enum names, emitted unquoted
ENUM_KEYS = frozenset({"operator"})


class EmptySelection(str, Enum):
    """What to do when neither properties nor default fields are set."""

    ID_ONLY = "id_only"     # select only the identifier
    RAISE = "raise"         # raise ValidationError


@dataclass(frozen=True)
class CompiledQuery:
    """A compiled GraphQL request."""

    collection: str
    text: str
    fields: List[str]
    where: Optional[Dict[str, Any]] = None

    @property
    def payload(self) -> Dict[str, Any]:
        """JSON body for the GraphQL endpoint."""
        return {"query": self.text}


def to_graphql(value: Any, key: Optional[str] = None) -> str:
    """
    Encode a value as a GraphQL input literal.

    Object keys are bare names, strings are JSON-escaped, enum-valued keys
    (``operator``) are bare, lists are bracketed.
    """
    if isinstance(value, Mapping):
        parts = [f"{k}: {to_graphql(v, k)}" for k, v in value.items()]
        return "{" + ", ".join(parts) + "}"

    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_graphql(v) for v in value) + "]"

    if isinstance(value, bool):
        return "true" if value else "false"

    if value is None:
        return "null"

    if isinstance(value, str):
        if key in ENUM_KEYS:
            return value
        return json.dumps(value, ensure_ascii=False)

    if isinstance(value, (int, float)):
        return json.dumps(value)

    raise ValidationError(f"Cannot encode {type(value).__name__} as a GraphQL literal")


def _split_fields(fields: Union[str, Iterable[str], None]) -> List[str]:
    if fields is None:
        return []
    if isinstance(fields, str):
        # keep the identifier block from being split into tokens
        return ID_FIELD_PATTERN.sub(" ", fields).split()
    if isinstance(fields, (set, frozenset)):
        return sorted(fields)
    return [f for f in fields]


class QueryCompiler:
    """
    Fluent builder and executor for ``Get`` queries on one collection.

    Field selection: explicitly requested properties, else the collection's
    default fields, else the identifier only. ``_additional { id }`` is always
    selected so every record carries an ``id`` key.
    """

    def __init__(
        self,
        connection: Optional[Connection],
        collection: str,
        tenant: Optional[str] = None,
        default_fields: Union[str, Iterable[str], None] = None,
        empty_selection: EmptySelection = EmptySelection.ID_ONLY,
    ):
        """
        Initialize the compiler.

        Args:
            connection: Connection used by fetch_objects (may be None when
                only compiling)
            collection: Collection (GraphQL class) name
            tenant: Tenant to scope the query to
            default_fields: Fields used when no properties are requested
            empty_selection: Policy when no fields resolve
        """
        self._connection = connection
        self._collection = validate_collection_name(collection)
        self._tenant = validate_tenant(tenant)
        self._default_fields = _split_fields(default_fields)
        self._empty_selection = EmptySelection(empty_selection)
        self._properties: List[str] = []
        self._filter: Optional[Filter] = None
        self._limit: Optional[int] = None

    @property
    def collection(self) -> str:
        return self._collection

    @property
    def tenant(self) -> Optional[str]:
        return self._tenant

    def where(self, filter: Optional[Filter]) -> "QueryCompiler":
        """Set (or with None, clear) the filter root."""
        if filter is not None and not isinstance(filter, Filter):
            raise ValidationError(f"where() expects a Filter, got {type(filter).__name__}")
        self._filter = filter
        return self

    def limit(self, limit: Optional[int]) -> "QueryCompiler":
        """Set (or with None, clear) the maximum number of objects."""
        self._limit = None if limit is None else validate_limit(limit)
        return self

    def return_properties(self, properties: Iterable[str]) -> "QueryCompiler":
        """Select the properties to return."""
        if isinstance(properties, str):
            raise ValidationError("return_properties() expects a list of names")
        selected = list(properties)
        for name in selected:
            if not isinstance(name, str) or not name.strip():
                raise ValidationError(f"Invalid property selection: {name!r}")
        self._properties = selected
        return self

    def set_default_fields(self, fields: Union[str, Iterable[str], None]) -> "QueryCompiler":
        """Fields to use when no properties are requested."""
        self._default_fields = _split_fields(fields)
        return self

    def resolve_fields(self) -> List[str]:
        """Resolved field list, identifier selection included."""
        fields = self._properties or self._default_fields
        if not fields and self._empty_selection is EmptySelection.RAISE:
            raise ValidationError(
                f"No properties selected for '{self._collection}' and no default fields set"
            )
        return [f for f in fields if not ID_FIELD_PATTERN.fullmatch(f.strip())] + [ID_FIELD]

    def _arguments(self, where: Optional[Dict[str, Any]]) -> str:
        arguments = []
        if where is not None:
            arguments.append(f"where: {to_graphql(where)}")
        if self._limit is not None:
            arguments.append(f"limit: {self._limit}")
        if self._tenant is not None:
            arguments.append(f"tenant: {to_graphql(self._tenant)}")

        if not arguments:
            return ""
        return "(" + ", ".join(arguments) + ")"

    def compile(self) -> CompiledQuery:
        """Compile the configuration into a GraphQL request."""
        fields = self.resolve_fields()
        where = self._filter.to_dict() if self._filter is not None else None

        text = "{ Get { %s%s { %s } } }" % (
            self._collection,
            self._arguments(where),
            " ".join(fields),
        )
        logger.debug(f"Compiled query: {text}")

        return CompiledQuery(
            collection=self._collection,
            text=text,
            fields=fields,
            where=where,
        )

    def fetch_objects(self) -> List[Dict[str, Any]]:
        """
        Run the query and return the matching objects.

        Transport errors from the connection propagate unchanged.

        Raises:
            QueryError: The store reported GraphQL errors
            ParseError: The response envelope is malformed
        """
        if self._connection is None:
            raise ValidationError("fetch_objects() requires a connection")

        compiled = self.compile()
        envelope = self._connection.post(GRAPHQL_PATH, compiled.payload)
        return self.parse_response(envelope)

    def parse_response(self, envelope: Any) -> List[Dict[str, Any]]:
        """
        Unwrap ``data -> Get -> <collection>`` into object records.

        The ``_additional`` block of each record is replaced by its ``id``.
        """
        if not isinstance(envelope, Mapping):
            raise ParseError(
                f"Query response must be an object, got {type(envelope).__name__}",
                segment="<root>",
            )

        errors = envelope.get("errors")
        if errors:
            messages = [
                e.get("message", "Unknown error") if isinstance(e, Mapping) else str(e)
                for e in errors
            ]
            raise QueryError("GraphQL query failed: " + ", ".join(messages), errors)

        node: Any = envelope
        for segment in ("data", "Get"):
            node = node.get(segment)
            if not isinstance(node, Mapping):
                raise ParseError(
                    f"Query response is missing the '{segment}' object",
                    segment=segment,
                )

        if self._collection not in node:
            raise ParseError(
                f"Query response has no results for '{self._collection}'",
                segment=self._collection,
            )

        items = node[self._collection]
        if not isinstance(items, list):
            raise ParseError(
                f"Results for '{self._collection}' must be a list, "
                f"got {type(items).__name__}",
                segment=self._collection,
            )

        return [self._unwrap(item, index) for index, item in enumerate(items)]

    def _unwrap(self, item: Any, index: int) -> Dict[str, Any]:
        if not isinstance(item, Mapping):
            raise ParseError(
                f"Result {index} for '{self._collection}' is not an object",
                segment=f"{self._collection}[{index}]",
            )

        record = dict(item)
        metadata = record.pop(METADATA_KEY, None)
        if isinstance(metadata, Mapping) and "id" in metadata:
            record["id"] = metadata["id"]
        return record

    def __repr__(self) -> str:
        return (
            f"QueryCompiler(collection={self._collection!r}, tenant={self._tenant!r}, "
            f"filter={self._filter!r}, limit={self._limit})"
        )
