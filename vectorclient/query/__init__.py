"""
Query building for vectorclient.

This module provides:
- Immutable filter trees
- Criteria-mapping to filter compilation
- GraphQL query compilation and response unwrapping

Example:
    >>> from vectorclient.query import Filter, QueryCompiler
    >>>
    >>> # Build a filter
    >>> f = Filter.all_of([
    ...     Filter.by_property("category").equal("electronics"),
    ...     Filter.by_property("price").less_than(100),
    ... ])
    >>>
    >>> # Execute query
    >>> objects = QueryCompiler(connection, "Product").where(f).limit(10).fetch_objects()
"""

from .filters import (
    Filter,
    FilterOperator,
    ConjunctionKind,
    Comparison,
    NullCheck,
    Conjunction,
    PropertyFilterBuilder,
    IdFilterBuilder,
    WIRE_OPERATORS,
    criteria_to_filter,
    value_key,
)

from .compiler import (
    QueryCompiler,
    CompiledQuery,
    EmptySelection,
    GRAPHQL_PATH,
    to_graphql,
)

__all__ = [
    # Filters
    "Filter",
    "FilterOperator",
    "ConjunctionKind",
    "Comparison",
    "NullCheck",
    "Conjunction",
    "PropertyFilterBuilder",
    "IdFilterBuilder",
    "WIRE_OPERATORS",
    "criteria_to_filter",
    "value_key",
    # Compiler
    "QueryCompiler",
    "CompiledQuery",
    "EmptySelection",
    "GRAPHQL_PATH",
    "to_graphql",
]
