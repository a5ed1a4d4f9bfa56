"""
Filter expression trees for vectorclient queries.

A filter is an immutable tree of leaf conditions and boolean combinators.
Each node serializes to the structured ``where`` argument understood by the
store's GraphQL API.

Node variants:
- Comparison: property compared to a literal (Equal, GreaterThan, Like, ...)
- NullCheck: property is (or is not) null
- Conjunction: And / Or over an ordered sequence of filters

Example:
    >>> # Simple filter
    >>> f = Filter.by_property("status").equal("active")
    >>>
    >>> # Combined filters
    >>> f = Filter.all_of([
    ...     Filter.by_property("status").equal("active"),
    ...     Filter.by_property("age").greater_than(18),
    ... ])
    >>>
    >>> # Operator shorthand
    >>> f = Filter.by_property("price").lt(50) | Filter.by_property("onSale").equal(True)
    >>>
    >>> # From a criteria mapping
    >>> f = Filter.from_criteria({"status": "active", "owner": None})
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..core.exceptions import ValidationError
from ..utils.validation import validate_property_name, validate_scalar


class FilterOperator(str, Enum):
    """Filter comparison operators."""

    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"
    LIKE = "like"               # wildcard match (* and ?)
    IS_NULL = "is_null"
    CONTAINS_ANY = "contains_any"   # array shares a value with the list


class ConjunctionKind(str, Enum):
    """Boolean combinators."""

    AND = "and"
    OR = "or"


# Operator -> GraphQL operator name
WIRE_OPERATORS: Dict[FilterOperator, str] = {
    FilterOperator.EQUAL: "Equal",
    FilterOperator.NOT_EQUAL: "NotEqual",
    FilterOperator.GREATER_THAN: "GreaterThan",
    FilterOperator.GREATER_THAN_OR_EQUAL: "GreaterThanEqual",
    FilterOperator.LESS_THAN: "LessThan",
    FilterOperator.LESS_THAN_OR_EQUAL: "LessThanEqual",
    FilterOperator.LIKE: "Like",
    FilterOperator.IS_NULL: "IsNull",
    FilterOperator.CONTAINS_ANY: "ContainsAny",
}

WIRE_CONJUNCTIONS: Dict[ConjunctionKind, str] = {
    ConjunctionKind.AND: "And",
    ConjunctionKind.OR: "Or",
}


def value_key(value: Any) -> str:
    """
    Return the type-tagged key carrying a literal in a ``where`` leaf.

    bool is checked before int since bool is an int subclass.
    """
    if isinstance(value, bool):
        return "valueBoolean"
    if isinstance(value, int):
        return "valueInt"
    if isinstance(value, float):
        return "valueNumber"
    if isinstance(value, datetime):
        return "valueDate"
    return "valueText"


def _wire_value(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, tuple):
        return [_wire_value(v) for v in value]
    return value


class Filter:
    """
    Base class for all filter nodes.

    The set of node types is closed: Comparison, NullCheck and Conjunction.
    Each node validates itself on construction, so the class-level
    constructors and direct instantiation produce equally valid trees.
    """

    __slots__ = ()

    @staticmethod
    def by_property(name: str) -> "PropertyFilterBuilder":
        """Start a condition on the named property."""
        return PropertyFilterBuilder(name)

    @staticmethod
    def by_id() -> "IdFilterBuilder":
        """Start a condition on the object identifier."""
        return IdFilterBuilder()

    @staticmethod
    def all_of(filters: Iterable["Filter"]) -> "Conjunction":
        """Match objects for which every filter matches."""
        return Conjunction(filters, ConjunctionKind.AND)

    @staticmethod
    def any_of(filters: Iterable["Filter"]) -> "Conjunction":
        """Match objects for which at least one filter matches."""
        return Conjunction(filters, ConjunctionKind.OR)

    @staticmethod
    def from_criteria(criteria: Mapping[str, Any]) -> Optional["Filter"]:
        """Create a filter from a ``property -> value`` mapping."""
        return criteria_to_filter(criteria)

    def to_dict(self) -> Dict[str, Any]:
        """Convert filter to the structured ``where`` representation."""
        raise NotImplementedError

    def __and__(self, other: "Filter") -> "Conjunction":
        """Combine filters with AND."""
        return Filter.all_of([self, other])

    def __or__(self, other: "Filter") -> "Conjunction":
        """Combine filters with OR."""
        return Filter.any_of([self, other])


@dataclass(frozen=True)
class Comparison(Filter):
    """
    Compare a property against a literal value.

    CONTAINS_ANY takes a non-empty list of same-typed values, stored as a
    tuple; LIKE takes a string pattern; every other operator a scalar.
    """

    property: str
    operator: FilterOperator
    value: Any

    def __post_init__(self):
        validate_property_name(self.property)
        try:
            operator = FilterOperator(self.operator)
        except ValueError as e:
            raise ValidationError(f"Unknown filter operator: {self.operator!r}") from e
        if operator is FilterOperator.IS_NULL:
            raise ValidationError("Use NullCheck (or is_null()) for null checks")
        object.__setattr__(self, "operator", operator)

        if operator is FilterOperator.CONTAINS_ANY:
            object.__setattr__(self, "value", _list_value(self.value))
        elif operator is FilterOperator.LIKE and not isinstance(self.value, str):
            raise ValidationError(
                f"like() pattern must be a string, got {type(self.value).__name__}"
            )
        else:
            validate_scalar(self.value, f"value for '{self.property}'")

    def to_dict(self) -> Dict[str, Any]:
        sample = self.value[0] if isinstance(self.value, tuple) else self.value
        return {
            "path": [self.property],
            "operator": WIRE_OPERATORS[self.operator],
            value_key(sample): _wire_value(self.value),
        }

    def __repr__(self) -> str:
        return f"Comparison({self.property} {self.operator.value} {self.value!r})"


@dataclass(frozen=True)
class NullCheck(Filter):
    """Match objects whose property is (or is not) null."""

    property: str
    is_null: bool = True

    def __post_init__(self):
        validate_property_name(self.property)
        if not isinstance(self.is_null, bool):
            raise ValidationError("is_null() expects a boolean")

    @property
    def operator(self) -> FilterOperator:
        return FilterOperator.IS_NULL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": [self.property],
            "operator": WIRE_OPERATORS[FilterOperator.IS_NULL],
            "valueBoolean": self.is_null,
        }

    def __repr__(self) -> str:
        return f"NullCheck({self.property} is_null={self.is_null})"


@dataclass(frozen=True)
class Conjunction(Filter):
    """And / Or over an ordered, non-empty tuple of filters."""

    operands: Tuple[Filter, ...]
    kind: ConjunctionKind = ConjunctionKind.AND

    def __post_init__(self):
        try:
            kind = ConjunctionKind(self.kind)
        except ValueError as e:
            raise ValidationError(f"Unknown conjunction: {self.kind!r}") from e
        object.__setattr__(self, "kind", kind)
        name = "all_of" if kind is ConjunctionKind.AND else "any_of"
        object.__setattr__(self, "operands", _operands(self.operands, name))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operator": WIRE_CONJUNCTIONS[self.kind],
            "operands": [f.to_dict() for f in self.operands],
        }

    def __repr__(self) -> str:
        return f"Conjunction({self.kind.value}, {list(self.operands)})"


def _operands(filters: Iterable[Filter], name: str) -> Tuple[Filter, ...]:
    if filters is None or isinstance(filters, Filter):
        raise ValidationError(f"{name}() expects a sequence of filters")

    operands = tuple(filters)
    if not operands:
        raise ValidationError(f"{name}() requires at least one filter")

    for operand in operands:
        if not isinstance(operand, Filter):
            raise ValidationError(
                f"{name}() operands must be filters, got {type(operand).__name__}"
            )

    return operands


def _list_value(values: Iterable[Any]) -> Tuple[Any, ...]:
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple, set, frozenset)):
        raise ValidationError("contains_any() expects a list of values")

    if isinstance(values, (set, frozenset)):
        values = sorted(values, key=lambda v: (type(v).__name__, v))
    items = tuple(values)
    if not items:
        raise ValidationError("contains_any() requires at least one value")

    for item in items:
        validate_scalar(item, "contains_any value")

    keys = {value_key(item) for item in items}
    if len(keys) > 1:
        raise ValidationError(
            f"contains_any() values must share one type, got {sorted(keys)}"
        )

    return items


class PropertyFilterBuilder:
    """
    Builder for a single property condition.

    Every terminal method returns a new, immutable filter node.
    """

    def __init__(self, name: str):
        self._property = validate_property_name(name)

    @property
    def property_name(self) -> str:
        return self._property

    def _compare(self, operator: FilterOperator, value: Any) -> Comparison:
        return Comparison(self._property, operator, value)

    def equal(self, value: Any) -> Comparison:
        """Property equals value."""
        return self._compare(FilterOperator.EQUAL, value)

    def eq(self, value: Any) -> Comparison:
        """Alias for equal."""
        return self.equal(value)

    def not_equal(self, value: Any) -> Comparison:
        """Property does not equal value."""
        return self._compare(FilterOperator.NOT_EQUAL, value)

    def ne(self, value: Any) -> Comparison:
        """Alias for not_equal."""
        return self.not_equal(value)

    def greater_than(self, value: Any) -> Comparison:
        """Property greater than value."""
        return self._compare(FilterOperator.GREATER_THAN, value)

    def gt(self, value: Any) -> Comparison:
        """Alias for greater_than."""
        return self.greater_than(value)

    def greater_than_or_equal(self, value: Any) -> Comparison:
        """Property greater than or equal to value."""
        return self._compare(FilterOperator.GREATER_THAN_OR_EQUAL, value)

    def gte(self, value: Any) -> Comparison:
        """Alias for greater_than_or_equal."""
        return self.greater_than_or_equal(value)

    def less_than(self, value: Any) -> Comparison:
        """Property less than value."""
        return self._compare(FilterOperator.LESS_THAN, value)

    def lt(self, value: Any) -> Comparison:
        """Alias for less_than."""
        return self.less_than(value)

    def less_than_or_equal(self, value: Any) -> Comparison:
        """Property less than or equal to value."""
        return self._compare(FilterOperator.LESS_THAN_OR_EQUAL, value)

    def lte(self, value: Any) -> Comparison:
        """Alias for less_than_or_equal."""
        return self.less_than_or_equal(value)

    def like(self, pattern: str) -> Comparison:
        """
        Property matches a wildcard pattern.

        ``*`` matches any run of characters, ``?`` exactly one.
        """
        return Comparison(self._property, FilterOperator.LIKE, pattern)

    def is_null(self, is_null: bool = True) -> NullCheck:
        """Property is null (or, with False, is not null)."""
        return NullCheck(self._property, is_null)

    def contains_any(self, values: Iterable[Any]) -> Comparison:
        """Array property contains at least one of the values."""
        return Comparison(self._property, FilterOperator.CONTAINS_ANY, values)


class IdFilterBuilder:
    """Builder for conditions on the object identifier."""

    PATH = "id"

    @staticmethod
    def _check(object_id: Any) -> str:
        if not isinstance(object_id, str) or not object_id:
            raise ValidationError("Object id must be a non-empty string")
        return object_id

    def equal(self, object_id: str) -> Comparison:
        return Comparison(self.PATH, FilterOperator.EQUAL, self._check(object_id))

    def not_equal(self, object_id: str) -> Comparison:
        return Comparison(self.PATH, FilterOperator.NOT_EQUAL, self._check(object_id))

    def contains_any(self, object_ids: Iterable[str]) -> Comparison:
        ids = _list_value(object_ids)
        for object_id in ids:
            self._check(object_id)
        return Comparison(self.PATH, FilterOperator.CONTAINS_ANY, ids)


def criteria_to_filter(criteria: Mapping[str, Any]) -> Optional[Filter]:
    """
    Compile a ``property -> value`` mapping into a filter.

    None values become null checks, other values equality comparisons.
    A single criterion yields its leaf, several an AND in mapping order,
    and an empty mapping no filter at all.

    Args:
        criteria: Mapping of property names to expected values

    Returns:
        The compiled filter, or None for an empty mapping
    """
    if criteria is None:
        return None

    if not isinstance(criteria, Mapping):
        raise ValidationError(
            f"Criteria must be a mapping, got {type(criteria).__name__}"
        )

    conditions: List[Filter] = []
    for name, value in criteria.items():
        builder = Filter.by_property(name)
        if value is None:
            conditions.append(builder.is_null(True))
        else:
            conditions.append(builder.equal(value))

    if not conditions:
        return None

    if len(conditions) == 1:
        return conditions[0]

    return Filter.all_of(conditions)
