"""
Input validation utilities.
"""

from datetime import datetime
from typing import Any, Optional
import math
import re

from ..core.exceptions import ValidationError


# GraphQL names: letter or underscore, then letters, digits, underscores
NAME_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')

# Maximum limits
MAX_NAME_LENGTH = 256
MAX_LIMIT = 100000

SCALAR_TYPES = (str, bool, int, float, datetime)


def validate_collection_name(name: str) -> str:
    """
    Validate a collection (GraphQL class) name.

    Args:
        name: The collection name

    Returns:
        The validated name

    Raises:
        ValidationError: If the name is not a valid GraphQL name
    """
    if not isinstance(name, str):
        raise ValidationError(
            f"Collection name must be a string, got {type(name).__name__}"
        )

    if not name:
        raise ValidationError("Collection name cannot be empty")

    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"Collection name too long: {len(name)} characters (max {MAX_NAME_LENGTH})"
        )

    if not NAME_PATTERN.match(name):
        raise ValidationError(
            f"Invalid collection name '{name}': must start with a letter or "
            "underscore and contain only letters, digits or underscores"
        )

    return name


def validate_property_name(name: str) -> str:
    """
    Validate the property name of a filter leaf.

    Raises:
        ValidationError: If name is not a non-empty string
    """
    if not isinstance(name, str):
        raise ValidationError(
            f"Property name must be a string, got {type(name).__name__}"
        )

    if not name.strip():
        raise ValidationError("Property name cannot be empty")

    return name


def validate_tenant(tenant: Optional[str]) -> Optional[str]:
    """Validate an optional tenant name."""
    if tenant is None:
        return None

    if not isinstance(tenant, str) or not tenant:
        raise ValidationError("Tenant must be a non-empty string")

    return tenant


def validate_limit(limit: int, max_limit: int = MAX_LIMIT) -> int:
    """
    Validate a query limit.

    Args:
        limit: Maximum number of objects to return
        max_limit: Largest accepted limit

    Returns:
        The validated limit

    Raises:
        ValidationError: If limit is invalid
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError(f"Limit must be an integer, got {type(limit).__name__}")

    if limit < 1:
        raise ValidationError(f"Limit must be at least 1, got {limit}")

    if limit > max_limit:
        raise ValidationError(f"Limit too large: {limit} (max {max_limit})")

    return limit


def validate_scalar(value: Any, context: str = "value") -> Any:
    """
    Validate a filter literal.

    Accepts str, bool, int, finite float and datetime.

    Raises:
        ValidationError: If the value is None, non-finite or of another type
    """
    if value is None:
        raise ValidationError(
            f"{context} cannot be None; use is_null() to match missing values"
        )

    if not isinstance(value, SCALAR_TYPES):
        raise ValidationError(
            f"Invalid {context} type: {type(value).__name__}. "
            "Allowed types: str, int, float, bool, datetime"
        )

    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"{context} must be finite, got {value}")

    return value
