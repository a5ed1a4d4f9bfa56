"""
Utility functions for vectorclient.
"""

from .validation import (
    validate_collection_name,
    validate_property_name,
    validate_tenant,
    validate_limit,
    validate_scalar,
)
from .vectors import normalize_vector, to_vector_list
from .logging import setup_logger, get_logger, set_level

__all__ = [
    "validate_collection_name",
    "validate_property_name",
    "validate_tenant",
    "validate_limit",
    "validate_scalar",
    "normalize_vector",
    "to_vector_list",
    "setup_logger",
    "get_logger",
    "set_level",
]
