"""
Connections to the store.
"""

from .base import Connection
from .http import HttpConnection

__all__ = [
    "Connection",
    "HttpConnection",
]
