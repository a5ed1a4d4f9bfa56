"""
Abstract base class for connections to the store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class Connection(ABC):
    """
    Abstract base class for connections.

    All connection implementations must provide JSON request methods and
    raise the vectorclient transport errors:
    - ConnectionFailureError when the store cannot be reached
    - RequestTimeoutError when a request times out
    - NotFoundError / InsufficientPermissionsError / UnexpectedStatusError
      for error status codes
    """

    @abstractmethod
    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Make a GET request.

        Args:
            path: API path, e.g. ``/v1/objects``
            params: Query string parameters

        Returns:
            Decoded JSON body
        """
        pass

    @abstractmethod
    def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a POST request with a JSON body."""
        pass

    @abstractmethod
    def put(self, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a PUT request with a JSON body."""
        pass

    @abstractmethod
    def patch(self, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a PATCH request with a JSON body."""
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Make a DELETE request; True on a 2xx response."""
        pass

    @abstractmethod
    def head(self, path: str) -> bool:
        """Make a HEAD request; True on 2xx, False on 404."""
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
