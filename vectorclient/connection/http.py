"""
HTTP connection built on requests.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import requests

from .base import Connection
from ..core.exceptions import (
    ConnectionFailureError,
    InsufficientPermissionsError,
    NotFoundError,
    ParseError,
    RequestTimeoutError,
    TransportError,
    UnexpectedStatusError,
)
from ..retry.executor import RetryExecutor
from ..utils.logging import get_logger


logger = get_logger(__name__)


class HttpConnection(Connection):
    """
    JSON-over-HTTP connection to the store.

    Example:
        >>> conn = HttpConnection("http://localhost:8080", api_key="secret")
        >>> conn.get("/v1/meta")
        >>>
        >>> # Retry transient failures on every request
        >>> conn = HttpConnection(
        ...     "http://localhost:8080",
        ...     retry_executor=RetryExecutor.for_connection(),
        ... )
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        retry_executor: Optional[RetryExecutor] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the connection.

        Args:
            base_url: Store URL, e.g. ``http://localhost:8080``
            api_key: Sent as a bearer token when given
            timeout: Per-request timeout in seconds
            headers: Extra headers added to every request
            retry_executor: Wraps each request when given
            session: Session to use (a new one is created otherwise)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_executor = retry_executor
        self.headers: Dict[str, str] = {"Accept": "application/json"}
        self.headers.update(headers or {})

        if api_key:
            self.headers["Authorization"] = f"Bearer {api_key}"

        self._session = session or requests.Session()
        self._owns_session = session is None

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _run(self, method: str, path: str, request: Callable[[], Any]) -> Any:
        if self.retry_executor is not None:
            return self.retry_executor.execute(request, description=f"{method} {path}")
        return request()

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> requests.Response:
        url = self._url(path)
        logger.debug(f"{method} {url}")

        try:
            return self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self.headers,
                timeout=self.timeout,
            )
        # Timeout first: ConnectTimeout is also a ConnectionError
        except requests.Timeout as e:
            raise RequestTimeoutError(
                f"{method} {path} timed out after {self.timeout}s",
                timeout=self.timeout,
                context={"url": url},
            ) from e
        except requests.ConnectionError as e:
            raise ConnectionFailureError(
                f"Failed to connect to {url}: {e}",
                url=url,
            ) from e
        # body cut off mid-transfer
        except requests.exceptions.ChunkedEncodingError as e:
            raise ConnectionFailureError(
                f"Connection to {url} dropped while reading the response: {e}",
                url=url,
            ) from e
        except requests.RequestException as e:
            raise TransportError(
                f"{method} {path} failed: {e}",
                context={"url": url, "error_type": type(e).__name__},
            ) from e

    def _raise_for_status(self, response: requests.Response, method: str, path: str) -> None:
        status = response.status_code
        if status < 400:
            return

        context = {"operation": f"{method} {path}", "url": self._url(path)}
        text = response.text

        if status == 403:
            raise InsufficientPermissionsError(response_text=text, context=context)
        if status == 404:
            raise NotFoundError(response_text=text, context=context)
        raise UnexpectedStatusError(
            f"HTTP request failed with status {status}",
            status,
            response_text=text,
            context=context,
        )

    @staticmethod
    def _decode(response: requests.Response, method: str, path: str) -> Dict[str, Any]:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(
                f"{method} {path} returned a non-JSON body",
                context={"body": response.text[:200]},
            ) from e

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Dict[str, Any]:
        def request() -> Dict[str, Any]:
            response = self._send(method, path, params=params, json=json)
            self._raise_for_status(response, method, path)
            return self._decode(response, method, path)

        return self._run(method, path, request)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._request("GET", path, params=params)

    def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._request("POST", path, json=data)

    def put(self, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._request("PUT", path, json=data)

    def patch(self, path: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._request("PATCH", path, json=data)

    def delete(self, path: str) -> bool:
        def request() -> bool:
            response = self._send("DELETE", path)
            self._raise_for_status(response, "DELETE", path)
            return 200 <= response.status_code < 300

        return self._run("DELETE", path, request)

    def head(self, path: str) -> bool:
        def request() -> bool:
            response = self._send("HEAD", path)
            if response.status_code == 404:
                return False
            self._raise_for_status(response, "HEAD", path)
            return 200 <= response.status_code < 300

        return self._run("HEAD", path, request)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
