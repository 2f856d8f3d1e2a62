"""HTTP client for DataTables-style server endpoints.

Implements the ``get(url)`` / ``post(url, body)`` contract expected by
``QueryProvider`` on top of a reusable ``requests`` session, with retry and
backoff for transient failures.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Any, Mapping

import requests

from ItemsProvider.utils.log import log

DEFAULT_TIMEOUT = 30.0
MAX_ATTEMPTS = 3
BASE_PAUSE = 0.8
MAX_SLEEP = 8.0
RETRYABLE_STATUS = {429, 500, 502, 503, 504}

HEADERS = {
    "User-Agent": "items-provider/0.1",
    "Accept": "application/json",
}


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Decoded server response.

    Attributes:
        status_code: HTTP status code.
        data: Decoded JSON payload.
        url: Final request URL.
    """

    status_code: int
    data: Any
    url: str


class DataTablesApiClient:
    """Low-level HTTP client returning decoded JSON responses."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = MAX_ATTEMPTS,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the client with a reusable HTTP session.

        Args:
            timeout: Request timeout in seconds.
            max_attempts: Attempts per request, including the first one.
            headers: Extra headers merged over the defaults.
        """
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.headers = {**HEADERS, **dict(headers or {})}
        self._session = requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session and release pooled connections."""
        self._session.close()

    def __enter__(self) -> DataTablesApiClient:
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager and close session."""
        self.close()

    def get(self, url: str) -> ApiResponse:
        """Issue a GET request to a fully built URL.

        Raises:
            requests.RequestException: When the request fails after retries.
            ValueError: When the body is not valid JSON.
        """
        return self._request("GET", url)

    def post(self, url: str, body: Mapping[str, Any]) -> ApiResponse:
        """Issue a POST request with ``body`` sent as JSON.

        Raises:
            requests.RequestException: When the request fails after retries.
            ValueError: When the body is not valid JSON.
        """
        return self._request("POST", url, json=body)

    def _request(self, method: str, url: str, **kwargs: Any) -> ApiResponse:
        """Send one request and decode the JSON body."""
        log.debug("HTTP %s %s", method, url)
        response = self._send_with_retry(method, url, **kwargs)
        response.raise_for_status()
        payload = response.json()
        log.debug("HTTP response ok: status=%s bytes=%s", response.status_code, len(response.content))
        return ApiResponse(status_code=response.status_code, data=payload, url=response.url)

    def _send_with_retry(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send a request with retries for transient failures."""
        last_error: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                response = self._session.request(
                    method,
                    url,
                    headers=self.headers,
                    timeout=self.timeout,
                    **kwargs,
                )
                if response.status_code in RETRYABLE_STATUS:
                    raise requests.HTTPError(
                        f"HTTP {response.status_code}",
                        response=response,
                    )
                return response
            except (requests.Timeout, requests.ConnectionError, requests.HTTPError) as error:
                last_error = error
                if isinstance(error, requests.HTTPError):
                    status_code = getattr(error.response, "status_code", None)
                    if status_code not in RETRYABLE_STATUS:
                        raise
                if attempt < self.max_attempts:
                    delay = min(BASE_PAUSE * (2 ** (attempt - 1)) + random.uniform(0, 0.3), MAX_SLEEP)
                    log.debug("HTTP retry attempt=%d/%d delay=%.2fs error=%s", attempt, self.max_attempts, delay, error)
                    time.sleep(delay)

        assert last_error is not None
        raise last_error
