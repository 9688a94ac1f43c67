"""
Shared JSON-over-HTTP client for third-party audio services.

Retry policy:
- 4xx responses are raised immediately (the request itself is wrong).
- Timeouts are raised immediately as ApiTimeoutError.
- 5xx responses and connection failures are retried with exponential
  backoff, at most `max_retries` extra attempts.
"""
import logging
import time
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger("sampleflow.services.http")


class ApiError(Exception):
    """Raised when a collaborator answers with a non-2xx status."""

    def __init__(self, message: str, status: int = 0, data: Any = None):
        self.message = message
        self.status = status
        self.data = data
        super().__init__(message)

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status < 500


class ApiTimeoutError(ApiError):
    """Raised when a request exceeds the configured timeout."""

    def __init__(self, message: str):
        super().__init__(message, status=0)


class ApiClient:
    def __init__(
        self,
        base_url: str,
        default_headers: Optional[Dict[str, str]] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        backoff_base: float = 1.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.default_headers = dict(default_headers or {})
        self.timeout = timeout
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        endpoint: str,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ) -> Any:
        url = f"{self.base_url}{endpoint}"
        merged_headers = {**self.default_headers, **(headers or {})}
        if json is not None and "Content-Type" not in merged_headers:
            merged_headers["Content-Type"] = "application/json"
        timeout = timeout if timeout is not None else self.timeout
        max_retries = max_retries if max_retries is not None else self.max_retries

        attempt = 0
        while True:
            try:
                response = self.session.request(
                    method,
                    url,
                    json=json,
                    headers=merged_headers,
                    timeout=timeout,
                )
                return self._parse_response(response)

            except requests.exceptions.Timeout as e:
                raise ApiTimeoutError(f"Request timed out after {timeout}s") from e

            except ApiError as e:
                if e.is_client_error or attempt >= max_retries:
                    raise
                last_error = e

            except requests.exceptions.RequestException as e:
                if attempt >= max_retries:
                    raise ApiError(f"Request to {endpoint} failed: {e}") from e
                last_error = e

            delay = self.backoff_base * (2 ** attempt)
            attempt += 1
            logger.warning(
                f"{method} {endpoint} failed ({last_error}), "
                f"retrying in {delay}s (attempt {attempt}/{max_retries})"
            )
            time.sleep(delay)

    def get(self, endpoint: str, **kwargs) -> Any:
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, json: Any = None, **kwargs) -> Any:
        return self.request("POST", endpoint, json=json, **kwargs)

    @staticmethod
    def _parse_response(response: requests.Response) -> Any:
        if not response.ok:
            try:
                data = response.json()
            except ValueError:
                data = None
            raise ApiError(
                f"API request failed with status {response.status_code}",
                status=response.status_code,
                data=data,
            )

        if response.status_code == 204:
            return {}

        content_type = response.headers.get("Content-Type", "")
        if "application/json" in content_type:
            return response.json()
        return response.text
