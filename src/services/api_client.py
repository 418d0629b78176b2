# src/services/api_client.py

import logging
import time
from typing import Any, Dict, Optional

import requests

from core.errors import DataSourceError

logger = logging.getLogger(__name__)


class FlightApiClient:
    """
    Minimal REST client for the flight analysis backend.

    Transient failures (connection errors, timeouts, 429/5xx) are retried with
    exponential backoff, up to `max_retries` attempts in total. Anything still
    failing after that is raised as DataSourceError.
    """

    RETRY_STATUSES = {429, 500, 502, 503, 504}

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 20,
        max_retries: int = 3,
        backoff_seconds: float = 0.5,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(1, int(max_retries))
        self.backoff_seconds = backoff_seconds
        self.session = session or requests.Session()

    def _sleep_before_retry(self, attempt: int) -> None:
        time.sleep((2 ** attempt) * self.backoff_seconds)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"

        for attempt in range(self.max_retries):
            last_attempt = attempt == self.max_retries - 1
            try:
                resp = self.session.request(
                    method, url, params=params, json=json, timeout=self.timeout_seconds)
            except (requests.ConnectionError, requests.Timeout) as e:
                if not last_attempt:
                    logger.warning("Transport error on %s %s (attempt %d/%d): %s",
                                   method, url, attempt + 1, self.max_retries, e)
                    self._sleep_before_retry(attempt)
                    continue
                logger.error("Giving up on %s %s: %s", method, url, e)
                raise DataSourceError(f"{method} {url} failed: {e}") from e

            if resp.status_code in self.RETRY_STATUSES and not last_attempt:
                logger.warning("HTTP %s on %s %s (attempt %d/%d)",
                               resp.status_code, method, url, attempt + 1, self.max_retries)
                self._sleep_before_retry(attempt)
                continue

            if resp.status_code >= 400:
                logger.error("HTTP %s on %s %s: %s",
                             resp.status_code, method, url, resp.text[:200])
                raise DataSourceError(f"{method} {url} returned HTTP {resp.status_code}")

            try:
                return resp.json()
            except ValueError as e:
                raise DataSourceError(f"{method} {url} returned invalid JSON") from e

        # Unreachable: the last attempt either returns or raises
        raise DataSourceError(f"{method} {url} failed")

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, body: Dict[str, Any]) -> Any:
        return self._request("POST", path, json=body)
