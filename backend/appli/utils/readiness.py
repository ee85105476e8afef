"""Readiness probe for a freshly started HTTP server."""

from __future__ import annotations

import logging
import time
from typing import Optional

import requests
from requests.exceptions import RequestException

_LOGGER = logging.getLogger("appli.readiness")


class ReadinessTimeoutError(TimeoutError):
    """Raised when an endpoint never answered with a success status."""

    def __init__(self, url: str, timeout_ms: int, attempts: int, last_error: str = ""):
        self.url = url
        self.timeout_ms = timeout_ms
        self.attempts = attempts
        self.last_error = last_error
        msg = f"{url} not ready after {timeout_ms} ms ({attempts} attempts)"
        if last_error:
            msg += f"; last error: {last_error}"
        super().__init__(msg)


def check_until_ok(
    url: str,
    timeout_ms: int,
    interval_ms: int,
    session: Optional[requests.Session] = None,
) -> requests.Response:
    """Poll `url` until it answers 2xx or `timeout_ms` elapses.

    Requests run one after another on the calling thread, `interval_ms`
    apart. Connection errors and non-2xx statuses both mean "not ready
    yet". The wait never extends past the overall deadline; on expiry a
    `ReadinessTimeoutError` is raised.
    """
    if timeout_ms <= 0 or interval_ms <= 0:
        raise ValueError("timeout_ms and interval_ms must be positive")
    http = session or requests.Session()
    deadline = time.monotonic() + timeout_ms / 1000.0
    attempts = 0
    last_error = ""
    try:
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            attempts += 1
            try:
                resp = http.get(url, timeout=remaining, allow_redirects=True)
                if 200 <= resp.status_code < 300:
                    _LOGGER.info("%s ready after %d attempt(s)", url, attempts)
                    return resp
                last_error = f"status {resp.status_code}"
            except RequestException as exc:
                last_error = str(exc)
            _LOGGER.debug("%s not ready (attempt %d): %s", url, attempts, last_error)
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            time.sleep(min(interval_ms / 1000.0, remaining))
    finally:
        if session is None:
            http.close()
    _LOGGER.info("%s not ready after %d ms", url, timeout_ms)
    raise ReadinessTimeoutError(url, timeout_ms, attempts, last_error)
