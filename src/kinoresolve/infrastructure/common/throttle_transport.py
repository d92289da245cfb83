"""httpx transport with browser identification and a fixed post-request delay."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

import httpx
import structlog

log = structlog.get_logger(__name__)


class ThrottleTransport(httpx.BaseTransport):
    """Wraps an httpx transport with spoofed headers and a fixed cool-down.

    **Headers:** every request carries a desktop ``User-Agent`` and
    ``Accept-Language``; the upstream blocks default client identification
    and localizes by IP otherwise.

    **Throttle:** after each completed request the transport sleeps
    *delay_seconds* before it can be used again.  A lock covers the request
    and the delay, so callers sharing one transport are serialized.

    There is no retry: a failed request is reported to the caller as-is.
    """

    def __init__(
        self,
        wrapped: httpx.BaseTransport,
        *,
        user_agent: str,
        accept_language: str = "en",
        delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._wrapped = wrapped
        self._user_agent = user_agent
        self._accept_language = accept_language
        self._delay = delay_seconds
        self._sleep = sleep
        self._lock = threading.Lock()

    @property
    def delay_seconds(self) -> float:
        return self._delay

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Send *request* through the wrapped transport, then cool down."""
        request.headers["User-Agent"] = self._user_agent
        request.headers["Accept-Language"] = self._accept_language

        with self._lock:
            try:
                return self._wrapped.handle_request(request)
            finally:
                if self._delay > 0:
                    log.debug("http_throttle", url=str(request.url), delay=self._delay)
                    self._sleep(self._delay)

    def close(self) -> None:
        """Close the wrapped transport."""
        self._wrapped.close()
