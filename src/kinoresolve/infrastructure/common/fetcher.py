"""Page fetcher shared by the resolution pipeline, playlist parser and diagnostics."""

from __future__ import annotations

import httpx
import structlog

from kinoresolve.domain.exceptions import FetchError
from kinoresolve.infrastructure.common.throttle_transport import ThrottleTransport
from kinoresolve.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)


def build_http_client(
    config: AppConfig,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create the shared, throttled ``httpx.Client``.

    *transport* replaces the inner network transport (tests pass a mock);
    it is still wrapped by :class:`ThrottleTransport`.
    """
    throttled = ThrottleTransport(
        transport or httpx.HTTPTransport(),
        user_agent=config.http_user_agent,
        accept_language=config.http_accept_language,
        delay_seconds=config.http_throttle_seconds,
    )
    return httpx.Client(
        transport=throttled,
        timeout=config.http_timeout_seconds,
        follow_redirects=True,
    )


class PageFetcher:
    """Plain GET with optional Referer; no retries."""

    def __init__(self, http_client: httpx.Client) -> None:
        self._http = http_client

    def fetch(self, url: str, referer: str | None = None) -> str:
        """Return the body of *url*.

        Raises ``FetchError`` on transport failure or any status other than 200.
        """
        headers = {"Referer": referer} if referer else {}
        log.debug("page_fetch", url=url, referer=referer)

        try:
            resp = self._http.get(url, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("page_fetch_failed", url=url, error=str(exc))
            raise FetchError(url, cause=exc) from exc

        if resp.status_code != 200:
            log.warning("page_http_error", status=resp.status_code, url=url)
            raise FetchError(url, status_code=resp.status_code)

        return resp.text

    def probe(self, url: str) -> int | None:
        """GET *url* without reading the body; return the status or None on error."""
        try:
            with self._http.stream("GET", url) as resp:
                return resp.status_code
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log.debug("probe_failed", url=url[:120], error=str(exc))
            return None
