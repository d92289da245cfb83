"""Shared test fixtures for the kinoresolve test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest

from kinoresolve.infrastructure.common.fetcher import PageFetcher, build_http_client
from kinoresolve.infrastructure.config.schema import AppConfig

SCRIPT_MARKER = "/sV05kUlNvOdOxvtC/"

# ---------------------------------------------------------------------------
# Page builders (factory fixtures)
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_embed_page() -> Callable[..., str]:
    """First hop: page with the player iframe."""

    def _make(src: str = "//cloudnestra.com/rcp/abc123") -> str:
        return (
            "<html><body>"
            f'<iframe id="player_iframe" src="{src}" frameborder="0"></iframe>'
            "</body></html>"
        )

    return _make


@pytest.fixture()
def make_rcp_page() -> Callable[..., str]:
    """Second hop: script assigning the /prorcp/ path."""

    def _make(path: str = "/prorcp/xyz789") -> str:
        return (
            "<html><body><script>"
            "$('#the_frame').removeAttr('style');"
            "$('#the_frame').html($('<iframe>', "
            f"{{ id: 'player_iframe', src: '{path}', frameborder: 0 }}));"
            "</script></body></html>"
        )

    return _make


@pytest.fixture()
def make_prorcp_page() -> Callable[..., str]:
    """Third hop: hidden container with the payload and the decoder script tag."""

    def _make(
        payload: str,
        *,
        element_id: str = "xTyBxQyGTA",
        script_src: str | None = f"{SCRIPT_MARKER}abc.js?_=1744906950",
    ) -> str:
        script = f'<script src="{script_src}"></script>' if script_src else ""
        return (
            "<html><head>"
            '<script src="/js/jquery.min.js"></script>'
            f"{script}"
            "</head><body>"
            f'<div id="{element_id}" style="display:none;">{payload}</div>'
            '<div id="player_parent"></div>'
            "</body></html>"
        )

    return _make


# ---------------------------------------------------------------------------
# Infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def config(tmp_path: Path) -> AppConfig:
    """Config with throttling disabled and diagnostics under tmp_path."""
    return AppConfig(
        environment="test",
        http_throttle_seconds=0.0,
        diagnostics_dir=tmp_path / "content",
    )


@pytest.fixture()
def http_client(config: AppConfig) -> Iterator[httpx.Client]:
    client = build_http_client(config)
    yield client
    client.close()


@pytest.fixture()
def fetcher(http_client: httpx.Client) -> PageFetcher:
    return PageFetcher(http_client)
