"""Common infrastructure utilities."""

from __future__ import annotations

from .fetcher import PageFetcher, build_http_client
from .html_extractors import (
    extract_hidden_payload,
    extract_iframe_redirect,
    extract_nested_redirect,
    extract_script_src,
)
from .throttle_transport import ThrottleTransport

__all__ = [
    "PageFetcher",
    "ThrottleTransport",
    "build_http_client",
    "extract_hidden_payload",
    "extract_iframe_redirect",
    "extract_nested_redirect",
    "extract_script_src",
]
