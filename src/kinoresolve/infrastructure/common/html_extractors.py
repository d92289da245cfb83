"""Extraction of redirect targets and the hidden payload from embed pages.

The page structure is an unversioned contract with the provider and changes
without notice, so every function returns ``None`` when its element is
missing instead of raising.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from kinoresolve.domain.entities.media import HiddenPayload

IFRAME_SELECTOR = "iframe#player_iframe"
HIDDEN_PAYLOAD_SELECTOR = "div[style='display:none;']"

# JS assignment on the RCP page: ``src: '/prorcp/<hash>'``
_NESTED_REDIRECT_RE = re.compile(r"src: '(/prorcp/[^']+)")


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (lxml parser)."""
    return BeautifulSoup(html, "lxml")


def extract_iframe_redirect(html: str) -> str | None:
    """Return the ``src`` of the player iframe, or None if absent/empty."""
    iframe = parse_html(html).select_one(IFRAME_SELECTOR)
    if iframe is None:
        return None
    src = iframe.get("src")
    return str(src) if src else None


def extract_nested_redirect(html: str) -> str | None:
    """Return the ``/prorcp/...`` path assigned in the RCP page script."""
    match = _NESTED_REDIRECT_RE.search(html)
    return match.group(1) if match else None


def extract_hidden_payload(html: str) -> HiddenPayload | None:
    """Return the first hidden container's text, id and inner markup."""
    div = parse_html(html).select_one(HIDDEN_PAYLOAD_SELECTOR)
    if div is None:
        return None

    element_id = div.get("id")
    return HiddenPayload(
        text=div.get_text().strip(),
        element_id=str(element_id) if element_id else "",
        inner_html=div.decode_contents(),
        page_html=html,
    )


def extract_script_src(html: str, marker: str) -> str | None:
    """Return the ``src`` of the first script whose URL contains *marker*."""
    for script in parse_html(html).select("script[src]"):
        src = str(script.get("src", ""))
        if marker in src:
            return src
    return None
