"""Turning a decoded payload into an ordered list of candidate URLs."""

from __future__ import annotations

from collections.abc import Iterable


def substitute_placeholders(value: str, placeholders: Iterable[str], host: str) -> str:
    for token in placeholders:
        value = value.replace(token, host)
    return value


def split_candidates(
    raw: str,
    *,
    separator: str,
    placeholders: Iterable[str],
    host: str,
) -> list[str]:
    """Split *raw* on *separator*, fill in *host*, strip, and dedupe.

    Order is preserved and the first occurrence of a duplicate wins.  Blank
    parts (e.g. from a trailing separator) are dropped rather than probed, so
    they never count towards ``ResolutionError.tried``.

    >>> split_candidates("A or {v1} or A", separator="or", placeholders=["{v1}"], host="B")
    ['A', 'B']
    """
    tokens = tuple(placeholders)
    seen: set[str] = set()
    urls: list[str] = []
    for part in raw.split(separator):
        url = substitute_placeholders(part, tokens, host).strip()
        if not url or url in seen:
            continue
        seen.add(url)
        urls.append(url)
    return urls
