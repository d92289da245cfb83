"""HLS master playlist parsing.

Only ``#EXT-X-STREAM-INF`` entries are of interest: the tag line carries the
attribute list, the next URI line (relative URIs resolve against the master
URL) names the variant playlist.
"""

from __future__ import annotations

import re
from urllib.parse import urljoin

import structlog

from kinoresolve.domain.entities.stream import StreamVariant
from kinoresolve.domain.exceptions import FetchError, PlaylistError
from kinoresolve.infrastructure.common.fetcher import PageFetcher

log = structlog.get_logger(__name__)

STREAM_INF_TAG = "#EXT-X-STREAM-INF"

# KEY=VALUE pairs; quoted values may contain commas (CODECS="avc1,mp4a").
_ATTRIBUTE_RE = re.compile(r'([A-Z0-9-]+)=("[^"]*"|[^,]*)')


def parse_attributes(line: str) -> dict[str, str]:
    """Parse the attribute list of an ``#EXT-X-...:`` tag line.

    >>> parse_attributes('#EXT-X-STREAM-INF:BANDWIDTH=800000,CODECS="a,b"')
    {'BANDWIDTH': '800000', 'CODECS': 'a,b'}
    """
    _, sep, attr_list = line.partition(":")
    if not sep:
        return {}
    return {
        key: value.strip().strip('"')
        for key, value in _ATTRIBUTE_RE.findall(attr_list)
    }


def parse_master_playlist(content: str, master_url: str) -> list[StreamVariant]:
    """Return the variants of *content* in playlist order."""
    lines = [line.strip() for line in content.splitlines()]
    variants: list[StreamVariant] = []

    for index, line in enumerate(lines):
        if not line.startswith(STREAM_INF_TAG):
            continue

        uri = _next_uri(lines, index + 1)
        if uri is None:
            log.debug("stream_inf_without_uri", line=line[:80])
            continue

        attrs = parse_attributes(line)
        variant = StreamVariant(
            resolution=attrs.get("RESOLUTION", ""),
            bandwidth=attrs.get("BANDWIDTH", ""),
            url=urljoin(master_url, uri),
        )
        log.debug("variant_found", resolution=variant.resolution, bandwidth=variant.bandwidth)
        variants.append(variant)

    return variants


def _next_uri(lines: list[str], start: int) -> str | None:
    """First non-blank, non-comment line after a tag; None if another tag comes first."""
    for line in lines[start:]:
        if not line:
            continue
        if line.startswith(STREAM_INF_TAG):
            return None
        if line.startswith("#"):
            continue
        return line
    return None


class PlaylistParser:
    """Fetches a master playlist and parses its variants."""

    def __init__(self, fetcher: PageFetcher) -> None:
        self._fetcher = fetcher

    def parse_variants(self, master_url: str) -> list[StreamVariant]:
        log.debug("master_playlist_fetch", url=master_url[:120])
        try:
            content = self._fetcher.fetch(master_url)
        except FetchError as exc:
            raise PlaylistError(
                master_url, f"fetching master playlist {master_url!r}: {exc}"
            ) from exc

        variants = parse_master_playlist(content, master_url)
        if not variants:
            raise PlaylistError(
                master_url, f"no stream variants found in master playlist {master_url!r}"
            )

        log.info("stream_variants_found", count=len(variants))
        return variants
