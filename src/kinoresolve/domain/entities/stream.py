"""HLS stream variant entity and its display helpers."""

from __future__ import annotations

from dataclasses import dataclass

_QUALITY_BY_HEIGHT: dict[str, str] = {
    "1080": "1080p",
    "720": "720p",
    "480": "480p",
    "360": "360p",
}


def format_resolution(resolution: str) -> str:
    """Map a raw ``WxH`` resolution to a friendly label.

    >>> format_resolution("1920x1080")
    '1080p'
    >>> format_resolution("3840x2160")
    '3840x2160'
    """
    if "x" not in resolution:
        return resolution

    parts = resolution.split("x")
    if len(parts) != 2:
        return resolution

    return _QUALITY_BY_HEIGHT.get(parts[1], resolution)


def format_bandwidth(bandwidth: str) -> str:
    """Render a raw bits-per-second string as bps, Mbps or Gbps text.

    Works on the decimal string directly (one fractional digit, truncated):

    >>> format_bandwidth("5000000")
    '5.0 Mbps'
    >>> format_bandwidth("500")
    '500 bps'
    """
    if not bandwidth:
        return ""

    if len(bandwidth) <= 6:
        return f"{bandwidth} bps"

    whole = bandwidth[:-6]
    if whole.isdigit() and int(whole) >= 1000:
        return f"{int(whole) // 1000}.{bandwidth[-9]} Gbps"
    return f"{whole}.{bandwidth[-6]} Mbps"


@dataclass(frozen=True)
class StreamVariant:
    """One quality level of an HLS master playlist."""

    resolution: str  # raw "1920x1080"
    bandwidth: str  # raw decimal bps, e.g. "5000000"
    url: str  # absolute variant playlist URL

    @property
    def quality_label(self) -> str:
        return format_resolution(self.resolution)

    @property
    def bandwidth_label(self) -> str:
        return format_bandwidth(self.bandwidth)

    @property
    def display(self) -> str:
        bandwidth = self.bandwidth_label
        if bandwidth:
            return f"{self.quality_label} ({bandwidth})"
        return self.quality_label
