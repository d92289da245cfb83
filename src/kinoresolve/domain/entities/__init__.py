from .media import DecodeResult, HiddenPayload, MediaKind, MediaRequest, ResolvedStream
from .stream import StreamVariant, format_bandwidth, format_resolution

__all__ = [
    "DecodeResult",
    "HiddenPayload",
    "MediaKind",
    "MediaRequest",
    "ResolvedStream",
    "StreamVariant",
    "format_bandwidth",
    "format_resolution",
]
