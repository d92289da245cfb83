"""Domain exceptions for stream resolution."""

from __future__ import annotations

from enum import Enum


class KinoResolveError(Exception):
    """Base class for all kinoresolve errors."""


class ValidationError(KinoResolveError):
    """Raised when a MediaRequest is malformed."""


class FetchError(KinoResolveError):
    """Raised on transport failure or a non-200 response."""

    def __init__(
        self,
        url: str,
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        self.cause = cause
        if status_code is not None:
            message = f"unexpected status code {status_code} for page {url!r}"
        else:
            message = f"fetching page {url!r} failed: {cause}"
        super().__init__(message)


class ExtractionError(KinoResolveError):
    """Raised when an expected element is missing from a fetched page."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(message)


class DecodeError(KinoResolveError):
    """Base class for payload decoding failures."""


class TransformError(DecodeError):
    """Raised by a single transform when its input cannot be decoded."""


class UndecodableError(DecodeError):
    """Raised when no decode candidate produced a valid https URL."""


class ResolutionErrorKind(str, Enum):
    VALIDATION = "validation"
    FETCH = "fetch"
    EXTRACTION = "extraction"
    UNDECODABLE = "undecodable"
    NO_VIABLE_URL = "no_viable_url"


class ResolutionError(KinoResolveError):
    """Raised when the resolution pipeline cannot produce a master URL.

    ``kind`` lets callers tell an undecodable payload (diagnostics were
    written) apart from network or page-shape failures.
    """

    def __init__(
        self,
        kind: ResolutionErrorKind,
        message: str,
        *,
        tried: int = 0,
    ) -> None:
        self.kind = kind
        self.tried = tried
        super().__init__(message)


class PlaylistError(KinoResolveError):
    """Raised when a master playlist cannot be fetched or yields no variants."""

    def __init__(self, master_url: str, message: str) -> None:
        self.master_url = master_url
        super().__init__(message)


class PlayerError(KinoResolveError):
    """Raised when the external media player is missing or fails."""
