"""Domain entities describing what to resolve.

Pure value objects with no framework dependencies and no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kinoresolve.domain.exceptions import ValidationError


class MediaKind(str, Enum):
    """Content kind as used in embed URL paths."""

    MOVIE = "movie"
    SERIES = "tv"


@dataclass(frozen=True)
class MediaRequest:
    """Identifier (IMDb ID) plus optional season/episode for series."""

    identifier: str
    kind: MediaKind = MediaKind.MOVIE
    season: int | None = None
    episode: int | None = None

    @classmethod
    def movie(cls, identifier: str) -> MediaRequest:
        return cls(identifier=identifier, kind=MediaKind.MOVIE)

    @classmethod
    def series(cls, identifier: str, season: int, episode: int) -> MediaRequest:
        return cls(
            identifier=identifier,
            kind=MediaKind.SERIES,
            season=season,
            episode=episode,
        )

    def validate(self) -> None:
        """Raise ValidationError if the request cannot be turned into an embed URL."""
        if not self.identifier or not self.identifier.strip():
            raise ValidationError(f"cannot build {self.kind.value} URL: identifier is empty")

        if self.kind is MediaKind.SERIES:
            if not self.season or not self.episode or self.season <= 0 or self.episode <= 0:
                raise ValidationError(
                    f"cannot build tv URL for {self.identifier!r}: "
                    "season and episode must be set"
                )
        elif self.season is not None or self.episode is not None:
            raise ValidationError(
                f"movie request {self.identifier!r} must not carry season/episode"
            )

    @property
    def cache_key(self) -> str:
        if self.kind is MediaKind.SERIES:
            return f"{self.identifier}:{self.season}:{self.episode}"
        return self.identifier


@dataclass(frozen=True)
class HiddenPayload:
    """Obfuscated payload found in the hidden container of the final page.

    ``element_id`` and ``inner_html`` are only used by the diagnostic dump;
    ``page_html`` is kept so the dump can locate the companion script.
    """

    text: str
    element_id: str = ""
    inner_html: str = ""
    page_html: str = ""


@dataclass(frozen=True)
class DecodeResult:
    """Decoded payload and the name of the candidate that produced it."""

    value: str
    candidate: str


@dataclass(frozen=True)
class ResolvedStream:
    """First candidate URL that answered the viability probe with 200 OK."""

    master_url: str
    tried: int = 1
