"""Use case: media request → cached or freshly resolved stream variants."""

from __future__ import annotations

import structlog

from kinoresolve.domain.entities.media import MediaRequest
from kinoresolve.domain.entities.stream import StreamVariant
from kinoresolve.domain.ports.variant_cache import VariantCache
from kinoresolve.infrastructure.hls.playlist import PlaylistParser
from kinoresolve.infrastructure.resolution.pipeline import ResolutionPipeline

log = structlog.get_logger(__name__)


class ResolveStreamUseCase:
    """Resolve the master URL for a request and list its quality variants.

    Results are cached per ``MediaRequest.cache_key``; failures are not.
    """

    def __init__(
        self,
        pipeline: ResolutionPipeline,
        playlist_parser: PlaylistParser,
        cache: VariantCache,
    ) -> None:
        self._pipeline = pipeline
        self._playlist = playlist_parser
        self._cache = cache

    def execute(self, request: MediaRequest) -> list[StreamVariant]:
        cached = self._cache.get(request.cache_key)
        if cached is not None:
            log.info("variants_cache_hit", key=request.cache_key, count=len(cached))
            return cached

        resolved = self._pipeline.resolve(request)
        variants = self._playlist.parse_variants(resolved.master_url)
        self._cache.set(request.cache_key, variants)
        return variants

    def invalidate(self, request: MediaRequest) -> bool:
        return self._cache.delete(request.cache_key)
