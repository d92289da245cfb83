"""Composition root: wires config into the resolution object graph."""

from __future__ import annotations

from dataclasses import dataclass

import httpx
import structlog

from kinoresolve.application.use_cases.resolve_stream import ResolveStreamUseCase
from kinoresolve.domain.ports.variant_cache import VariantCache
from kinoresolve.infrastructure.common.fetcher import PageFetcher, build_http_client
from kinoresolve.infrastructure.config.schema import AppConfig
from kinoresolve.infrastructure.diagnostics.dump import DiagnosticRecorder
from kinoresolve.infrastructure.hls.playlist import PlaylistParser
from kinoresolve.infrastructure.persistence.counter_store import FileCounterStore
from kinoresolve.infrastructure.persistence.variant_cache import InMemoryVariantCache
from kinoresolve.infrastructure.player.mpv import MpvPlayer
from kinoresolve.infrastructure.resolution.pipeline import (
    ProviderSettings,
    ResolutionPipeline,
)

log = structlog.get_logger(__name__)


@dataclass
class Container:
    """Everything a CLI run needs; ``close()`` releases the HTTP client."""

    http_client: httpx.Client
    use_case: ResolveStreamUseCase
    player: MpvPlayer

    def close(self) -> None:
        self.http_client.close()


def provider_settings(config: AppConfig) -> ProviderSettings:
    provider = config.provider
    return ProviderSettings(
        embed_base_url=provider.embed_base_url,
        payload_base_url=provider.payload_base_url,
        placeholder_host=provider.placeholder_host,
        placeholders=tuple(provider.placeholders),
        separator=provider.separator,
    )


def build_container(
    config: AppConfig,
    *,
    transport: httpx.BaseTransport | None = None,
    cache: VariantCache | None = None,
) -> Container:
    """Build the object graph.

    Order matters:
        1. HTTP client (shared, throttled)
        2. Fetcher (used by pipeline, playlist parser and diagnostics)
        3. Diagnostics (optional)
        4. Pipeline + playlist parser + cache → use case
    """
    http_client = build_http_client(config, transport=transport)
    fetcher = PageFetcher(http_client)

    diagnostics: DiagnosticRecorder | None = None
    if config.diagnostics_enabled:
        diagnostics = DiagnosticRecorder(
            fetcher,
            FileCounterStore(config.counter_path),
            config.diagnostics_dir,
            base_url=config.provider.payload_base_url,
            script_marker=config.provider.script_marker,
        )

    pipeline = ResolutionPipeline(fetcher, provider_settings(config), diagnostics)
    use_case = ResolveStreamUseCase(
        pipeline,
        PlaylistParser(fetcher),
        cache if cache is not None else InMemoryVariantCache(),
    )
    log.debug(
        "container_built",
        diagnostics=config.diagnostics_enabled,
        throttle=config.http_throttle_seconds,
    )
    return Container(
        http_client=http_client,
        use_case=use_case,
        player=MpvPlayer(config.player.command, config.player.args),
    )
