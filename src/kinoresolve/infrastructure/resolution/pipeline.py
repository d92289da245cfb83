"""Three-hop resolution of a media request to an HLS master URL.

Flow:
  1. {embed}/embed/movie?imdb=ID          → iframe#player_iframe src (//host/rcp/...)
  2. https://host/rcp/...                  → ``src: '/prorcp/...'`` in page script
  3. {payload}/prorcp/... (Referer={payload}) → hidden div with obfuscated payload
  4. decode payload                        → "url or url or ..." with {vN} host tokens
  5. split/substitute/dedupe, probe in order → first 200 is the master URL

Every step short-circuits into ``ResolutionError``.  Hops are never retried;
the upstream penalizes aggressive clients.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import urlencode, urljoin

import structlog

from kinoresolve.domain.entities.media import (
    HiddenPayload,
    MediaKind,
    MediaRequest,
    ResolvedStream,
)
from kinoresolve.domain.exceptions import (
    ExtractionError,
    FetchError,
    ResolutionError,
    ResolutionErrorKind,
    UndecodableError,
    ValidationError,
)
from kinoresolve.infrastructure.common.fetcher import PageFetcher
from kinoresolve.infrastructure.common.html_extractors import (
    extract_hidden_payload,
    extract_iframe_redirect,
    extract_nested_redirect,
)
from kinoresolve.infrastructure.decoding.decoder import (
    DEFAULT_CANDIDATES,
    DecodeCandidate,
    decode,
)
from kinoresolve.infrastructure.diagnostics.dump import DiagnosticRecorder
from kinoresolve.infrastructure.resolution.candidates import split_candidates

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProviderSettings:
    """Provider hosts and tokens used by the pipeline (see ``ProviderConfig``)."""

    embed_base_url: str = "https://vidsrc-embed.ru"
    payload_base_url: str = "https://cloudnestra.com"
    placeholder_host: str = "cloudnestra.com"
    placeholders: tuple[str, ...] = ("{v1}", "{v2}", "{v3}", "{v4}")
    separator: str = "or"
    candidates: Sequence[DecodeCandidate] = DEFAULT_CANDIDATES


def build_embed_url(request: MediaRequest, base_url: str) -> str:
    """Build the first-hop URL; raises ``ValidationError`` for bad requests."""
    request.validate()

    if request.kind is MediaKind.MOVIE:
        query = urlencode({"imdb": request.identifier})
        return f"{base_url}/embed/movie?{query}"

    query = urlencode(
        {"imdb": request.identifier, "season": request.season, "episode": request.episode}
    )
    return f"{base_url}/embed/tv?{query}"


class ResolutionPipeline:
    """Walks the embed chain and returns the first servable master URL."""

    def __init__(
        self,
        fetcher: PageFetcher,
        settings: ProviderSettings | None = None,
        diagnostics: DiagnosticRecorder | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._settings = settings or ProviderSettings()
        self._diagnostics = diagnostics

    def resolve(self, request: MediaRequest) -> ResolvedStream:
        log.info(
            "resolve_started",
            identifier=request.identifier,
            kind=request.kind.value,
            season=request.season,
            episode=request.episode,
        )

        try:
            embed_url = build_embed_url(request, self._settings.embed_base_url)
        except ValidationError as exc:
            raise ResolutionError(ResolutionErrorKind.VALIDATION, str(exc)) from exc

        try:
            payload = self._walk_hops(embed_url)
        except ExtractionError as exc:
            log.warning("extraction_failed", step=exc.step, error=str(exc))
            raise ResolutionError(ResolutionErrorKind.EXTRACTION, str(exc)) from exc

        raw = self._decode(payload)

        urls = split_candidates(
            raw,
            separator=self._settings.separator,
            placeholders=self._settings.placeholders,
            host=self._settings.placeholder_host,
        )
        log.debug("candidate_urls", count=len(urls))

        return self._probe(urls)

    def _fetch(self, url: str, referer: str | None = None) -> str:
        try:
            return self._fetcher.fetch(url, referer=referer)
        except FetchError as exc:
            raise ResolutionError(ResolutionErrorKind.FETCH, str(exc)) from exc

    def _walk_hops(self, embed_url: str) -> HiddenPayload:
        embed_html = self._fetch(embed_url)
        rcp_src = extract_iframe_redirect(embed_html)
        if rcp_src is None:
            raise ExtractionError("embed", "no iframe src found for RCP URL")
        log.info("rcp_url_extracted")

        # protocol-relative (//host/rcp/...) in practice
        rcp_html = self._fetch(urljoin(embed_url, rcp_src))
        prorcp_path = extract_nested_redirect(rcp_html)
        if prorcp_path is None:
            raise ExtractionError("rcp", "no ProRCP URL found in RCP page")
        log.info("prorcp_url_extracted")

        base = self._settings.payload_base_url
        prorcp_html = self._fetch(base + prorcp_path, referer=base)
        payload = extract_hidden_payload(prorcp_html)
        if payload is None:
            log.error("hidden_payload_missing")
            raise ExtractionError("prorcp", "no hidden div found in ProRCP page")
        log.debug(
            "hidden_payload_extracted",
            length=len(payload.text),
            element_id=payload.element_id,
        )
        return payload

    def _decode(self, payload: HiddenPayload) -> str:
        try:
            if not payload.text:
                raise UndecodableError("hidden payload is empty")
            result = decode(payload.text, self._settings.candidates)
        except UndecodableError as exc:
            log.error("decode_failed", length=len(payload.text), error=str(exc))
            message = str(exc)
            artifact = self._diagnostics.record(payload) if self._diagnostics else None
            if artifact is not None:
                message += f"; payload saved as {artifact}.html in {self._diagnostics.output_dir}"
            raise ResolutionError(ResolutionErrorKind.UNDECODABLE, message) from exc

        log.info("stream_url_decoded", candidate=result.candidate)
        return result.value

    def _probe(self, urls: list[str]) -> ResolvedStream:
        for index, url in enumerate(urls, start=1):
            status = self._fetcher.probe(url)
            log.debug("probe_status", url=url[:120], status=status)
            if status == 200:
                log.info("master_url_resolved", tried=index)
                return ResolvedStream(master_url=url, tried=index)

        raise ResolutionError(
            ResolutionErrorKind.NO_VIABLE_URL,
            f"no successful URL found in {len(urls)} decoded URLs",
            tried=len(urls),
        )
