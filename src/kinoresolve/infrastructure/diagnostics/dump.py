"""Artifact dump for payloads no decode candidate could handle.

For every failure two files are written to the output directory:

- ``{n}.js``   the provider's companion decoder script (best-effort fetch)
- ``{n}.html`` a page embedding the hidden container and loading ``{n}.js``,
  so the payload can be decoded by opening it in a browser

``n`` comes from a :class:`CounterStore` and is incremented after each dump.
Nothing here raises: the pipeline signals the failure, this is a side channel.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from kinoresolve.domain.entities.media import HiddenPayload
from kinoresolve.domain.exceptions import FetchError
from kinoresolve.domain.ports.counter_store import CounterStore
from kinoresolve.infrastructure.common.fetcher import PageFetcher
from kinoresolve.infrastructure.common.html_extractors import extract_script_src

log = structlog.get_logger(__name__)

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>

<div id="{element_id}" style="display: none;">
{inner_html}
</div>

<div id="output"></div>

<script src="{counter}.js"></script>

<script>
try {{
    const decodedUrl = window.{element_id};
    document.getElementById('output').innerText = 'Decoded URL: ' + decodedUrl;
}} catch (e) {{
    document.getElementById('output').innerText = 'Error decoding URL: ' + e.message;
}}
</script>

</html>"""


def render_inspection_page(payload: HiddenPayload, counter: int) -> str:
    return _HTML_TEMPLATE.format(
        element_id=payload.element_id,
        inner_html=payload.inner_html,
        counter=counter,
    )


class DiagnosticRecorder:
    """Writes numbered inspection artifacts for undecodable payloads."""

    def __init__(
        self,
        fetcher: PageFetcher,
        counter_store: CounterStore,
        output_dir: Path,
        *,
        base_url: str,
        script_marker: str,
    ) -> None:
        self._fetcher = fetcher
        self._counter = counter_store
        self._output_dir = output_dir
        self._base_url = base_url
        self._script_marker = script_marker

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def record(self, payload: HiddenPayload) -> int | None:
        """Dump *payload*; return the artifact number, or None if nothing was written."""
        try:
            counter = self._counter.read()
        except Exception as exc:  # noqa: BLE001
            log.error("diagnostics_counter_read_failed", error=str(exc))
            return None

        log.info("diagnostics_saving", counter=counter, output_dir=str(self._output_dir))

        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            log.error("diagnostics_mkdir_failed", path=str(self._output_dir), error=str(exc))
            return None

        self._save_script(payload, counter)
        written = self._save_page(payload, counter)

        try:
            self._counter.write(counter + 1)
        except Exception as exc:  # noqa: BLE001
            log.error("diagnostics_counter_write_failed", error=str(exc))

        return counter if written else None

    def _save_script(self, payload: HiddenPayload, counter: int) -> None:
        src = extract_script_src(payload.page_html, self._script_marker)
        if src is None:
            log.debug("diagnostics_script_not_found", marker=self._script_marker)
            return

        script_url = self._base_url + src
        try:
            body = self._fetcher.fetch(script_url, referer=self._base_url)
        except FetchError as exc:
            log.warning("diagnostics_script_fetch_failed", url=script_url, error=str(exc))
            return

        path = self._output_dir / f"{counter}.js"
        try:
            path.write_text(body, encoding="utf-8")
        except OSError as exc:
            log.error("diagnostics_write_failed", path=str(path), error=str(exc))
            return
        log.debug("diagnostics_script_saved", path=str(path))

    def _save_page(self, payload: HiddenPayload, counter: int) -> bool:
        path = self._output_dir / f"{counter}.html"
        try:
            path.write_text(render_inspection_page(payload, counter), encoding="utf-8")
        except OSError as exc:
            log.error("diagnostics_write_failed", path=str(path), error=str(exc))
            return False
        log.debug("diagnostics_page_saved", path=str(path))
        return True
