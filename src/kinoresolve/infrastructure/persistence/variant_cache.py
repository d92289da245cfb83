"""In-memory variant cache keyed by media request."""

from __future__ import annotations

import threading

import structlog

from kinoresolve.domain.entities.stream import StreamVariant

log = structlog.get_logger(__name__)


class InMemoryVariantCache:
    """Stores resolved variant lists; every access holds a lock."""

    def __init__(self) -> None:
        self._variants: dict[str, list[StreamVariant]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> list[StreamVariant] | None:
        with self._lock:
            variants = self._variants.get(key)
            return list(variants) if variants is not None else None

    def set(self, key: str, variants: list[StreamVariant]) -> None:
        with self._lock:
            self._variants[key] = list(variants)
        log.debug("variants_cached", key=key, count=len(variants))

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._variants.pop(key, None) is not None
