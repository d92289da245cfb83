"""Diagnostic counter stores (plain-text file and in-memory)."""

from __future__ import annotations

import threading
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)

DEFAULT_START_COUNTER = 1


def _coerce(value: int) -> int:
    return value if value > 0 else DEFAULT_START_COUNTER


class FileCounterStore:
    """Counter persisted as decimal text, e.g. ``content/counter.txt``.

    A missing, empty, zero or unparseable file reads as 1.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> int:
        try:
            raw = self._path.read_bytes()
        except OSError:
            return DEFAULT_START_COUNTER

        try:
            return _coerce(int(raw.decode("utf-8").strip()))
        except ValueError:
            # UnicodeDecodeError included
            log.warning("counter_unparseable", path=str(self._path), raw=raw[:20])
            return DEFAULT_START_COUNTER

    def write(self, value: int) -> None:
        """Persist *value*; raises OSError if the file cannot be written."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(str(value), encoding="utf-8")


class InMemoryCounterStore:
    """Process-local counter for tests and runs without a diagnostics dir."""

    def __init__(self, initial: int = 0) -> None:
        self._value = initial
        self._lock = threading.Lock()

    def read(self) -> int:
        with self._lock:
            return _coerce(self._value)

    def write(self, value: int) -> None:
        with self._lock:
            self._value = value
