"""Tests for the diagnostic counter stores and the variant cache."""

from __future__ import annotations

from pathlib import Path

import pytest

from kinoresolve.domain.entities.stream import StreamVariant
from kinoresolve.infrastructure.persistence import (
    FileCounterStore,
    InMemoryCounterStore,
    InMemoryVariantCache,
)


class TestFileCounterStore:
    def test_missing_file_reads_one(self, tmp_path: Path) -> None:
        assert FileCounterStore(tmp_path / "counter.txt").read() == 1

    @pytest.mark.parametrize("raw", ["", "0", "-4", "abc"])
    def test_invalid_content_reads_one(self, tmp_path: Path, raw: str) -> None:
        path = tmp_path / "counter.txt"
        path.write_text(raw, encoding="utf-8")
        assert FileCounterStore(path).read() == 1

    def test_non_utf8_content_reads_one(self, tmp_path: Path) -> None:
        path = tmp_path / "counter.txt"
        path.write_bytes(b"\xff\xfe")
        assert FileCounterStore(path).read() == 1

    def test_reads_decimal_with_whitespace(self, tmp_path: Path) -> None:
        path = tmp_path / "counter.txt"
        path.write_text("7\n", encoding="utf-8")
        assert FileCounterStore(path).read() == 7

    def test_write_creates_parent_dirs(self, tmp_path: Path) -> None:
        path = tmp_path / "content" / "counter.txt"
        store = FileCounterStore(path)
        store.write(3)
        assert path.read_text(encoding="utf-8") == "3"
        assert store.read() == 3


class TestInMemoryCounterStore:
    def test_starts_at_one(self) -> None:
        assert InMemoryCounterStore().read() == 1

    def test_round_trip(self) -> None:
        store = InMemoryCounterStore()
        store.write(5)
        assert store.read() == 5


def _variants() -> list[StreamVariant]:
    return [
        StreamVariant(resolution="1920x1080", bandwidth="5000000", url="https://h/1.m3u8"),
        StreamVariant(resolution="1280x720", bandwidth="2500000", url="https://h/2.m3u8"),
    ]


class TestInMemoryVariantCache:
    def test_miss(self) -> None:
        assert InMemoryVariantCache().get("tt1") is None

    def test_set_then_get(self) -> None:
        cache = InMemoryVariantCache()
        cache.set("tt1", _variants())
        assert cache.get("tt1") == _variants()

    def test_get_returns_copy(self) -> None:
        cache = InMemoryVariantCache()
        cache.set("tt1", _variants())
        cache.get("tt1").clear()  # type: ignore[union-attr]
        assert len(cache.get("tt1") or []) == 2

    def test_delete(self) -> None:
        cache = InMemoryVariantCache()
        cache.set("tt1", _variants())
        assert cache.delete("tt1") is True
        assert cache.delete("tt1") is False
        assert cache.get("tt1") is None

    def test_empty_list_is_a_hit(self) -> None:
        cache = InMemoryVariantCache()
        cache.set("tt1", [])
        assert cache.get("tt1") == []
