"""Tests for splitting a decoded payload into candidate URLs."""

from __future__ import annotations

from kinoresolve.infrastructure.resolution.candidates import (
    split_candidates,
    substitute_placeholders,
)

PLACEHOLDERS = ("{v1}", "{v2}", "{v3}", "{v4}")


def _split(raw: str, host: str = "cloudnestra.com") -> list[str]:
    return split_candidates(raw, separator="or", placeholders=PLACEHOLDERS, host=host)


class TestSubstitutePlaceholders:
    def test_all_tokens_replaced(self) -> None:
        value = "https://a.{v1}/x https://b.{v4}/y"
        assert substitute_placeholders(value, PLACEHOLDERS, "h.net") == (
            "https://a.h.net/x https://b.h.net/y"
        )

    def test_unknown_token_untouched(self) -> None:
        assert substitute_placeholders("{v9}", PLACEHOLDERS, "h") == "{v9}"


class TestSplitCandidates:
    def test_dedupes_after_substitution(self) -> None:
        assert split_candidates(
            "A or {v1} or A", separator="or", placeholders=["{v1}"], host="B"
        ) == ["A", "B"]

    def test_order_preserved(self) -> None:
        raw = "https://x.{v1}/1.m3u8 or https://y.{v2}/2.m3u8 or https://z.{v3}/3.m3u8"
        assert _split(raw, host="h.net") == [
            "https://x.h.net/1.m3u8",
            "https://y.h.net/2.m3u8",
            "https://z.h.net/3.m3u8",
        ]

    def test_substituted_duplicates_collapse(self) -> None:
        raw = "https://{v1}/m.m3u8 or https://{v2}/m.m3u8"
        assert _split(raw) == ["https://cloudnestra.com/m.m3u8"]

    def test_blank_parts_dropped(self) -> None:
        assert _split(" or https://a.example/m.m3u8 or  or ") == [
            "https://a.example/m.m3u8"
        ]

    def test_single_url(self) -> None:
        assert _split("https://a.example/m.m3u8") == ["https://a.example/m.m3u8"]

    def test_separator_is_literal_substring(self) -> None:
        # "or" inside a word splits too; the upstream never emits such URLs.
        assert _split("https://mirror.example/m.m3u8") == [
            "https://mirr",
            ".example/m.m3u8",
        ]
