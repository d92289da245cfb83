"""Guess-and-check payload decoder.

The host rotates its obfuscation scheme, so instead of hard-coding one
inverse we keep an ordered catalog of candidate pipelines and accept the
first output that looks like an https URL.

Catalog (order is significant, first valid output wins):

1. rot13_base64            ROT13 → base64 (std / url-safe / raw)
2. reverse_base64_shift3   reverse → url-safe fix-up → base64 → bytes-3
3. rot3                    alphabetic rotation by 3
4. reverse_hex_xor         reverse → hex → XOR(key B)
5. hex_xor_shift3_base64   hex → XOR(key A) → bytes-3 → base64
6. reverse_base64_shift5   reverse → url-safe fix-up → base64 → bytes-5
7. reverse_base64_shift7   reverse → url-safe fix-up → base64 → bytes-7
8. reverse_shift1_hex      reverse → bytes-1 → hex
9. reverse_even_base64     reverse → even indices → base64 (one-way)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import structlog

from kinoresolve.domain.entities.media import DecodeResult
from kinoresolve.domain.exceptions import DecodeError, UndecodableError
from kinoresolve.infrastructure.decoding.transforms import (
    b64decode_any,
    b64decode_padfix,
    b64decode_std,
    b64decode_urlsafe,
    bytes_to_text,
    hex_decode,
    reverse_unicode,
    rot,
    shift_bytes,
    take_even_indices,
    xor_with_key,
)

log = structlog.get_logger(__name__)

URL_PREFIX = "https"
URL_MIN_LENGTH = 5

XOR_KEY_A = b"pWB9V)[*4I`nJpp?ozyB~dbr9yt!_n4u"
XOR_KEY_B = b"X9a(O;FMV2-7VO5x;Ao\x05:dN1NoFs?j,"

_URLSAFE_TO_STD = str.maketrans({"-": "+", "_": "/"})


@dataclass(frozen=True)
class DecodeCandidate:
    """A named decoding pipeline: ``func(payload) -> decoded``."""

    name: str
    func: Callable[[str], str]

    def __call__(self, payload: str) -> str:
        return self.func(payload)


def decode_rot13_base64(payload: str) -> str:
    return bytes_to_text(b64decode_any(rot(payload, 13)))


def _reverse_base64_shift(payload: str, amount: int, *, pad: bool = False) -> str:
    standard = reverse_unicode(payload).translate(_URLSAFE_TO_STD)
    decoded = b64decode_padfix(standard) if pad else b64decode_std(standard)
    return bytes_to_text(shift_bytes(decoded, amount))


def decode_reverse_base64_shift3(payload: str) -> str:
    return _reverse_base64_shift(payload, 3, pad=True)


def decode_rot3(payload: str) -> str:
    return rot(payload, 3)


def decode_reverse_hex_xor(payload: str) -> str:
    data = hex_decode(reverse_unicode(payload))
    return bytes_to_text(xor_with_key(data, XOR_KEY_B))


def decode_hex_xor_shift3_base64(payload: str) -> str:
    data = hex_decode(payload)
    shifted = shift_bytes(xor_with_key(data, XOR_KEY_A), 3)
    try:
        decoded = b64decode_std(shifted)
    except DecodeError:
        decoded = b64decode_urlsafe(shifted)
    return bytes_to_text(decoded)


def decode_reverse_base64_shift5(payload: str) -> str:
    return _reverse_base64_shift(payload, 5)


def decode_reverse_base64_shift7(payload: str) -> str:
    return _reverse_base64_shift(payload, 7)


def decode_reverse_shift1_hex(payload: str) -> str:
    shifted = shift_bytes(reverse_unicode(payload).encode("utf-8"), 1)
    return bytes_to_text(hex_decode(shifted))


def decode_reverse_even_base64(payload: str) -> str:
    extracted = take_even_indices(reverse_unicode(payload))
    return bytes_to_text(b64decode_std(extracted))


DEFAULT_CANDIDATES: tuple[DecodeCandidate, ...] = (
    DecodeCandidate("rot13_base64", decode_rot13_base64),
    DecodeCandidate("reverse_base64_shift3", decode_reverse_base64_shift3),
    DecodeCandidate("rot3", decode_rot3),
    DecodeCandidate("reverse_hex_xor", decode_reverse_hex_xor),
    DecodeCandidate("hex_xor_shift3_base64", decode_hex_xor_shift3_base64),
    DecodeCandidate("reverse_base64_shift5", decode_reverse_base64_shift5),
    DecodeCandidate("reverse_base64_shift7", decode_reverse_base64_shift7),
    DecodeCandidate("reverse_shift1_hex", decode_reverse_shift1_hex),
    DecodeCandidate("reverse_even_base64", decode_reverse_even_base64),
)


def looks_like_url(value: str) -> bool:
    return len(value) >= URL_MIN_LENGTH and value.startswith(URL_PREFIX)


def try_decode(
    payload: str,
    candidates: Sequence[DecodeCandidate] = DEFAULT_CANDIDATES,
) -> DecodeResult | None:
    """Return the first candidate output that looks like an https URL."""
    for candidate in candidates:
        try:
            decoded = candidate(payload)
        except (DecodeError, ValueError) as exc:
            log.debug("decode_candidate_failed", candidate=candidate.name, error=str(exc))
            continue

        if looks_like_url(decoded):
            log.debug("decode_candidate_matched", candidate=candidate.name)
            return DecodeResult(value=decoded, candidate=candidate.name)

    return None


def decode(
    payload: str,
    candidates: Sequence[DecodeCandidate] = DEFAULT_CANDIDATES,
) -> DecodeResult:
    """Like :func:`try_decode` but raises ``UndecodableError`` on exhaustion."""
    result = try_decode(payload, candidates)
    if result is None:
        raise UndecodableError("no decoder produced a valid https URL")
    return result
