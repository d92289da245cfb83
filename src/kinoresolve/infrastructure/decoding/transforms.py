"""Reversible string/byte transforms used by the payload decoder.

Every function is pure.  Decoding failures are normalised to
``TransformError`` so the decoder can skip a candidate without caring which
step broke.
"""

from __future__ import annotations

import base64
import binascii
from typing import AnyStr

from kinoresolve.domain.exceptions import TransformError

_URLSAFE_TO_STD = str.maketrans({"-": "+", "_": "/"})


def reverse_unicode(text: str) -> str:
    """Reverse by code point."""
    return text[::-1]


def _pad(text: str) -> str:
    remainder = len(text) % 4
    if remainder:
        text += "=" * (4 - remainder)
    return text


def _strip_newlines(data: AnyStr) -> AnyStr:
    """Drop CR and LF (wrapped payloads)."""
    if isinstance(data, str):
        return data.replace("\r", "").replace("\n", "")
    return data.replace(b"\r", b"").replace(b"\n", b"")


def b64decode_std(data: str | bytes) -> bytes:
    """Strict standard-alphabet base64 (padding required)."""
    try:
        return base64.b64decode(_strip_newlines(data), validate=True)
    except ValueError as exc:
        raise TransformError(f"base64 decode failed: {exc}") from exc


def b64decode_urlsafe(data: str | bytes) -> bytes:
    """Strict URL-safe base64 (``-``/``_`` alphabet, padding required)."""
    data = _strip_newlines(data)
    raw = data.encode("ascii", "replace") if isinstance(data, str) else data
    if b"+" in raw or b"/" in raw:
        raise TransformError("base64 decode failed: standard characters in URL-safe input")
    try:
        return base64.b64decode(raw, altchars=b"-_", validate=True)
    except ValueError as exc:
        raise TransformError(f"base64 decode failed: {exc}") from exc


def b64decode_raw(data: str) -> bytes:
    """Strict standard-alphabet base64 without padding."""
    data = _strip_newlines(data)
    if "=" in data:
        raise TransformError("base64 decode failed: padding in raw input")
    if len(data) % 4 == 1:
        raise TransformError("base64 decode failed: truncated input")
    return b64decode_std(_pad(data))


def b64decode_any(data: str) -> bytes:
    """Try standard, URL-safe, then unpadded standard base64; first success wins."""
    for decoder in (b64decode_std, b64decode_urlsafe, b64decode_raw):
        try:
            return decoder(data)
        except TransformError:
            continue
    raise TransformError("base64 decoding failed for all variants")


def b64decode_padfix(data: str) -> bytes:
    """URL-safe → standard substitution, then decode; pad once on failure."""
    standard = _strip_newlines(data).translate(_URLSAFE_TO_STD)
    try:
        return b64decode_std(standard)
    except TransformError:
        if len(standard) % 4 == 0:
            raise
    return b64decode_std(_pad(standard))


def hex_decode(data: str | bytes) -> bytes:
    """Decode hex pairs; odd-length input gets a single leading ``0``."""
    if len(data) % 2:
        data = (b"0" + data) if isinstance(data, bytes) else ("0" + data)
    try:
        return binascii.unhexlify(data)
    except ValueError as exc:
        raise TransformError(f"hex decode failed: {exc}") from exc


def xor_with_key(data: bytes, key: bytes) -> bytes:
    """XOR every byte against a repeating key."""
    if not key:
        return bytes(data)
    size = len(key)
    return bytes(b ^ key[i % size] for i, b in enumerate(data))


def shift_bytes(data: bytes, amount: int) -> bytes:
    """Subtract *amount* from every byte, wrapping modulo 256.

    Underflow wraps (``0x01 - 3 == 0xFE``) exactly like unsigned byte
    arithmetic; a negative *amount* is the matching encoder.
    """
    return bytes((b - amount) % 256 for b in data)


def rot(text: str, amount: int) -> str:
    """Alphabetic rotation by *amount*, preserving case."""
    result: list[str] = []
    for ch in text:
        code = ord(ch)
        if 0x41 <= code <= 0x5A:  # A-Z
            code = (code - 0x41 + amount) % 26 + 0x41
        elif 0x61 <= code <= 0x7A:  # a-z
            code = (code - 0x61 + amount) % 26 + 0x61
        result.append(chr(code))
    return "".join(result)


def take_even_indices(text: str) -> str:
    """Keep characters at positions 0, 2, 4, ... (lossy, no inverse)."""
    return text[::2]


def bytes_to_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")
