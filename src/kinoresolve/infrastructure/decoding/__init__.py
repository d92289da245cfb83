"""Obfuscated payload decoding."""

from __future__ import annotations

from .decoder import DEFAULT_CANDIDATES, DecodeCandidate, decode, try_decode

__all__ = ["DEFAULT_CANDIDATES", "DecodeCandidate", "decode", "try_decode"]
