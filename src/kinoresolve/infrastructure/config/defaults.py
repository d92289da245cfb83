"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "environment": "dev",
    "http": {
        "timeout_seconds": 10.0,
        "accept_language": "en",
        "throttle_seconds": 1.0,
    },
    "provider": {
        "embed_base_url": "https://vidsrc-embed.ru",
        "payload_base_url": "https://cloudnestra.com",
        "placeholder_host": "cloudnestra.com",
        "separator": "or",
    },
    "diagnostics": {
        "enabled": True,
        "dir": "./content",
        "counter_file": "counter.txt",
    },
    "player": {
        "command": "mpv",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
