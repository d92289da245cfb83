"""Layered configuration: defaults < YAML < KINORESOLVE_* env < CLI."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_SECTIONS = ("http", "provider", "diagnostics", "player", "logging")

# flat key (env vars, CLI flags) -> (section, key)
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_user_agent": ("http", "user_agent"),
    "http_accept_language": ("http", "accept_language"),
    "http_throttle_seconds": ("http", "throttle_seconds"),
    "diagnostics_enabled": ("diagnostics", "enabled"),
    "diagnostics_dir": ("diagnostics", "dir"),
    "diagnostics_counter_file": ("diagnostics", "counter_file"),
    "player_command": ("player", "command"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}


def _merge_into(base: dict[str, Any], layer: Mapping[str, Any]) -> None:
    for key, value in layer.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge_into(current, value)
        else:
            base[key] = value


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Fold flat keys into their sections; unknown keys are dropped."""
    out: dict[str, Any] = {
        name: dict(layer[name])
        for name in _SECTIONS
        if isinstance(layer.get(name), Mapping)
    }
    if "environment" in layer:
        out["environment"] = layer["environment"]

    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in layer:
            out.setdefault(section, {})[key] = layer[flat_key]
    return out


def _require(path: Path) -> Path:
    if not path.exists():
        raise FileNotFoundError(path)
    return path


def _read_yaml(path: Path) -> dict[str, Any]:
    parsed = yaml.safe_load(_require(path).read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Merge every layer and validate once. Never touches the filesystem beyond reads."""
    if dotenv_path is not None:
        # existing env vars win over the .env file
        load_dotenv(_require(dotenv_path), override=False)

    layers: list[Mapping[str, Any]] = [deepcopy(DEFAULT_CONFIG)]
    if config_path is not None:
        layers.append(_read_yaml(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        _merge_into(merged, _sectioned(layer))
    return AppConfig.model_validate(merged)
