"""Pydantic configuration models with validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/107.0.0.0 Safari/537.36"
)


def _normalize_path(value: Any) -> Path:
    """
    Normalize a path-like value without causing filesystem side-effects.

    This function MUST NOT create directories or files.
    """
    if isinstance(value, Path):
        return value.expanduser()
    if isinstance(value, str):
        return Path(value).expanduser()
    raise TypeError(f"Expected path-like value, got: {type(value)!r}")


class ProviderConfig(BaseModel):
    """Hosts and markers of the upstream embed service.

    These change whenever the provider rotates domains; all of them are
    overridable from YAML (provider section).
    """

    embed_base_url: str = Field(
        default="https://vidsrc-embed.ru",
        description="Base URL of the first-hop embed page.",
    )
    payload_base_url: str = Field(
        default="https://cloudnestra.com",
        description="Base URL of the final page; also sent as Referer.",
    )
    placeholder_host: str = Field(
        default="cloudnestra.com",
        description="Hostname substituted for placeholder tokens in decoded URLs.",
    )
    placeholders: list[str] = Field(
        default=["{v1}", "{v2}", "{v3}", "{v4}"],
        description="Placeholder tokens replaced by placeholder_host.",
    )
    separator: str = Field(
        default="or",
        description="Literal token joining alternative URLs in the decoded payload.",
    )
    script_marker: str = Field(
        default="/sV05kUlNvOdOxvtC/",
        description="URL-path substring identifying the companion decoder script.",
    )

    @field_validator("embed_base_url", "payload_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("separator")
    @classmethod
    def _validate_separator(cls, v: str) -> str:
        if not v:
            raise ValueError("separator must not be empty")
        return v


class PlayerConfig(BaseModel):
    """External media player invocation."""

    command: str = Field(default="mpv", description="Player executable.")
    args: list[str] = Field(
        default_factory=list,
        description="Extra arguments placed before the stream URL.",
    )


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/provider/diagnostics/player/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Per-request timeout applied to every hop, probe and playlist fetch.",
    )
    http_user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="Desktop browser User-Agent (default client UAs are blocked).",
    )
    http_accept_language: str = Field(
        default="en",
        validation_alias=AliasChoices(
            "http_accept_language",
            AliasPath("http", "accept_language"),
        ),
        description="Accept-Language header (suppresses IP-based localization).",
    )
    http_throttle_seconds: float = Field(
        default=1.0,
        validation_alias=AliasChoices(
            "http_throttle_seconds",
            AliasPath("http", "throttle_seconds"),
        ),
        description="Fixed delay after every completed request.",
    )

    # Upstream provider (YAML section: provider.*)
    provider: ProviderConfig = Field(default_factory=ProviderConfig)

    # Diagnostics (YAML section: diagnostics.*)
    diagnostics_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "diagnostics_enabled",
            AliasPath("diagnostics", "enabled"),
        ),
        description="Dump undecodable payloads for manual inspection.",
    )
    diagnostics_dir: Path = Field(
        default=Path("./content"),
        validation_alias=AliasChoices(
            "diagnostics_dir",
            AliasPath("diagnostics", "dir"),
        ),
        description="Output directory for {n}.js / {n}.html artifacts.",
    )
    diagnostics_counter_file: str = Field(
        default="counter.txt",
        validation_alias=AliasChoices(
            "diagnostics_counter_file",
            AliasPath("diagnostics", "counter_file"),
        ),
        description="Counter file name, relative to diagnostics_dir.",
    )

    # Player (YAML section: player.*)
    player: PlayerConfig = Field(default_factory=PlayerConfig)

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("diagnostics_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Path:
        return _normalize_path(v)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("http_throttle_seconds")
    @classmethod
    def _validate_throttle(cls, v: float) -> float:
        if v < 0:
            raise ValueError("http_throttle_seconds must be >= 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    @property
    def counter_path(self) -> Path:
        return self.diagnostics_dir / self.diagnostics_counter_file

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
                "accept_language": self.http_accept_language,
                "throttle_seconds": self.http_throttle_seconds,
            },
            "provider": self.provider.model_dump(),
            "diagnostics": {
                "enabled": self.diagnostics_enabled,
                "dir": str(self.diagnostics_dir),
                "counter_file": self.diagnostics_counter_file,
            },
            "player": self.player.model_dump(),
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read KINORESOLVE_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - KINORESOLVE_HTTP_TIMEOUT_SECONDS
    - KINORESOLVE_HTTP_THROTTLE_SECONDS
    - KINORESOLVE_DIAGNOSTICS_DIR
    - KINORESOLVE_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="KINORESOLVE_",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None
    http_accept_language: Optional[str] = None
    http_throttle_seconds: Optional[float] = None

    diagnostics_enabled: Optional[bool] = None
    diagnostics_dir: Optional[Path] = None
    diagnostics_counter_file: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    @field_validator("diagnostics_dir", mode="before")
    @classmethod
    def _validate_paths(cls, v: Any) -> Any:
        if v is None:
            return None
        return _normalize_path(v)

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
