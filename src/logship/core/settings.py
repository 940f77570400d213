"""Centralized settings for logship.

Manifesto:
    One validated, cached settings object replaces ad-hoc environment
    parsing in each module.  Every field can be set through a
    ``LOGSHIP_*`` environment variable or a ``.env`` file.

Examples:
    >>> from logship.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.intake_url
    'http://localhost:10518/v1/input'

Tags:
    logship, configuration, settings, pydantic, caching, validation

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_tags(raw: str) -> dict[str, str]:
    """Parse ``"env:prod,team:data"`` into ``{"env": "prod", "team": "data"}``.

    Entries without a colon become tags with an empty value.
    """
    tags: dict[str, str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        key, _, value = item.partition(":")
        tags[key.strip()] = value.strip()
    return tags


class LogShipSettings(BaseSettings):
    """logship configuration.

    Fields
    ──────
    intake_url       : HTTP endpoint that receives log batches
    api_key          : API key sent with every request (optional)
    api_key_header   : Header name carrying the API key
    service          : Service name attached to every log entry
    source           : Source name attached to every log entry
    host_url         : Root URL of the service hosting the builds
    global_tags      : Tags added to every build ("key:value,key:value")
    encoding         : Encoding of build logs and diagnostics
    max_lines        : Default number of log lines to ship (-1 = all)
    max_batch_lines  : Maximum entries per HTTP request
    request_timeout  : HTTP timeout in seconds
    log_level        : structlog log level
    log_format       : json | console
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGSHIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Intake ───────────────────────────────────────────────────
    intake_url: str = Field(default="http://localhost:10518/v1/input")
    api_key: SecretStr | None = Field(default=None)
    api_key_header: str = Field(default="X-API-Key")
    request_timeout: float = Field(default=10.0)
    max_batch_lines: int = Field(default=1000)

    # ── Entry attributes ─────────────────────────────────────────
    service: str = Field(default="build")
    source: str = Field(default="ci")
    host_url: str = Field(default="")
    global_tags: str = Field(default="", description="Comma-separated key:value tags")

    # ── Build log ────────────────────────────────────────────────
    encoding: str = Field(default="utf-8")
    max_lines: int = Field(default=-1, description="Lines to ship per build; negative ships everything")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    @field_validator("max_batch_lines")
    @classmethod
    def _positive_batch(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("max_batch_lines must be positive")
        return value

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout must be positive")
        return value

    @property
    def parsed_global_tags(self) -> dict[str, str]:
        return parse_tags(self.global_tags)


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, LogShipSettings] = {}


def get_settings(*, _force_reload: bool = False) -> LogShipSettings:
    """Load, validate, and cache a :class:`LogShipSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = LogShipSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop the cached settings (mainly for tests)."""
    _settings_cache.clear()


__all__ = [
    "LogShipSettings",
    "get_settings",
    "clear_settings_cache",
    "parse_tags",
]
