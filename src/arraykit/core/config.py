"""Configuration management.

Loads from an optional TOML config file + environment variables.
Uses pydantic-settings for validation and env var overriding
(``ARRAYKIT_PATH_SEPARATOR``, ``ARRAYKIT_JSON_OPTIONS__SORT_KEYS``, ...).

Containers read the process-wide instance returned by
:func:`get_settings`; tests and applications can install their own with
:func:`configure`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .errors import ConfigError


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class JsonConfig(BaseModel):
    ensure_ascii: bool = True
    sort_keys: bool = False


class ObservabilityConfig(BaseModel):
    log_level: str = "WARNING"
    log_format: str = "console"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level library settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    path_separator: str = "."  # Dotted-key separator used by KeyedMap

    json_options: JsonConfig = Field(default_factory=JsonConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {
        "env_prefix": "ARRAYKIT_",
        "env_nested_delimiter": "__",
    }

    def validate_settings(self) -> None:
        """Reject values the containers cannot work with."""
        if not self.path_separator:
            raise ConfigError("path_separator must be a non-empty string.")
        if self.observability.log_format not in ("json", "console"):
            raise ConfigError(
                f"Unknown log_format {self.observability.log_format!r}, "
                "expected 'json' or 'console'."
            )


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: The file is not valid TOML or a value is rejected.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            with open(path, "rb") as f:
                try:
                    data = tomli.load(f)
                except tomli.TOMLDecodeError as exc:
                    raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    if overrides:
        data.update(overrides)

    settings = Settings(**data)
    settings.validate_settings()
    return settings


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure(settings: Settings) -> None:
    """Install *settings* as the process-wide instance."""
    global _settings
    settings.validate_settings()
    _settings = settings


def reset_settings() -> None:
    """Drop the cached instance; the next get_settings() reloads from env."""
    global _settings
    _settings = None
