"""Global configuration for framedump.

Manages default settings for the serializer and the command line tool.
Settings can be overridden via environment variables or explicit configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class FrameDumpConfig:
    """Top-level configuration for framedump."""

    # Logging
    log_level: str = "WARNING"

    # Serializer
    hex_window_ids: bool = True

    # CLI output
    color: bool = True

    @classmethod
    def from_env(cls) -> FrameDumpConfig:
        """Build config from environment variables, falling back to defaults."""
        config = cls()

        if val := os.environ.get("FRAMEDUMP_LOG_LEVEL"):
            config.log_level = val.upper()
        if val := os.environ.get("FRAMEDUMP_HEX_WINDOW_IDS"):
            config.hex_window_ids = _parse_bool("FRAMEDUMP_HEX_WINDOW_IDS", val)
        if val := os.environ.get("FRAMEDUMP_COLOR"):
            config.color = _parse_bool("FRAMEDUMP_COLOR", val)

        return config


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")


# Module-level singleton
_config: FrameDumpConfig | None = None


def get_config() -> FrameDumpConfig:
    """Return the global framedump config, lazily initialized from env."""
    global _config
    if _config is None:
        _config = FrameDumpConfig.from_env()
    return _config


def set_config(config: FrameDumpConfig | None) -> None:
    """Override the global config (useful in tests); ``None`` resets it."""
    global _config
    _config = config
