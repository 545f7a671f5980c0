"""Configuration management for timeq."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from timeq.core.errors import ConfigurationError

load_dotenv()

DEFAULT_CONFIG_PATH = Path.home() / ".timeq" / "config.yaml"
LOCAL_CONFIG_FILENAME = "timeq.yaml"
UTC_OFFSET_ENV = "TIMEQ_UTC_USES_LOCAL_OFFSET"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Effective settings for one invocation."""
    utc_uses_local_offset: bool = True
    source: Optional[Path] = None


def get_config_path() -> Path:
    """Get the config file path (local takes precedence)."""
    local_path = Path.cwd() / LOCAL_CONFIG_FILENAME
    if local_path.exists():
        return local_path
    return DEFAULT_CONFIG_PATH


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "readable": {
            # --output UTC renders with the current local offset
            "utc_uses_local_offset": True,
        },
    }


def load_config(config_path: Optional[Path] = None) -> dict[str, Any]:
    """Load configuration from YAML file, merged over the defaults."""
    config_path = config_path or get_config_path()
    config = get_default_config()

    if not config_path.exists():
        return config

    try:
        with open(config_path) as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping")

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section] = {**config[section], **values}
        else:
            config[section] = values
    return config


def parse_bool(value: Any, name: str) -> bool:
    """Interpret a YAML or environment value as a boolean."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got '{value}'")


def get_settings(config_path: Optional[Path] = None) -> Settings:
    """Build settings from the config file and environment overrides."""
    path = config_path or get_config_path()
    config = load_config(path)

    readable = config.get("readable") or {}
    if not isinstance(readable, dict):
        raise ConfigurationError("'readable' section must be a mapping")

    utc_uses_local_offset = parse_bool(
        readable.get("utc_uses_local_offset", True), "readable.utc_uses_local_offset"
    )
    env_value = os.getenv(UTC_OFFSET_ENV)
    if env_value:
        utc_uses_local_offset = parse_bool(env_value, UTC_OFFSET_ENV)

    return Settings(
        utc_uses_local_offset=utc_uses_local_offset,
        source=path if path.exists() else None,
    )
