"""Configuration file loading and environment overrides."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from imbrut.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yml"

TRUTHY = {"1", "true", "yes", "on"}


def resolve_config_path(cli_path: Path | None = None) -> Path:
    """Return the config file path: the CLI option, then IMBRUT_CONFIG, then ./config.yml."""
    env_path = os.environ.get("IMBRUT_CONFIG", "").strip()
    if cli_path is not None:
        if env_path:
            logger.warning("Ignoring IMBRUT_CONFIG=%s in favour of --config %s", env_path, cli_path)
        return Path(cli_path)
    if env_path:
        return Path(env_path)
    return Path(DEFAULT_CONFIG_FILE)


def load_config_file(config_path: Path) -> dict[str, Any]:
    """Load the YAML configuration file."""
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot read config file {config_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    return data


def get_config(key: str, file_config: dict[str, Any], file_key: str, default: Any = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Config file
    3. Default value
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value
    if file_config.get(file_key) is not None:
        return file_config[file_key]
    return default


def is_verbose() -> bool:
    """Return True when IMBRUT_VERBOSE asks for debug output."""
    return os.environ.get("IMBRUT_VERBOSE", "").strip().lower() in TRUTHY
