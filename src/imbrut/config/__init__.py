"""
Configuration management for imbrut.

Supports configuration sources in order of priority:
1. Environment variables (IMBRUT_CONFIG, IMBRUT_*_FILE, IMBRUT_VERBOSE)
2. YAML config file (config.yml by default)
3. Default values
"""

from .env_loader import (
    get_config,
    is_verbose,
    load_config_file,
    resolve_config_path,
)
from .settings import DICT_TYPES, PROTOCOLS, Settings, build_settings, load_settings

__all__ = [
    # env_loader
    "get_config",
    "is_verbose",
    "load_config_file",
    "resolve_config_path",
    # settings
    "DICT_TYPES",
    "PROTOCOLS",
    "Settings",
    "build_settings",
    "load_settings",
]
