"""Run settings built from the config file and environment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from imbrut.errors import ConfigurationError
from imbrut.modules.proto.http import ProtocolTarget
from imbrut.modules.strategy import PacingStep, parse_plan

from .env_loader import get_config, load_config_file

logger = logging.getLogger(__name__)

PROTOCOLS = ("http",)
DICT_TYPES = ("file", "generator", "combo")


@dataclass(frozen=True)
class Settings:
    """Everything a run needs, validated before any request is sent."""

    proto: str
    dict_type: str
    target: ProtocolTarget
    usernames_file: Path
    passwords_file: Path
    credentials_file: Path
    strategy: tuple[PacingStep, ...] = ()
    password_length: int = 0
    allowed_chars: tuple[str, ...] = ()
    usernames: tuple[str, ...] | None = None
    max_transport_errors: int | None = None


def _lower(value: Any, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigurationError(f"'{name}' must be a string")
    return value.strip().lower()


def _parse_dict_props(raw: Any, dict_type: str) -> tuple[int, tuple[str, ...]]:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError("'dict_props' must be a mapping")
    if dict_type != "generator":
        return 0, ()

    length = raw.get("password_length")
    if isinstance(length, bool) or not isinstance(length, int) or length < 0:
        raise ConfigurationError("dict_props.password_length must be a non-negative integer")
    chars = raw.get("allowed_chars")
    if isinstance(chars, str):
        chars = [chars]
    if not isinstance(chars, list) or not chars:
        raise ConfigurationError("dict_props.allowed_chars must be a non-empty list of strings")
    return length, tuple(str(c) for c in chars)


def _parse_usernames(raw: Any) -> tuple[str, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ConfigurationError("'usernames' must be a list of strings")
    return tuple(str(u) for u in raw)


def _parse_error_limit(raw: Any) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise ConfigurationError("'max_transport_errors' must be a non-negative integer")
    return raw


def build_settings(data: dict[str, Any]) -> Settings:
    """Validate a parsed config mapping."""
    proto = _lower(data.get("proto"), "proto", "http")
    if proto not in PROTOCOLS:
        raise ConfigurationError(f"Unsupported protocol: {proto}")

    dict_type = _lower(data.get("dict_type"), "dict_type", "file")
    if dict_type not in DICT_TYPES:
        raise ConfigurationError(f"Unsupported password source type: {dict_type}")

    if "target" not in data:
        raise ConfigurationError("Missing 'target' section")
    target = ProtocolTarget.from_config(data["target"])

    password_length, allowed_chars = _parse_dict_props(data.get("dict_props"), dict_type)

    return Settings(
        proto=proto,
        dict_type=dict_type,
        target=target,
        usernames_file=Path(get_config("IMBRUT_USERNAMES_FILE", data, "usernames_file", "usernames.txt")),
        passwords_file=Path(get_config("IMBRUT_PASSWORDS_FILE", data, "passwords_file", "passwords.txt")),
        credentials_file=Path(
            get_config("IMBRUT_CREDENTIALS_FILE", data, "credentials_file", "credentials.txt")
        ),
        strategy=tuple(parse_plan(data.get("strategy"))),
        password_length=password_length,
        allowed_chars=allowed_chars,
        usernames=_parse_usernames(data.get("usernames")),
        max_transport_errors=_parse_error_limit(data.get("max_transport_errors")),
    )


def load_settings(config_path: Path) -> Settings:
    """Load and validate settings from a YAML file."""
    logger.debug("Loading config from %s", config_path)
    return build_settings(load_config_file(config_path))
