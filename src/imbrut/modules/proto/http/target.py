"""HTTP target configuration."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from imbrut.errors import ConfigurationError

logger = logging.getLogger(__name__)

AUTH_TYPES = ("form", "basic")

_METHOD_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

# Older config files spell these keys "containes".
_LEGACY_KEYS = {
    "success_if_containes": "success_if_contains",
    "fail_if_containes": "fail_if_contains",
}


@dataclass(frozen=True)
class ProtocolTarget:
    """One HTTP endpoint and the rules that classify its responses."""

    uri: str
    method: str = "POST"
    headers: dict[str, str] = field(default_factory=dict)
    auth_type: str = "form"
    success_codes: frozenset[int] = frozenset({200})
    success_if_contains: tuple[str, ...] = ()
    fail_if_contains: tuple[str, ...] = ()
    username_field: str = "username"
    password_field: str = "password"
    accept_when_unmatched: bool = False
    timeout: float = 30.0
    verify_ssl: bool = True
    follow_redirects: bool = False

    @classmethod
    def from_config(cls, raw: Mapping[str, Any] | None) -> ProtocolTarget:
        """Validate a ``target`` table from the configuration file."""
        if not isinstance(raw, Mapping):
            raise ConfigurationError("'target' must be a mapping")
        data = dict(raw)
        for legacy, key in _LEGACY_KEYS.items():
            if legacy in data:
                data.setdefault(key, data.pop(legacy))

        uri = data.get("uri")
        if not uri or not isinstance(uri, str):
            raise ConfigurationError("target.uri is required")

        method = str(data.get("method") or "POST").upper()
        if not _METHOD_TOKEN.match(method):
            raise ConfigurationError(f"target.method is not a valid HTTP method: {method!r}")

        auth_type = str(data.get("auth_type") or "form").lower()
        if auth_type not in AUTH_TYPES:
            raise ConfigurationError(
                f"Unsupported authentication type: {auth_type} (expected one of {', '.join(AUTH_TYPES)})"
            )

        target = cls(
            uri=uri,
            method=method,
            headers=_parse_headers(data.get("headers")),
            auth_type=auth_type,
            success_codes=_parse_codes(data.get("success_codes", [200])),
            success_if_contains=_parse_strings("success_if_contains", data.get("success_if_contains")),
            fail_if_contains=_parse_strings("fail_if_contains", data.get("fail_if_contains")),
            username_field=str(data.get("username_field") or "username"),
            password_field=str(data.get("password_field") or "password"),
            accept_when_unmatched=_parse_flag("accept_when_unmatched", data.get("accept_when_unmatched"), False),
            timeout=_parse_timeout(data.get("timeout", 30.0)),
            verify_ssl=_parse_flag("verify_ssl", data.get("verify_ssl"), True),
            follow_redirects=_parse_flag("follow_redirects", data.get("follow_redirects"), False),
        )
        if not target.success_if_contains and not target.accept_when_unmatched:
            logger.warning(
                "target.success_if_contains is empty and accept_when_unmatched is off; "
                "no response will ever be accepted"
            )
        return target


def _parse_headers(raw: Any) -> dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigurationError("target.headers must be a mapping")
    headers: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(key, str) or not key.strip():
            raise ConfigurationError(f"Invalid header name: {key!r}")
        if isinstance(value, (Mapping, list)):
            raise ConfigurationError(f"Header {key!r} must have a scalar value")
        text = str(value)
        if "\n" in text or "\r" in text:
            raise ConfigurationError(f"Header {key!r} contains a line break")
        try:
            key.encode("ascii")
            text.encode("ascii")
        except UnicodeEncodeError:
            raise ConfigurationError(f"Header {key!r} must be ASCII") from None
        headers[key] = text
    return headers


def _parse_codes(raw: Any) -> frozenset[int]:
    if not isinstance(raw, list):
        raise ConfigurationError("target.success_codes must be a list of status codes")
    codes: set[int] = set()
    for value in raw:
        if isinstance(value, bool) or not isinstance(value, int) or not 100 <= value <= 599:
            raise ConfigurationError(f"Invalid HTTP status code in success_codes: {value!r}")
        codes.add(value)
    return frozenset(codes)


def _parse_strings(name: str, raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise ConfigurationError(f"target.{name} must be a list of strings")
    markers: list[str] = []
    for item in raw:
        if item is None or isinstance(item, (Mapping, list)) or str(item) == "":
            raise ConfigurationError(f"target.{name} items must be non-empty strings, got {item!r}")
        markers.append(str(item))
    return tuple(markers)


def _parse_flag(name: str, raw: Any, default: bool) -> bool:
    if raw is None:
        return default
    if not isinstance(raw, bool):
        raise ConfigurationError(f"target.{name} must be true or false, got {raw!r}")
    return raw


def _parse_timeout(raw: Any) -> float:
    try:
        timeout = float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"target.timeout must be a number, got {raw!r}") from None
    if timeout <= 0:
        raise ConfigurationError("target.timeout must be positive")
    return timeout
