"""Credential data models."""

from __future__ import annotations

from typing import NamedTuple


class Credential(NamedTuple):
    """One username/password candidate."""

    username: str
    password: str

    def __str__(self) -> str:
        return f"{self.username}:{self.password}"
