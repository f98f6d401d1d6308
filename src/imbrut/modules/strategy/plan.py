"""Pacing plan steps."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from imbrut.errors import ConfigurationError


@dataclass(frozen=True)
class Sleep:
    """Pause for ``duration_ms`` milliseconds without checking anything."""

    duration_ms: int

    @property
    def seconds(self) -> float:
        return self.duration_ms / 1000


@dataclass(frozen=True)
class CheckBatch:
    """Check up to ``size`` consecutive credentials."""

    size: int


@dataclass(frozen=True)
class DrainAll:
    """Check every remaining credential with no pacing."""


PacingStep = Union[Sleep, CheckBatch, DrainAll]

STEP_KINDS = ("requests", "sleep")


def _pairs(raw: Iterable[Any]) -> Iterable[tuple[str, Any]]:
    for item in raw:
        if isinstance(item, Mapping):
            if len(item) != 1:
                raise ConfigurationError(f"Each strategy step must have exactly one key, got {dict(item)!r}")
            yield next(iter(item.items()))
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            yield item[0], item[1]
        else:
            raise ConfigurationError(f"Invalid strategy step: {item!r}")


def parse_plan(raw: Iterable[Any] | None) -> list[PacingStep]:
    """Build pacing steps from ``[(kind, value), ...]`` or ``[{kind: value}, ...]``.

    An empty plan drains the whole stream in one step.
    """
    if not raw:
        return [DrainAll()]
    if isinstance(raw, (str, Mapping)):
        raise ConfigurationError("strategy must be a list of steps")

    steps: list[PacingStep] = []
    for kind, value in _pairs(raw):
        key = str(kind).lower()
        if key not in STEP_KINDS:
            raise ConfigurationError(f"Unsupported strategy key: {kind}")
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationError(f"Strategy value for {key!r} must be a non-negative integer, got {value!r}")
        if key == "requests":
            if value == 0:
                raise ConfigurationError("A 'requests' step must check at least one credential")
            steps.append(CheckBatch(value))
        else:
            steps.append(Sleep(value))

    if not any(isinstance(step, CheckBatch) for step in steps):
        raise ConfigurationError("strategy needs at least one 'requests' step")
    return steps
