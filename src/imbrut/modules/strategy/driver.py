"""Pacing driver: interleaves credential checks with sleeps."""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from imbrut.errors import TooManyTransportErrors, TransportError
from imbrut.modules.progress import NullReporter, ProgressReporter
from imbrut.modules.proto import CheckOutcome, DynProto, ErasedCredential

from .plan import CheckBatch, DrainAll, PacingStep, Sleep

logger = logging.getLogger(__name__)

_DONE = object()


class RunOutcome(str, Enum):
    MATCH = "match"
    EXHAUSTED = "exhausted"


@dataclass
class TransportFailure:
    """A check that could not be completed."""

    index: int
    credential: Any
    message: str


@dataclass
class RunResult:
    """Final state of a run."""

    outcome: RunOutcome
    credential: Any | None = None
    checked: int = 0
    errors: list[TransportFailure] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.outcome is RunOutcome.MATCH


class _Cursor:
    """Forward-only cursor over indexed credentials with one item of look-ahead."""

    def __init__(self, items: Iterator[tuple[int, ErasedCredential]]):
        self._items = items
        self._pending: Any = None

    def next(self) -> Any:
        if self._pending is not None:
            item, self._pending = self._pending, None
            return item
        return next(self._items, _DONE)

    def exhausted(self) -> bool:
        if self._pending is None:
            self._pending = next(self._items, _DONE)
        return self._pending is _DONE


class Strategy:
    """Run a pacing plan over a protocol's credential stream.

    Steps are visited cyclically until a credential is accepted or the stream
    runs dry. All steps share one cursor, so no credential is checked twice.
    """

    def __init__(
        self,
        proto: DynProto,
        plan: list[PacingStep] | None = None,
        reporter: ProgressReporter | None = None,
        sleep: Callable[[float], None] = time.sleep,
        max_transport_errors: int | None = None,
    ):
        self.proto = proto
        self.plan: list[PacingStep] = list(plan) if plan else [DrainAll()]
        self.reporter = reporter or NullReporter()
        self.sleep = sleep
        self.max_transport_errors = max_transport_errors

    def run(self) -> RunResult:
        total = self.proto.workload()
        logger.info("Workload: %d credentials, plan: %s", total, self.plan)
        self.reporter.start(total)

        cursor = _Cursor(enumerate(self.proto.get_credentials()))
        result = RunResult(outcome=RunOutcome.EXHAUSTED)
        try:
            for step in itertools.cycle(self.plan):
                outcome = self._visit(step, cursor, result)
                if outcome is not None:
                    result.outcome = outcome
                    break
        finally:
            self.reporter.finish(result.credential)

        if result.matched:
            logger.debug("Match after %d checks: %s", result.checked, result.credential)
        else:
            logger.debug("No match after %d checks", result.checked)
        return result

    def _visit(self, step: PacingStep, cursor: _Cursor, result: RunResult) -> RunOutcome | None:
        if isinstance(step, Sleep):
            logger.debug("Sleeping %d ms", step.duration_ms)
            self.sleep(step.seconds)
            return None

        if isinstance(step, CheckBatch):
            for _ in range(step.size):
                item = cursor.next()
                if item is _DONE:
                    return RunOutcome.EXHAUSTED
                if self._check(*item, result):
                    return RunOutcome.MATCH
            if cursor.exhausted():
                return RunOutcome.EXHAUSTED
            return None

        if isinstance(step, DrainAll):
            while (item := cursor.next()) is not _DONE:
                if self._check(*item, result):
                    return RunOutcome.MATCH
            return RunOutcome.EXHAUSTED

        raise TypeError(f"Unknown pacing step: {step!r}")

    def _check(self, index: int, creds: ErasedCredential, result: RunResult) -> bool:
        result.checked += 1
        try:
            outcome = self.proto.check(creds)
        except TransportError as exc:
            logger.warning("Check #%d (%s) failed: %s", index, creds, exc)
            result.errors.append(TransportFailure(index, creds.value, str(exc)))
            self.reporter.advance(index, creds.value)
            limit = self.max_transport_errors
            if limit is not None and len(result.errors) > limit:
                raise TooManyTransportErrors(
                    f"Aborting after {len(result.errors)} transport errors"
                ) from exc
            return False

        self.reporter.advance(index, creds.value)
        if outcome is CheckOutcome.ACCEPTED:
            result.credential = creds.value
            return True
        return False
