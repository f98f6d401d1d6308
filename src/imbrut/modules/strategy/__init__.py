"""Request pacing."""

from .driver import RunOutcome, RunResult, Strategy, TransportFailure
from .plan import CheckBatch, DrainAll, PacingStep, Sleep, parse_plan

__all__ = [
    "CheckBatch",
    "DrainAll",
    "PacingStep",
    "RunOutcome",
    "RunResult",
    "Sleep",
    "Strategy",
    "TransportFailure",
    "parse_plan",
]
