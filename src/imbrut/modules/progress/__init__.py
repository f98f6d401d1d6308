"""Progress reporters."""

from .reporter import NullReporter, ProgressReporter, RichProgressReporter

__all__ = ["NullReporter", "ProgressReporter", "RichProgressReporter"]
