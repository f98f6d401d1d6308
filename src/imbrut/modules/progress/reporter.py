"""Progress reporting for a credential run."""

from __future__ import annotations

from typing import Any, Protocol

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)


class ProgressReporter(Protocol):
    """Receives run events from the pacing driver."""

    def start(self, total: int) -> None: ...

    def advance(self, index: int, credential: Any) -> None: ...

    def finish(self, credential: Any | None) -> None: ...


class NullReporter:
    """Reporter that ignores every event."""

    def start(self, total: int) -> None:
        pass

    def advance(self, index: int, credential: Any) -> None:
        pass

    def finish(self, credential: Any | None) -> None:
        pass


class RichProgressReporter:
    """Progress bar with the credential currently being tried."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.progress = Progress(
            SpinnerColumn(style="green"),
            TimeElapsedColumn(),
            TaskProgressColumn(),
            BarColumn(bar_width=50),
            MofNCompleteColumn(),
            TextColumn("| ETA:"),
            TimeRemainingColumn(),
            TextColumn("| {task.description}"),
            console=self.console,
            transient=False,
        )
        self._task = None

    def start(self, total: int) -> None:
        self.progress.start()
        self._task = self.progress.add_task("starting", total=total)

    def advance(self, index: int, credential: Any) -> None:
        if self._task is None:
            return
        self.progress.update(self._task, advance=1, description=f"current: {credential}")

    def finish(self, credential: Any | None) -> None:
        if self._task is not None:
            # The verdict line is printed by the caller.
            self.progress.update(self._task, description="match" if credential is not None else "no match")
        self.progress.stop()
