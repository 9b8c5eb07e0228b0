"""Progress reporting contract.

The fetch loop only emits ticks; how they are displayed (rich bar, log
lines, nothing) is up to the implementation passed in.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProgressReporter(Protocol):
    """Minimal contract for a progress display."""

    def start(self, total: int) -> None:
        """Called once before the first fetch with the number of targets."""

        ...

    def advance(self) -> None:
        """One file was saved."""

        ...

    def finish(self) -> None:
        """Called once when the loop ends, on every exit path."""

        ...


class NullProgress:
    """Reporter that only counts ticks."""

    def __init__(self) -> None:
        self.total = 0
        self.count = 0

    def start(self, total: int) -> None:
        self.total = total

    def advance(self) -> None:
        self.count += 1

    def finish(self) -> None:
        pass
