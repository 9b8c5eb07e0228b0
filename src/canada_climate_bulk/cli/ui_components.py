"""CLI UI components (Rich).

Why separate components:
- Keeps command functions free of presentation details.
- The progress bar implements `ProgressReporter`, so the fetch loop never
  imports Rich.
"""

from __future__ import annotations

from typing import Iterable

import typer
from pydantic import ValidationError
from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from canada_climate_bulk.core.config import AppSettings
from canada_climate_bulk.core.domain.models import FetchOutcome, FetchTarget, RunConfig, RunResult


def load_settings(console: Console) -> AppSettings:
    """Read settings; invalid `CLIMATE_BULK_*` values exit with the config-error code."""

    try:
        return AppSettings()
    except ValidationError as exc:
        console.print(f"[red]Invalid settings:[/red] {escape(str(exc))}", soft_wrap=True)
        raise typer.Exit(code=2) from None


def print_banner(console: Console, config: RunConfig) -> None:
    title = Text("canada-climate-bulk", style="bold cyan")
    subtitle = Text(
        f"Station {config.station_id} • {config.timeframe.label()} • "
        f"{config.start_year}-{config.end_year}",
        style="dim",
    )
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(0, 4)))


class RichProgressReporter:
    """`ProgressReporter` backed by a Rich progress bar."""

    def __init__(self, console: Console) -> None:
        self._progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=False,
        )
        self._task: TaskID | None = None

    def start(self, total: int) -> None:
        self._task = self._progress.add_task("Downloading", total=total)
        self._progress.start()

    def advance(self) -> None:
        if self._task is not None:
            self._progress.advance(self._task)

    def describe(self, outcome: FetchOutcome) -> None:
        """Show the month just processed next to the bar."""

        if self._task is not None:
            target = outcome.target
            self._progress.update(self._task, description=f"{target.year}-{target.month:02d}")

    def finish(self) -> None:
        self._progress.stop()


def build_plan_table(targets: Iterable[FetchTarget]) -> Table:
    """Table of the requests a run would make (`--dry-run`)."""

    table = Table(title="Planned downloads")
    table.add_column("Year", style="cyan", no_wrap=True)
    table.add_column("Month", style="cyan", no_wrap=True)
    table.add_column("File", style="white")
    table.add_column("URL", style="magenta", overflow="fold")
    for target in targets:
        table.add_row(str(target.year), str(target.month), str(target.path), target.url)
    return table


def build_summary_table(result: RunResult) -> Table:
    table = Table(title="Run summary")
    table.add_column("Status", style="bright_green", no_wrap=True)
    table.add_column("Attempts", style="white")
    table.add_column("Saved", style="green")
    table.add_column("Skipped", style="yellow")
    table.add_row(result.status.value, str(result.attempts), str(result.saved), str(result.skipped))
    return table
