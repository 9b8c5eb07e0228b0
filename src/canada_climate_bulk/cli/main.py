"""Typer application.

The CLI owns everything user-facing: option parsing, console output and
exit codes. The fetch loop itself lives in `core.services.bulk_fetch`.

Exit codes:
- 0: every month processed (transient skips included).
- 1: run aborted by the server, HTTP error status, or local write failure.
- 2: invalid configuration; nothing was requested.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from canada_climate_bulk.cli.doctor import doctor
from canada_climate_bulk.cli.logging_setup import configure_logging
from canada_climate_bulk.cli.ui_components import (
    RichProgressReporter,
    build_plan_table,
    build_summary_table,
    load_settings,
    print_banner,
)
from canada_climate_bulk.core.domain.models import RunConfig
from canada_climate_bulk.core.errors import ConfigError, LocalWriteError, ServerStatusError
from canada_climate_bulk.core.interfaces.progress import NullProgress, ProgressReporter
from canada_climate_bulk.core.services.bulk_fetch import FetchHooks, run_bulk_fetch
from canada_climate_bulk.core.targets import iter_targets

app = typer.Typer(
    no_args_is_help=True,
    help="Bulk downloads CSV data from Climate Services Canada. Will iterate over all months.",
)
app.command(name="doctor")(doctor)

_console = Console()


@app.command()
def download(
    start_year: int = typer.Option(..., "--start-year", help="First year (inclusive) to download data for"),
    end_year: int = typer.Option(..., "--end-year", help="Last year (inclusive) to download data for"),
    station: str = typer.Option(..., "--station", help="Station ID to bulk download for"),
    timeframe: str = typer.Option(..., "--timeframe", help="Timeframe: hour, day, month"),
    http_connect_timeout: Optional[int] = typer.Option(
        None,
        "--http-connect-timeout",
        help="HTTP connection timeout in ms [default: 12000]. Note that datamart does not use compression and has large response sizes.",
    ),
    http_receive_timeout: Optional[int] = typer.Option(
        None,
        "--http-receive-timeout",
        help="HTTP receive timeout in ms [default: 12000]. Note that datamart does not use compression and has large response sizes.",
    ),
    directory: Optional[Path] = typer.Option(
        None,
        "--directory",
        help="The directory the bulk downloaded files should be saved to [default: .]",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="List the planned requests without downloading."),
    no_progress: bool = typer.Option(False, "--no-progress", help="Disable the progress bar."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging (one line per request)."),
) -> None:
    """Download every month of the year range for one station."""

    configure_logging(_console, verbose=verbose)
    settings = load_settings(_console)

    try:
        config = RunConfig.from_cli(
            station=station,
            start_year=start_year,
            end_year=end_year,
            timeframe=timeframe,
            directory=directory if directory is not None else settings.output_directory,
            http_connect_timeout_ms=(
                http_connect_timeout if http_connect_timeout is not None else settings.http_connect_timeout_ms
            ),
            http_receive_timeout_ms=(
                http_receive_timeout if http_receive_timeout is not None else settings.http_receive_timeout_ms
            ),
            base_url=settings.base_url,
        )
    except ConfigError as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]", soft_wrap=True)
        raise typer.Exit(code=2) from None

    if dry_run:
        _console.print(build_plan_table(iter_targets(config)))
        _console.print(f"{config.total_targets} requests planned.")
        return

    print_banner(_console, config)

    reporter: ProgressReporter
    hooks = FetchHooks()
    if no_progress:
        reporter = NullProgress()
    else:
        rich_reporter = RichProgressReporter(_console)
        hooks.on_outcome = rich_reporter.describe
        reporter = rich_reporter

    try:
        result = run_bulk_fetch(config, settings=settings, reporter=reporter, hooks=hooks)
    except ServerStatusError as exc:
        _console.print(repr(exc.reason), markup=False, soft_wrap=True)
        _console.print(repr(exc.url), markup=False, soft_wrap=True)
        _console.print(f"[red]{escape(str(exc))}[/red]", highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from None
    except LocalWriteError as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]", highlight=False, soft_wrap=True)
        raise typer.Exit(code=1) from None

    if not result.completed:
        _console.print(f"[yellow]{escape(result.reason or 'Run aborted.')}[/yellow]", soft_wrap=True)
        _console.print(build_summary_table(result))
        raise typer.Exit(code=1)

    _console.print(build_summary_table(result))
    _console.print("Done.")


def run() -> None:
    app()
