"""Doctor command for environment diagnostics."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from canada_climate_bulk.adapters.http_client import build_settings_client
from canada_climate_bulk.cli.ui_components import load_settings
from canada_climate_bulk.core.config import AppSettings, get_user_env_file

_console = Console()


def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_settings_client(settings) as client:
            response = client.get(url)
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__
    return response.is_success, f"HTTP {response.status_code}"


def _check_directory(directory: Path) -> tuple[bool, str]:
    """Writable if it exists and is writable, or its nearest existing parent is."""

    candidate = directory.resolve()
    while not candidate.exists() and candidate != candidate.parent:
        candidate = candidate.parent

    if not candidate.is_dir():
        return False, f"{candidate} is not a directory"
    if not os.access(candidate, os.W_OK):
        return False, f"{candidate} is not writable"
    if candidate != directory.resolve():
        return True, f"will be created under {candidate}"
    return True, str(candidate)


def doctor(
    directory: Optional[Path] = typer.Option(
        None,
        "--directory",
        help="Output directory to check (defaults to the configured one).",
    ),
    offline: bool = typer.Option(False, "--offline", help="Skip the network check."),
) -> None:
    """Run baseline diagnostics (connectivity, output directory, settings)."""

    settings = load_settings(_console)
    directory = directory or settings.output_directory

    table = Table(title="canada-climate-bulk doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Settings
    table.add_row("Endpoint", "OK", settings.base_url)
    table.add_row("Connect timeout", "OK", f"{settings.http_connect_timeout_ms} ms")
    table.add_row("Receive timeout", "OK", f"{settings.http_receive_timeout_ms} ms")
    env_file = get_user_env_file()
    table.add_row("User .env", "FOUND" if env_file.exists() else "OPTIONAL", str(env_file))

    ok_dir, detail_dir = _check_directory(directory)
    table.add_row("Output directory", "OK" if ok_dir else "FAIL", detail_dir)

    ok_http = True
    if offline:
        table.add_row("HTTP connectivity", "SKIPPED", "--offline")
    else:
        ok_http, detail_http = _check_http(settings.base_url, settings)
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not (ok_dir and ok_http):
        raise typer.Exit(code=1)
