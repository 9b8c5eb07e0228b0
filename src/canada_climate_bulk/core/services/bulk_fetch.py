"""Bulk fetch loop.

Walks every (year, month) pair of the configured range, one blocking GET
at a time, and decides for each response whether to save it, skip it or
stop the run:

- 2xx + `application/*` content type: body streamed to disk, one tick.
- 2xx + anything else: the server served an error page; the run stops
  (`RunStatus.ABORTED`) and nothing is written for that month.
- non-2xx: `ServerStatusError` propagates; the caller treats it as fatal.
- transport failure (connect, DNS, timeout, reset): logged, month skipped.
- local write failure: `LocalWriteError` propagates.

Printing and progress bars stay outside; the CLI plugs them in through
`ProgressReporter` and `FetchHooks`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import httpx

from canada_climate_bulk.adapters.file_writer import ensure_directory, remove_partial, write_chunks
from canada_climate_bulk.adapters.http_client import build_client, is_data_content_type
from canada_climate_bulk.core.config import AppSettings
from canada_climate_bulk.core.domain.models import (
    FetchOutcome,
    FetchStatus,
    FetchTarget,
    RunConfig,
    RunResult,
    RunStatus,
)
from canada_climate_bulk.core.errors import (
    ServerStatusError,
    TransientTransportError,
    UnexpectedContentTypeError,
)
from canada_climate_bulk.core.interfaces.progress import NullProgress, ProgressReporter
from canada_climate_bulk.core.targets import iter_targets

logger = logging.getLogger(__name__)


@dataclass
class FetchHooks:
    """Optional callbacks for UI layers."""

    on_outcome: Callable[[FetchOutcome], None] | None = None


def fetch_target(client: httpx.Client, target: FetchTarget) -> FetchOutcome:
    """Fetch one month and persist it.

    Raises `ServerStatusError` on a non-2xx status and `LocalWriteError`
    when the file cannot be written.
    """

    logger.debug("GET %s", target.url)
    try:
        with client.stream("GET", target.url) as response:
            if not response.is_success:
                raise ServerStatusError(target.url, response.status_code, response.reason_phrase)

            content_type = response.headers.get("Content-Type")
            if not is_data_content_type(content_type):
                error = UnexpectedContentTypeError(target.url, content_type)
                return FetchOutcome(target=target, status=FetchStatus.ABORT_RUN, detail=str(error))

            try:
                written = write_chunks(target.path, response.iter_bytes())
            except httpx.RequestError:
                remove_partial(target.path)
                raise
    except httpx.RequestError as exc:
        error = TransientTransportError(target.url, exc)
        logger.warning("%s", error)
        return FetchOutcome(target=target, status=FetchStatus.SKIPPED_TRANSIENT, detail=str(error))

    logger.debug("Saved %s (%d bytes)", target.path, written)
    return FetchOutcome(target=target, status=FetchStatus.SAVED, bytes_written=written)


def _summarise(status: RunStatus, outcomes: list[FetchOutcome], reason: str | None = None) -> RunResult:
    return RunResult(
        status=status,
        reason=reason,
        attempts=len(outcomes),
        saved=sum(1 for o in outcomes if o.status is FetchStatus.SAVED),
        skipped=sum(1 for o in outcomes if o.status is FetchStatus.SKIPPED_TRANSIENT),
        outcomes=outcomes,
    )


def run_bulk_fetch(
    config: RunConfig,
    *,
    client: httpx.Client | None = None,
    settings: AppSettings | None = None,
    reporter: ProgressReporter | None = None,
    hooks: FetchHooks | None = None,
) -> RunResult:
    """Run the whole loop for `config`.

    A client passed in is left open; one built here is closed on exit.
    """

    reporter = reporter or NullProgress()
    hooks = hooks or FetchHooks()

    ensure_directory(config.output_directory)

    owns_client = client is None
    if client is None:
        client = build_client(config, settings)

    logger.info(
        "Downloading %s data for station %s, %d-%d (%d files)",
        config.timeframe.label().lower(),
        config.station_id,
        config.start_year,
        config.end_year,
        config.total_targets,
    )

    outcomes: list[FetchOutcome] = []
    reporter.start(config.total_targets)
    try:
        for target in iter_targets(config):
            outcome = fetch_target(client, target)
            outcomes.append(outcome)
            if hooks.on_outcome:
                hooks.on_outcome(outcome)

            if outcome.status is FetchStatus.SAVED:
                reporter.advance()
            elif outcome.status is FetchStatus.ABORT_RUN:
                logger.debug("Stopping after %s-%s: %s", target.year, target.month, outcome.detail)
                return _summarise(RunStatus.ABORTED, outcomes, reason=outcome.detail)
    finally:
        reporter.finish()
        if owns_client:
            client.close()

    return _summarise(RunStatus.COMPLETED, outcomes)
