"""Request and file-name construction for each (year, month) pair.

All functions here are pure: the same inputs always give the same URL
and path, which is what makes a run reproducible without a network.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from canada_climate_bulk.core.config import BULK_DATA_URL
from canada_climate_bulk.core.domain.models import MONTHS_PER_YEAR, FetchTarget, RunConfig

_QUERY_TEMPLATE = (
    "{base}?format=csv&stationID={station}"
    "&Year={year}&Month={month}&Day=1&time=UTC"
    "&timeframe={timeframe}&submit=%20Download+Data"
)


def build_target_url(
    station_id: str,
    year: int,
    month: int,
    timeframe_code: str,
    *,
    base_url: str = BULK_DATA_URL,
) -> str:
    return _QUERY_TEMPLATE.format(
        base=base_url,
        station=station_id,
        year=year,
        month=month,
        timeframe=timeframe_code,
    )


def build_destination_path(
    directory: Path | str,
    station_id: str,
    timeframe_code: str,
    year: int,
    month: int,
) -> Path:
    """`{directory}/{station}_{code}_{year}-{month}.csv`, no zero padding."""

    return Path(directory) / f"{station_id}_{timeframe_code}_{year}-{month}.csv"


def iter_months(start_year: int, end_year: int) -> Iterator[tuple[int, int]]:
    """Year-major iteration over every month of the inclusive range."""

    for year in range(start_year, end_year + 1):
        for month in range(1, MONTHS_PER_YEAR + 1):
            yield year, month


def iter_targets(config: RunConfig) -> Iterator[FetchTarget]:
    code = config.timeframe_code
    for year, month in iter_months(config.start_year, config.end_year):
        yield FetchTarget(
            year=year,
            month=month,
            url=build_target_url(config.station_id, year, month, code, base_url=config.base_url),
            path=build_destination_path(config.output_directory, config.station_id, code, year, month),
        )
