"""Domain models (Pydantic v2).

Everything here lives for a single run only:
- `RunConfig` is built once from validated input and never re-derived.
- `FetchTarget` and `FetchOutcome` exist for one (year, month) iteration.
- `RunResult` summarises the run for the CLI.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic.config import ConfigDict

from canada_climate_bulk.core.config import BULK_DATA_URL
from canada_climate_bulk.core.domain.timeframe import Timeframe
from canada_climate_bulk.core.errors import ConfigError

MONTHS_PER_YEAR = 12

# Would escape the output directory or break the query string.
_STATION_FORBIDDEN = frozenset("/\\#?&")

# Field name -> CLI option, for error messages.
_OPTION_NAMES = {
    "station_id": "station",
    "start_year": "start-year",
    "end_year": "end-year",
    "timeframe": "timeframe",
    "output_directory": "directory",
    "connect_timeout": "http-connect-timeout",
    "receive_timeout": "http-receive-timeout",
    "base_url": "base-url",
}


class RunConfig(BaseModel):
    """Validated, immutable configuration of one bulk run.

    Timeouts are stored in seconds (the unit httpx works with).
    """

    model_config = ConfigDict(frozen=True)

    station_id: str = Field(
        ...,
        min_length=1,
        description="Opaque station identifier, passed through to the server.",
    )
    start_year: int = Field(..., ge=0, description="First year (inclusive).")
    end_year: int = Field(..., ge=0, description="Last year (inclusive).")
    timeframe: Timeframe = Field(..., description="Requested record granularity.")
    output_directory: Path = Field(
        default=Path("."),
        description="Directory the CSV files are written to.",
    )
    connect_timeout: float = Field(default=12.0, gt=0, description="Connect timeout (seconds).")
    receive_timeout: float = Field(default=12.0, gt=0, description="Receive timeout (seconds).")
    base_url: str = Field(default=BULK_DATA_URL, min_length=8)

    @field_validator("station_id")
    @classmethod
    def _check_station_id(cls, value: str) -> str:
        bad = sorted(set(value) & _STATION_FORBIDDEN)
        if bad:
            raise ValueError(f"station ID must not contain {''.join(bad)!r}")
        return value

    @model_validator(mode="after")
    def _check_year_range(self) -> "RunConfig":
        if self.start_year > self.end_year:
            raise ValueError(
                f"start year {self.start_year} is after end year {self.end_year}"
            )
        return self

    @property
    def timeframe_code(self) -> str:
        return self.timeframe.code

    @property
    def total_targets(self) -> int:
        """Number of (year, month) pairs, i.e. fetch attempts on a clean run."""

        return MONTHS_PER_YEAR * (self.end_year - self.start_year + 1)

    @classmethod
    def from_cli(
        cls,
        *,
        station: str,
        start_year: int,
        end_year: int,
        timeframe: str,
        directory: Path | str = ".",
        http_connect_timeout_ms: int = 12000,
        http_receive_timeout_ms: int = 12000,
        base_url: str = BULK_DATA_URL,
    ) -> "RunConfig":
        """Build a config from raw CLI values.

        Milliseconds are converted to seconds. Any validation failure is
        re-raised as `ConfigError` naming the offending option.
        """

        parsed_timeframe = Timeframe.parse(timeframe)
        try:
            return cls(
                station_id=station,
                start_year=start_year,
                end_year=end_year,
                timeframe=parsed_timeframe,
                output_directory=Path(directory),
                connect_timeout=http_connect_timeout_ms / 1000,
                receive_timeout=http_receive_timeout_ms / 1000,
                base_url=base_url,
            )
        except ValidationError as exc:
            raise _as_config_error(exc) from None


def _as_config_error(exc: ValidationError) -> ConfigError:
    error = exc.errors()[0]
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else "end-year"
    option = _OPTION_NAMES.get(field, field)
    message = str(error.get("msg", "invalid value"))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return ConfigError(option, message)


class FetchTarget(BaseModel):
    """One (year, month) request: where to fetch from and where to write."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(..., ge=1, le=12)
    url: str
    path: Path


class FetchStatus(str, Enum):
    SAVED = "saved"
    ABORT_RUN = "abort_run"
    SKIPPED_TRANSIENT = "skipped_transient"


class FetchOutcome(BaseModel):
    """Tagged result of a single fetch."""

    target: FetchTarget
    status: FetchStatus
    detail: str | None = Field(
        default=None,
        description="Diagnostic for aborts and skips.",
    )
    bytes_written: int = Field(default=0, ge=0)


class RunStatus(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


class RunResult(BaseModel):
    """Summary of a run, consumed by the CLI."""

    status: RunStatus
    reason: str | None = None
    attempts: int = 0
    saved: int = 0
    skipped: int = 0
    outcomes: list[FetchOutcome] = Field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.status is RunStatus.COMPLETED
