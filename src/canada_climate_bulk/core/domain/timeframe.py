"""Timeframe options understood by the bulk data endpoint.

The server expects a numeric `timeframe` query parameter; users type a
keyword. This module is the single source of truth for that mapping so
the CLI, the URL builder and the file naming agree.
"""

from __future__ import annotations

from enum import Enum

from canada_climate_bulk.core.errors import ConfigError


class Timeframe(str, Enum):
    """Granularity of the climate records requested."""

    HOUR = "hour"
    DAY = "day"
    MONTH = "month"

    @property
    def code(self) -> str:
        """Numeric code used by the server (and in output file names)."""

        return _CODES[self]

    @classmethod
    def parse(cls, value: str) -> "Timeframe":
        """Map a CLI keyword onto a timeframe.

        Raises `ConfigError` for anything outside `hour`, `day`, `month`.
        """

        try:
            return cls(value)
        except ValueError:
            raise ConfigError("timeframe", f"Invalid timeframe specified: {value}") from None

    def label(self) -> str:
        return {"hour": "Hourly", "day": "Daily", "month": "Monthly"}[self.value]


_CODES: dict[Timeframe, str] = {
    Timeframe.HOUR: "1",
    Timeframe.DAY: "2",
    Timeframe.MONTH: "3",
}
