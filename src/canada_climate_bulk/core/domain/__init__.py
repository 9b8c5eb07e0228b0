"""Domain models and enums.

The domain knows nothing about HTTP, the filesystem or the CLI.
"""

from canada_climate_bulk.core.domain.models import (
    FetchOutcome,
    FetchStatus,
    FetchTarget,
    RunConfig,
    RunResult,
    RunStatus,
)
from canada_climate_bulk.core.domain.timeframe import Timeframe

__all__ = [
    "FetchOutcome",
    "FetchStatus",
    "FetchTarget",
    "RunConfig",
    "RunResult",
    "RunStatus",
    "Timeframe",
]
