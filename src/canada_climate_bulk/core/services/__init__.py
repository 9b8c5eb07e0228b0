"""Application services (orchestration of core + adapters)."""

from canada_climate_bulk.core.services.bulk_fetch import FetchHooks, fetch_target, run_bulk_fetch

__all__ = ["FetchHooks", "fetch_target", "run_bulk_fetch"]
