"""Core interfaces (Protocols) implemented by outer layers."""

from canada_climate_bulk.core.interfaces.progress import NullProgress, ProgressReporter

__all__ = ["NullProgress", "ProgressReporter"]
