"""Bulk downloader for Climate Services Canada historical CSV data."""

__version__ = "0.1.0"
