"""Application settings.

Why here:
- Environment variables and `.env` files are read in one place (pydantic-settings).
- The CLI uses these values as defaults; explicit options always win.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BULK_DATA_URL = "https://climate.weather.gc.ca/climate_data/bulk_data_e.html"

DEFAULT_HTTP_TIMEOUT_MS = 12000


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "canada-climate-bulk"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "canada-climate-bulk"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "canada-climate-bulk"
    return Path.home() / ".config" / "canada-climate-bulk"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central configuration.

    Every field can be set through `CLIMATE_BULK_<NAME>`, e.g.
    `CLIMATE_BULK_HTTP_CONNECT_TIMEOUT_MS=30000`.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIMATE_BULK_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first, then the per-user one.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=BULK_DATA_URL,
        min_length=8,
        description="Bulk data endpoint of Climate Services Canada.",
    )
    http_connect_timeout_ms: int = Field(
        default=DEFAULT_HTTP_TIMEOUT_MS,
        gt=0,
        description="HTTP connect timeout (milliseconds).",
    )
    http_receive_timeout_ms: int = Field(
        default=DEFAULT_HTTP_TIMEOUT_MS,
        gt=0,
        description=(
            "HTTP receive timeout (milliseconds). The datamart does not use "
            "compression and has large response sizes."
        ),
    )
    user_agent: str = Field(
        default="canada-climate-bulk/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    output_directory: Path = Field(
        default=Path("."),
        description="Default directory for downloaded files.",
    )
