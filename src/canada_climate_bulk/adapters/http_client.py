"""httpx client builder.

Why a builder:
- Timeouts and headers are set in one place for the loop and `doctor`.
- Tests pass an `httpx.MockTransport` instead of touching the network.
"""

from __future__ import annotations

import httpx

from canada_climate_bulk.core.config import AppSettings
from canada_climate_bulk.core.domain.models import RunConfig


def build_timeout(connect_timeout: float, receive_timeout: float) -> httpx.Timeout:
    """Connect bound for the connection phase, receive bound for each read."""

    return httpx.Timeout(
        connect_timeout,
        connect=connect_timeout,
        read=receive_timeout,
    )


def _client(
    timeout: httpx.Timeout,
    settings: AppSettings,
    transport: httpx.BaseTransport | None,
) -> httpx.Client:
    headers = {
        "User-Agent": settings.user_agent,
        "Accept": "application/octet-stream,text/csv;q=0.9,*/*;q=0.8",
    }
    return httpx.Client(
        timeout=timeout,
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def build_client(
    config: RunConfig,
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create the synchronous client used for a whole run."""

    settings = settings or AppSettings()
    timeout = build_timeout(config.connect_timeout, config.receive_timeout)
    return _client(timeout, settings, transport)


def build_settings_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Client configured from settings alone (used by `doctor`)."""

    settings = settings or AppSettings()
    timeout = build_timeout(
        settings.http_connect_timeout_ms / 1000,
        settings.http_receive_timeout_ms / 1000,
    )
    return _client(timeout, settings, transport)


def is_data_content_type(content_type: str | None) -> bool:
    """The server sends real CSV downloads as `application/...`.

    Anything else (typically `text/html` with status 200) is an error page.
    """

    return content_type is not None and content_type.startswith("application")
