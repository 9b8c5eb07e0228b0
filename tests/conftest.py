from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

import httpx
import pytest

from canada_climate_bulk.adapters import http_client
from canada_climate_bulk.core.domain.models import RunConfig
from canada_climate_bulk.core.domain.timeframe import Timeframe
from canada_climate_bulk.core.services import bulk_fetch

CSV_HEADERS = {"Content-Type": "application/octet-stream"}
HTML_HEADERS = {"Content-Type": "text/html; charset=utf-8"}


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("canada_climate_bulk")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep user/project `.env` files and CLIMATE_BULK_* variables out of tests."""

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.upper().startswith("CLIMATE_BULK_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def out_dir(tmp_path) -> Path:
    return tmp_path / "out"


@pytest.fixture
def config(out_dir) -> RunConfig:
    return RunConfig(
        station_id="1234",
        start_year=2020,
        end_year=2021,
        timeframe=Timeframe.MONTH,
        output_directory=out_dir,
    )


def csv_body(request: httpx.Request) -> bytes:
    params = request.url.params
    return f"station,{params['stationID']},{params['Year']},{params['Month']}\n".encode()


class RecordingHandler:
    """MockTransport handler that records requests and delegates to `respond`."""

    def __init__(self, respond: Callable[[httpx.Request, int], httpx.Response] | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._respond = respond or (lambda request, index: httpx.Response(200, headers=CSV_HEADERS, content=csv_body(request)))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request, len(self.requests))

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self), follow_redirects=True)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def mock_server(monkeypatch):
    """Route every client built by the fetch loop through a MockTransport."""

    def install(recorder: RecordingHandler) -> RecordingHandler:
        def fake_build_client(config, settings=None):
            return http_client.build_client(config, settings, transport=httpx.MockTransport(recorder))

        monkeypatch.setattr(bulk_fetch, "build_client", fake_build_client)
        return recorder

    return install
