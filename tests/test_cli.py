from __future__ import annotations

import httpx
import pytest
from typer.testing import CliRunner

from canada_climate_bulk.cli import doctor as doctor_module
from canada_climate_bulk.cli.main import app
from canada_climate_bulk.core.services import bulk_fetch

from conftest import CSV_HEADERS, HTML_HEADERS, RecordingHandler, csv_body

runner = CliRunner()


def _args(out_dir, *extra):
    return [
        "download",
        "--start-year", "2020",
        "--end-year", "2020",
        "--station", "1234",
        "--timeframe", "month",
        "--directory", str(out_dir),
        "--no-progress",
        *extra,
    ]


@pytest.fixture
def no_network(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("network client must not be built")

    monkeypatch.setattr(bulk_fetch, "build_client", fail)


def test_download_success_prints_done(out_dir, mock_server, handler):
    mock_server(handler)

    result = runner.invoke(app, _args(out_dir))

    assert result.exit_code == 0, result.output
    assert "Done." in result.output
    assert len(handler.requests) == 12
    assert (out_dir / "1234_3_2020-5.csv").read_bytes() == b"station,1234,2020,5\n"


def test_download_with_progress_bar(out_dir, mock_server, handler):
    mock_server(handler)
    args = [a for a in _args(out_dir) if a != "--no-progress"]

    result = runner.invoke(app, args)

    assert result.exit_code == 0, result.output
    assert "Done." in result.output
    assert len(list(out_dir.glob("*.csv"))) == 12


def test_invalid_timeframe_fails_before_network(out_dir, no_network):
    args = _args(out_dir)
    args[args.index("month")] = "week"

    result = runner.invoke(app, args)

    assert result.exit_code == 2
    assert "timeframe" in result.output
    assert "week" in result.output
    assert not out_dir.exists()


def test_non_integer_year_fails_before_network(out_dir, no_network):
    args = _args(out_dir)
    args[args.index("--start-year") + 1] = "twenty"

    result = runner.invoke(app, args)

    assert result.exit_code == 2


def test_reversed_years_fail_before_network(out_dir, no_network):
    args = _args(out_dir)
    args[args.index("--start-year") + 1] = "2021"

    result = runner.invoke(app, args)

    assert result.exit_code == 2
    assert "end-year" in result.output


def test_error_page_aborts_with_non_zero_exit(out_dir, mock_server):
    recorder = mock_server(
        RecordingHandler(lambda request, index: httpx.Response(200, headers=HTML_HEADERS, content=b"<html/>"))
    )

    result = runner.invoke(app, _args(out_dir))

    assert result.exit_code == 1
    assert "Done." not in result.output
    assert "check your station ID" in result.output
    assert len(recorder.requests) == 1
    assert list(out_dir.iterdir()) == []


def test_http_error_reports_url_and_status(out_dir, mock_server):
    recorder = mock_server(RecordingHandler(lambda request, index: httpx.Response(404)))

    result = runner.invoke(app, _args(out_dir))

    assert result.exit_code == 1
    assert "Not Found" in result.output
    assert "stationID=1234&Year=2020&Month=1&" in result.output
    assert "Error: 404" in result.output
    assert len(recorder.requests) == 1


def test_transport_errors_are_skipped(out_dir, mock_server):
    def respond(request, index):
        if index % 2:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, headers=CSV_HEADERS, content=csv_body(request))

    recorder = mock_server(RecordingHandler(respond))

    result = runner.invoke(app, _args(out_dir))

    assert result.exit_code == 0, result.output
    assert "Done." in result.output
    assert len(recorder.requests) == 12
    assert len(list(out_dir.glob("*.csv"))) == 6


def test_dry_run_lists_targets_without_network(out_dir, no_network):
    result = runner.invoke(app, _args(out_dir, "--dry-run"))

    assert result.exit_code == 0, result.output
    assert "12 requests planned." in result.output
    assert not out_dir.exists()


def test_timeouts_come_from_settings(out_dir, monkeypatch, mock_server, handler):
    monkeypatch.setenv("CLIMATE_BULK_HTTP_CONNECT_TIMEOUT_MS", "2500")
    mock_server(handler)
    mocked_build_client = bulk_fetch.build_client
    seen = []

    def capture(config, settings=None):
        seen.append(config)
        return mocked_build_client(config, settings)

    monkeypatch.setattr(bulk_fetch, "build_client", capture)

    result = runner.invoke(app, _args(out_dir, "--http-receive-timeout", "60000"))

    assert result.exit_code == 0, result.output
    assert seen[0].connect_timeout == 2.5
    assert seen[0].receive_timeout == 60.0


def test_doctor_offline(tmp_path):
    result = runner.invoke(app, ["doctor", "--offline", "--directory", str(tmp_path / "new")])

    assert result.exit_code == 0, result.output
    assert "Output directory" in result.output
    assert "SKIPPED" in result.output


def test_doctor_reports_http_failure(tmp_path, monkeypatch):
    monkeypatch.setattr(doctor_module, "_check_http", lambda url, settings: (False, "connection refused"))

    result = runner.invoke(app, ["doctor", "--directory", str(tmp_path)])

    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_invalid_settings_exit_with_config_error_in_doctor(tmp_path, monkeypatch):
    monkeypatch.setenv("CLIMATE_BULK_HTTP_CONNECT_TIMEOUT_MS", "0")

    result = runner.invoke(app, ["doctor", "--offline", "--directory", str(tmp_path)])

    assert result.exit_code == 2
    assert "Invalid settings" in result.output
    assert "http_connect_timeout_ms" in result.output


def test_invalid_settings_exit_with_config_error_in_download(out_dir, monkeypatch, no_network):
    monkeypatch.setenv("CLIMATE_BULK_HTTP_CONNECT_TIMEOUT_MS", "0")

    result = runner.invoke(app, _args(out_dir, "--dry-run"))

    assert result.exit_code == 2
    assert "Invalid settings" in result.output


def test_unwritable_destination_file_exits_with_path(out_dir, mock_server, handler):
    mock_server(handler)
    blocked = out_dir / "1234_3_2020-1.csv"
    blocked.mkdir(parents=True)

    result = runner.invoke(app, _args(out_dir))

    assert result.exit_code == 1
    assert str(blocked) in result.output
    assert "Done." not in result.output
    assert len(handler.requests) == 1


def test_uncreatable_output_directory_exits_with_path(tmp_path, mock_server, handler):
    mock_server(handler)
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    out_dir = blocker / "out"

    result = runner.invoke(app, _args(out_dir))

    assert result.exit_code == 1
    assert str(out_dir) in result.output
    assert "Done." not in result.output
    assert handler.requests == []


def test_station_with_path_separator_fails_before_network(out_dir, no_network):
    args = _args(out_dir)
    args[args.index("1234")] = "../1234"

    result = runner.invoke(app, args)

    assert result.exit_code == 2
    assert "--station" in result.output
    assert not out_dir.exists()
