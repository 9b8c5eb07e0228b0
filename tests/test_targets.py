from __future__ import annotations

from pathlib import Path

from canada_climate_bulk.core.targets import (
    build_destination_path,
    build_target_url,
    iter_months,
    iter_targets,
)


def test_target_url_matches_bulk_endpoint_format():
    url = build_target_url("1234", 2020, 5, "3")

    assert url == (
        "https://climate.weather.gc.ca/climate_data/bulk_data_e.html"
        "?format=csv&stationID=1234&Year=2020&Month=5&Day=1&time=UTC"
        "&timeframe=3&submit=%20Download+Data"
    )


def test_target_url_is_deterministic_and_unpadded():
    first = build_target_url("51442", 1999, 1, "1")
    second = build_target_url("51442", 1999, 1, "1")

    assert first == second
    assert "&Month=1&" in first
    assert "&Month=01&" not in first


def test_target_url_uses_custom_base_url():
    url = build_target_url("7", 2001, 12, "2", base_url="http://localhost:8000/bulk")

    assert url.startswith("http://localhost:8000/bulk?format=csv&stationID=7&")


def test_destination_path_is_unpadded():
    path = build_destination_path(Path("data"), "1234", "3", 2020, 5)

    assert path == Path("data") / "1234_3_2020-5.csv"
    assert path.name == "1234_3_2020-5.csv"


def test_iter_months_is_year_major():
    months = list(iter_months(2019, 2020))

    assert len(months) == 24
    assert months[0] == (2019, 1)
    assert months[11] == (2019, 12)
    assert months[12] == (2020, 1)
    assert months[-1] == (2020, 12)


def test_iter_targets_covers_every_month_with_distinct_urls(config):
    targets = list(iter_targets(config))

    assert len(targets) == config.total_targets == 24
    assert len({t.url for t in targets}) == 24
    assert len({t.path for t in targets}) == 24
    assert targets[0].path == config.output_directory / "1234_3_2020-1.csv"
    assert "Year=2021&Month=12" in targets[-1].url


def test_urls_differ_per_station_and_timeframe():
    urls = {
        build_target_url(station, 2020, 1, code)
        for station in ("1", "2")
        for code in ("1", "2", "3")
    }

    assert len(urls) == 6
