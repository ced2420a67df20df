"""Shared test fixtures."""

import json
from datetime import date, timedelta
from pathlib import Path

import pytest
import yaml

from weatherdash.config.schema import DashboardConfig
from weatherdash.ingest.forecast_fetcher import parse_forecast
from weatherdash.models.forecast import Forecast

TEST_BASE_URL = "https://test-weather.example.com/v1"
TODAY = date(2026, 10, 19)


def build_payload(
    name: str = "Hà Nội",
    start: date = TODAY,
    days: int = 10,
    hours: int = 24,
) -> dict:
    """A WeatherAPI forecast.json body with predictable values."""
    forecastday = []
    for i in range(days):
        d = start + timedelta(days=i)
        forecastday.append({
            "date": d.isoformat(),
            "day": {
                "avgtemp_f": 75.0 + i,
                "avghumidity": 70 + i,
                "condition": {
                    "text": "Sunny" if i % 2 else "Partly cloudy",
                    "icon": f"//cdn.weatherapi.com/day/{113 + i}.png",
                    "code": 1000 + i,
                },
            },
            "hour": [
                {
                    "time": f"{d.isoformat()} {h:02d}:00",
                    "temp_f": 70.0 + h * 0.5 + i,
                    "uv": float(h % 11),
                    "humidity": 60 + h,
                }
                for h in range(hours)
            ],
        })
    return {
        "location": {
            "name": name,
            "region": "",
            "country": "Vietnam",
            "tz_id": "Asia/Bangkok",
            "localtime": f"{start.isoformat()} 9:05",
        },
        "current": {
            "last_updated": f"{start.isoformat()} 09:00",
            "temp_c": 28.0,
            "temp_f": 82.4,
            "humidity": 74,
            "wind_kph": 11.2,
            "condition": {
                "text": "Patchy rain nearby",
                "icon": "//cdn.weatherapi.com/day/176.png",
                "code": 1063,
            },
        },
        "forecast": {"forecastday": forecastday},
        "alerts": {"alert": []},
    }


@pytest.fixture
def make_payload():
    return build_payload


@pytest.fixture
def payload() -> dict:
    return build_payload()


@pytest.fixture
def forecast(payload: dict) -> Forecast:
    return parse_forecast(payload)


@pytest.fixture
def dashboard_config() -> DashboardConfig:
    return DashboardConfig(
        provider={"base_url": TEST_BASE_URL, "api_key": "test-key"},
        ui={"debounce_ms": 20},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider": {"base_url": TEST_BASE_URL, "api_key": "yaml-key"},
        "ui": {"default_place": "Hà Nội", "debounce_ms": 3000},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, allow_unicode=True)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def error_1006(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "weatherapi_error_1006.json") as f:
        return json.load(f)


@pytest.fixture(autouse=True)
def _no_env_api_key(monkeypatch):
    monkeypatch.delenv("WEATHERAPI_KEY", raising=False)
