"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from widget.config.schema import (
    ProviderConfig,
    SuggestionConfig,
    UiConfig,
    WidgetConfig,
)
from widget.ingest.payload_parser import parse_weather_payload
from widget.models.weather import WeatherPayload

FIXTURE_DIR = Path(__file__).parent / "fixtures"
TEST_BASE_URL = "https://test-weather.example.com/v1"


def load_fixture(name: str):
    with open(FIXTURE_DIR / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def forecast_raw() -> dict:
    return load_fixture("forecast_london.json")


@pytest.fixture
def search_raw() -> list:
    return load_fixture("search_lon.json")


@pytest.fixture
def error_raw() -> dict:
    return load_fixture("error_no_location.json")


@pytest.fixture
def payload(forecast_raw: dict) -> WeatherPayload:
    return parse_weather_payload(forecast_raw)


@pytest.fixture
def widget_config() -> WidgetConfig:
    """Config pointing at a fake provider, with a short debounce for tests."""
    return WidgetConfig(
        provider=ProviderConfig(base_url=TEST_BASE_URL, api_key="test-key"),
        suggestions=SuggestionConfig(debounce_seconds=0.05),
        ui=UiConfig(default_city="London"),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider": {"api_key": "yaml-key", "forecast_days": 5},
        "ui": {"default_city": "Da Nang"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
