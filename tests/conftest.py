# ABOUTME: Shared test fixtures for the weather card test suite.
# ABOUTME: Provides settings and canned OpenWeatherMap payloads.

import pytest

from weather_card.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", geo_url="https://geo.test", data_url="https://data.test")


@pytest.fixture
def paris_geo() -> list:
    return [{"name": "Paris", "lat": 48.8589, "lon": 2.32, "country": "FR", "state": "Ile-de-France"}]


@pytest.fixture
def paris_current() -> dict:
    return {
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        "main": {"temp": 18.4, "feels_like": 17.9, "pressure": 1016, "humidity": 61},
        "visibility": 10000,
        "wind": {"speed": 3.6, "deg": 250},
        "clouds": {"all": 0},
        "name": "Paris",
    }


def _entry(dt_txt: str, temp: float, icon: str = "10d") -> dict:
    return {
        "dt": 0,
        "dt_txt": dt_txt,
        "main": {"temp": temp, "humidity": 70, "pressure": 1012},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": icon}],
        "wind": {"speed": 4.1, "deg": 200},
        "clouds": {"all": 75},
    }


@pytest.fixture
def paris_forecast() -> dict:
    return {
        "cod": "200",
        "list": [
            _entry("2025-01-15 18:00:00", 9.5),
            _entry("2025-01-15 21:00:00", 8.2),
            _entry("2025-01-16 00:00:00", 7.0, icon="04n"),
            _entry("2025-01-16 03:00:00", 6.4, icon="04n"),
            _entry("2025-01-17 00:00:00", 5.1),
        ],
    }
