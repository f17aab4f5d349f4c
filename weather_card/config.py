# ABOUTME: Runtime configuration for the weather card, read from the environment.
# ABOUTME: Loads .env via python-dotenv and validates the OpenWeatherMap settings.

import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_GEO_URL = "https://api.openweathermap.org/geo/1.0"
DEFAULT_DATA_URL = "https://api.openweathermap.org/data/2.5"


class Settings(BaseModel):
    """OpenWeatherMap access settings, fixed at startup."""

    api_key: str
    geo_url: str = DEFAULT_GEO_URL
    data_url: str = DEFAULT_DATA_URL
    # None means no timeout at all
    http_timeout: float | None = None


def load_settings() -> Settings:
    """Build Settings from environment variables.

    Raises RuntimeError when OPENWEATHER_API_KEY is missing or WEATHER_HTTP_TIMEOUT is not a number.
    """
    api_key = os.environ.get("OPENWEATHER_API_KEY", "")
    if not api_key:
        raise RuntimeError("OPENWEATHER_API_KEY missing")

    timeout = os.environ.get("WEATHER_HTTP_TIMEOUT")
    try:
        http_timeout = float(timeout) if timeout else None
    except ValueError as e:
        raise RuntimeError(f"WEATHER_HTTP_TIMEOUT must be a number of seconds, got {timeout!r}") from e

    return Settings(
        api_key=api_key,
        geo_url=os.environ.get("OPENWEATHER_GEO_URL", DEFAULT_GEO_URL).rstrip("/"),
        data_url=os.environ.get("OPENWEATHER_DATA_URL", DEFAULT_DATA_URL).rstrip("/"),
        http_timeout=http_timeout,
    )
