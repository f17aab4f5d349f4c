# ABOUTME: Service layer for OpenWeatherMap API calls and response parsing.
# ABOUTME: Runs the geocode -> current conditions -> forecast sequence for a location query.

import logging

import httpx
from pydantic import ValidationError

from weather_card.config import Settings
from weather_card.models import CurrentWeather, ForecastEntry, GeoLocation, WeatherBundle

logger = logging.getLogger(__name__)


class WeatherFetchError(Exception):
    """Any failure while fetching or parsing weather data."""


class LocationNotFound(WeatherFetchError):
    """The geocoding API returned no match for the query."""


async def geocode(client: httpx.AsyncClient, settings: Settings, query: str) -> GeoLocation | None:
    """Geocode a place name to coordinates, keeping only the first match."""
    resp = await client.get(
        f"{settings.geo_url}/direct",
        params={"q": query, "limit": 1, "appid": settings.api_key},
    )
    resp.raise_for_status()
    data = resp.json()

    if not data:
        return None

    r = data[0]
    return GeoLocation(lat=r["lat"], lon=r["lon"], name=r["name"], country=r.get("country"))


async def get_current_weather(client: httpx.AsyncClient, settings: Settings, location: GeoLocation) -> CurrentWeather:
    """Fetch current conditions for a geocoded location in metric units."""
    resp = await client.get(
        f"{settings.data_url}/weather",
        params={"lat": location.lat, "lon": location.lon, "units": "metric", "appid": settings.api_key},
    )
    resp.raise_for_status()
    return parse_current_weather(resp.json(), location)


async def get_forecast(client: httpx.AsyncClient, settings: Settings, location: GeoLocation) -> list[ForecastEntry]:
    """Fetch the 5-day / 3-hour forecast list for a geocoded location."""
    resp = await client.get(
        f"{settings.data_url}/forecast",
        params={"lat": location.lat, "lon": location.lon, "units": "metric", "appid": settings.api_key},
    )
    resp.raise_for_status()
    return parse_forecast(resp.json())


def parse_current_weather(raw: dict, location: GeoLocation) -> CurrentWeather:
    """Flatten a current-weather payload; name and country come from the geocode match."""
    main = raw["main"]
    visibility = raw.get("visibility")
    return CurrentWeather(
        name=location.name,
        country=location.country,
        temp=main["temp"],
        humidity=main["humidity"],
        weather=raw.get("weather", []),
        wind_speed=raw["wind"]["speed"],
        pressure=main["pressure"],
        cloudiness=raw["clouds"]["all"],
        visibility=visibility / 1000 if visibility is not None else None,
    )


def parse_forecast(raw: dict) -> list[ForecastEntry]:
    """Parse the forecast payload's 'list' into ForecastEntry objects, order preserved."""
    return [ForecastEntry.model_validate(item) for item in raw["list"]]


async def fetch_weather(client: httpx.AsyncClient, settings: Settings, query: str) -> WeatherBundle:
    """Run the three dependent requests and return the combined result.

    Every failure is raised as WeatherFetchError so callers handle a single kind;
    nothing partial is returned.
    """
    try:
        location = await geocode(client, settings, query)
        if location is None:
            raise LocationNotFound(f"Location not found: {query}")

        current = await get_current_weather(client, settings, location)
        forecast = await get_forecast(client, settings, location)
    except WeatherFetchError:
        raise
    except httpx.HTTPError as e:
        raise WeatherFetchError(f"Weather API request failed for '{query}': {e}") from e
    except (ValueError, KeyError, TypeError, ValidationError) as e:
        # ValueError covers JSON decode errors
        raise WeatherFetchError(f"Malformed weather API response for '{query}': {e}") from e

    logger.info("Fetched weather for %s, %s (%d forecast entries)", location.name, location.country, len(forecast))
    return WeatherBundle(location=location, current=current, forecast=forecast)
