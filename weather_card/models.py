# ABOUTME: Pydantic BaseModels for OpenWeatherMap payloads and the card's view data.
# ABOUTME: Defines geocoding, current weather, forecast entries, chart points, and notifications.

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ICON_URL = "https://openweathermap.org/img/wn/{icon}@{scale}x.png"


def icon_url(icon: str, scale: int = 2) -> str:
    """Provider URL for a weather icon code such as '10d'."""
    return ICON_URL.format(icon=icon, scale=scale)


class GeoLocation(BaseModel):
    """First geocoding match for a location query."""

    lat: float
    lon: float
    name: str
    country: str | None = None


class WeatherCondition(BaseModel):
    """One element of the provider's 'weather' list."""

    model_config = ConfigDict(extra="ignore")

    main: str = ""
    description: str = ""
    icon: str = ""


class CurrentWeather(BaseModel):
    """Current conditions at a geocoded location, in metric units."""

    name: str
    country: str | None = None
    temp: float
    humidity: float
    weather: list[WeatherCondition] = []
    wind_speed: float
    pressure: float
    cloudiness: float
    visibility: float | None = None  # km, absent when the provider omits it

    @property
    def summary(self) -> str:
        """First condition description with a capital initial."""
        if not self.weather:
            return ""
        desc = self.weather[0].description
        return desc[:1].upper() + desc[1:]

    @property
    def icon_url(self) -> str | None:
        """Large icon URL for the first condition, if any."""
        if not self.weather or not self.weather[0].icon:
            return None
        return icon_url(self.weather[0].icon, scale=4)


class ForecastMain(BaseModel):
    """Temperature, humidity and pressure of a forecast sample."""

    model_config = ConfigDict(extra="ignore")

    temp: float
    humidity: float
    pressure: float


class ForecastWind(BaseModel):
    """Wind block of a forecast sample."""

    model_config = ConfigDict(extra="ignore")

    speed: float


class ForecastClouds(BaseModel):
    """Cloud cover percentage; the provider key is 'all'."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    all_: float = Field(alias="all")


class ForecastEntry(BaseModel):
    """One 3-hour sample from the forecast endpoint."""

    model_config = ConfigDict(extra="ignore")

    dt_txt: str
    main: ForecastMain
    weather: list[WeatherCondition] = []
    wind: ForecastWind
    clouds: ForecastClouds

    @property
    def day(self) -> str:
        return self.dt_txt.split(" ")[0]


class WeatherBundle(BaseModel):
    """Everything one successful fetch produces; replaced as a unit."""

    location: GeoLocation
    current: CurrentWeather
    forecast: list[ForecastEntry] = []


class ChartPoint(BaseModel):
    """One point of a day's detail chart."""

    time: str
    temp: float
    humidity: float
    pressure: float
    wind_speed: float
    cloudiness: float


class DaySummary(BaseModel):
    """Data behind one forecast-day card."""

    day: str
    label: str
    temp: int
    main: str = ""
    description: str = ""
    icon_url: str | None = None


class Notification(BaseModel):
    """A transient, toast-style message for the user."""

    level: Literal["info", "success", "error"]
    message: str


class ErrorKind(str, Enum):
    """The two failure kinds a submit can report."""

    EMPTY_QUERY = "empty_query"
    FETCH_FAILURE = "fetch_failure"


class QueryResult(BaseModel):
    """Outcome of one submit: either a bundle or an error kind."""

    ok: bool
    error: ErrorKind | None = None
    bundle: WeatherBundle | None = None
    # False when a newer submit superseded this one before it finished
    applied: bool = True
