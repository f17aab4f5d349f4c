# ABOUTME: View-state controller for the weather card: query, loading, errors, selection.
# ABOUTME: Drives the fetch sequence and exposes grouped forecast cards and chart data.

import logging

from weather_card.deps import WeatherDeps
from weather_card.forecast import detail_title, group_by_day, summarize_day, to_chart_series
from weather_card.models import (
    ChartPoint,
    CurrentWeather,
    DaySummary,
    ErrorKind,
    ForecastEntry,
    Notification,
    QueryResult,
)
from weather_card.weather_service import LocationNotFound, WeatherFetchError, fetch_weather

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please enter a location"
FETCH_FAILURE_MESSAGE = "Location not found or error fetching data"


class WeatherController:
    """State owner for one weather card.

    All mutation happens on the event loop that awaits submit(), so no locking is done.
    Each non-empty submit gets a generation number; when a newer submit starts before an
    older one finishes, the older result is dropped instead of overwriting newer state.
    """

    def __init__(self, deps: WeatherDeps):
        self.deps = deps
        self.location = ""
        self.current: CurrentWeather | None = None
        self.forecast: list[ForecastEntry] = []
        self.error = ""
        self.error_kind: ErrorKind | None = None
        self.loading = False
        self.dark_mode = False
        self.selected_day: list[ForecastEntry] | None = None
        self.notifications: list[Notification] = []
        self._generation = 0

    def _notify(self, level: str, message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))

    def drain_notifications(self) -> list[Notification]:
        """Return pending notifications and clear the feed."""
        pending, self.notifications = self.notifications, []
        return pending

    async def submit(self, query: str | None = None) -> QueryResult:
        """Validate the location and run the fetch, updating view state."""
        if query is not None:
            self.location = query
        sanitized = self.location.strip()
        if not sanitized:
            logger.warning("Rejected empty location query")
            self.error = EMPTY_QUERY_MESSAGE
            self.error_kind = ErrorKind.EMPTY_QUERY
            self._notify("error", "Enter a valid city name!")
            return QueryResult(ok=False, error=ErrorKind.EMPTY_QUERY)

        self._generation += 1
        generation = self._generation
        try:
            self.loading = True
            self._notify("info", "Fetching weather data...")
            logger.info("Fetching weather for %r", sanitized)

            try:
                bundle = await fetch_weather(self.deps.http_client, self.deps.settings, sanitized)
            except WeatherFetchError as e:
                if generation != self._generation:
                    logger.debug("Dropping stale failure for %r", sanitized)
                    return QueryResult(ok=False, error=ErrorKind.FETCH_FAILURE, applied=False)
                if isinstance(e, LocationNotFound):
                    logger.warning("%s", e)
                else:
                    logger.warning("Weather fetch failed for %r", sanitized, exc_info=True)
                self.error = FETCH_FAILURE_MESSAGE
                self.error_kind = ErrorKind.FETCH_FAILURE
                self.current = None
                self.forecast = []
                self._notify("error", "Failed to fetch weather data!")
                return QueryResult(ok=False, error=ErrorKind.FETCH_FAILURE)

            if generation != self._generation:
                logger.debug("Dropping stale result for %r", sanitized)
                return QueryResult(ok=True, bundle=bundle, applied=False)

            self.current = bundle.current
            self.forecast = bundle.forecast
            self.error = ""
            self.error_kind = None
            self._notify(
                "success",
                f"Weather data for {bundle.location.name}, {bundle.location.country} loaded successfully!",
            )
            return QueryResult(ok=True, bundle=bundle)
        finally:
            if generation == self._generation:
                self.loading = False

    @property
    def grouped_forecast(self) -> dict[str, list[ForecastEntry]]:
        return group_by_day(self.forecast)

    def day_cards(self) -> list[DaySummary]:
        return [summarize_day(day, entries) for day, entries in self.grouped_forecast.items()]

    def select_day(self, day: str) -> list[ForecastEntry]:
        """Open the detail view for a day; raises KeyError for a day not in the forecast."""
        self.selected_day = self.grouped_forecast[day]
        return self.selected_day

    def close_detail(self) -> None:
        self.selected_day = None

    def toggle_theme(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    def detail_series(self) -> list[ChartPoint]:
        if not self.selected_day:
            return []
        return to_chart_series(self.selected_day)

    def snapshot(self) -> dict:
        """JSON-ready view of the whole card state."""
        current = None
        if self.current is not None:
            current = self.current.model_dump(mode="json")
            current["summary"] = self.current.summary
            current["icon_url"] = self.current.icon_url

        detail = None
        if self.selected_day:
            detail = {
                "title": detail_title(self.selected_day[0].dt_txt),
                "entries": [e.model_dump(mode="json", by_alias=True) for e in self.selected_day],
                "series": [p.model_dump(mode="json") for p in self.detail_series()],
            }

        return {
            "location": self.location,
            "loading": self.loading,
            "error": self.error,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "dark_mode": self.dark_mode,
            "current": current,
            "days": [c.model_dump(mode="json") for c in self.day_cards()],
            "detail": detail,
        }
