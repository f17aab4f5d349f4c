# ABOUTME: Pure helpers that reshape the flat forecast list for display.
# ABOUTME: Groups entries by calendar day and builds chart series and day-card summaries.

import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from weather_card.models import ChartPoint, DaySummary, ForecastEntry, icon_url


def _as_entry(item: ForecastEntry | Mapping[str, Any]) -> ForecastEntry:
    if isinstance(item, ForecastEntry):
        return item
    return ForecastEntry.model_validate(item)


def group_by_day(entries: Iterable[ForecastEntry | Mapping[str, Any]]) -> dict[str, list[ForecastEntry]]:
    """Partition forecast entries by the date part of dt_txt.

    Days appear in the order they are first seen and entries keep their input order;
    nothing is sorted.
    """
    grouped: dict[str, list[ForecastEntry]] = {}
    for item in entries:
        entry = _as_entry(item)
        grouped.setdefault(entry.day, []).append(entry)
    return grouped


def to_chart_series(entries: Iterable[ForecastEntry | Mapping[str, Any]]) -> list[ChartPoint]:
    """One chart point per entry, labelled with its HH:MM time."""
    points = []
    for item in entries:
        entry = _as_entry(item)
        points.append(
            ChartPoint(
                time=entry.dt_txt[11:16],
                temp=entry.main.temp,
                humidity=entry.main.humidity,
                pressure=entry.main.pressure,
                wind_speed=entry.wind.speed,
                cloudiness=entry.clouds.all_,
            )
        )
    return points


def day_label(day: str) -> str:
    """Short card label for a YYYY-MM-DD key, e.g. 'Mon, Jan 15'."""
    d = date.fromisoformat(day)
    return f"{d:%a}, {d:%b} {d.day}"


def detail_title(dt_txt: str) -> str:
    """Heading for a day's detail view, e.g. 'Mon Jan 15 2025'."""
    d = datetime.strptime(dt_txt, "%Y-%m-%d %H:%M:%S")
    return f"{d:%a %b %d %Y}"


def summarize_day(day: str, entries: list[ForecastEntry]) -> DaySummary:
    """Card data for a day, taken from its first (earliest) entry."""
    first = entries[0]
    condition = first.weather[0] if first.weather else None
    return DaySummary(
        day=day,
        label=day_label(day),
        # half rounds up, never to even
        temp=math.floor(first.main.temp + 0.5),
        main=condition.main if condition else "",
        description=condition.description if condition else "",
        icon_url=icon_url(condition.icon) if condition and condition.icon else None,
    )
