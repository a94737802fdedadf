"""Repository for daily weather snapshots and per-location statistics."""

import dataclasses
import logging
from collections import Counter
from datetime import UTC, date, datetime, timedelta

from temptrackr.models.common import Trend, epoch_ms, round_half_up, utc_now
from temptrackr.models.history import (
    ConditionFrequency,
    HistoricalWeatherEntry,
    LocationStats,
    MetricStats,
    TemperatureChange,
)
from temptrackr.models.weather import WeatherData
from temptrackr.storage.kv_store import KeyValueStore, read_json_list, write_json_list

logger = logging.getLogger(__name__)

HISTORY_KEY = "weather-historical-data"
MAX_ENTRIES = 1000
TREND_WINDOW_DAYS = 7
TREND_THRESHOLD_C = 1.0


def _from_record(record: dict) -> HistoricalWeatherEntry:
    entry = HistoricalWeatherEntry(**record)
    # both are parsed again for windowing and ordering
    date.fromisoformat(entry.date)
    datetime.fromisoformat(entry.timestamp)
    return entry


def _load(store: KeyValueStore | None) -> list[HistoricalWeatherEntry]:
    """Stored entries; records that do not parse are dropped with a warning."""
    entries = []
    for record in read_json_list(store, HISTORY_KEY):
        try:
            entries.append(_from_record(record))
        except (TypeError, ValueError):
            logger.warning("Dropping malformed historical weather record: %r", record)
    return entries


def _persist(store: KeyValueStore | None, entries: list[HistoricalWeatherEntry]) -> None:
    write_json_list(store, HISTORY_KEY, [dataclasses.asdict(e) for e in entries])


def _cutoff(now: datetime, days: int) -> date:
    return (now - timedelta(days=days)).date()


def _timestamp_key(entry: HistoricalWeatherEntry) -> datetime:
    ts = datetime.fromisoformat(entry.timestamp)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


def _location_matches(stored: str, query: str) -> bool:
    stored, query = stored.lower(), query.lower()
    return query in stored or stored in query


def store_weather_data(
    store: KeyValueStore | None,
    location: str,
    weather: WeatherData,
    now: datetime | None = None,
    max_entries: int = MAX_ENTRIES,
) -> HistoricalWeatherEntry:
    """Record today's snapshot for a location.

    A second call on the same UTC day replaces the earlier entry. The
    collection is then trimmed to the max_entries most recent snapshots.
    """
    if now is None:
        now = utc_now()
    entry = HistoricalWeatherEntry(
        id=f"{location}-{epoch_ms(now)}",
        location=location,
        date=now.date().isoformat(),
        temperature=weather.temperature,
        condition=weather.condition,
        humidity=weather.humidity,
        wind_speed=weather.wind_speed,
        pressure=weather.pressure,
        visibility=weather.visibility,
        timestamp=now.isoformat(),
    )

    entries = _load(store)
    for i, existing in enumerate(entries):
        if existing.location == location and existing.date == entry.date:
            entries[i] = entry
            break
    else:
        entries.append(entry)

    entries.sort(key=_timestamp_key, reverse=True)
    _persist(store, entries[:max_entries])
    return entry


def get_historical_data(
    store: KeyValueStore | None,
    location: str,
    days: int = 30,
    now: datetime | None = None,
) -> list[HistoricalWeatherEntry]:
    """Entries for a location within the last `days` days, oldest first."""
    if now is None:
        now = utc_now()
    cutoff = _cutoff(now, days)
    matches = [
        e for e in _load(store)
        if _location_matches(e.location, location)
        and date.fromisoformat(e.date) >= cutoff
    ]
    return sorted(matches, key=lambda e: e.date)


def clear_old_data(
    store: KeyValueStore | None,
    older_than_days: int = 90,
    now: datetime | None = None,
) -> int:
    """Drop entries dated before the cutoff. Returns the number removed."""
    if now is None:
        now = utc_now()
    cutoff = _cutoff(now, older_than_days)
    entries = _load(store)
    kept = [e for e in entries if date.fromisoformat(e.date) >= cutoff]
    _persist(store, kept)
    removed = len(entries) - len(kept)
    if removed:
        logger.info("Cleared %d historical entries older than %s", removed, cutoff)
    return removed


def _metric(values: list[float]) -> MetricStats:
    return MetricStats(avg=sum(values) / len(values), min=min(values), max=max(values))


def get_location_stats(
    store: KeyValueStore | None,
    location: str,
    days: int = 30,
    now: datetime | None = None,
) -> LocationStats | None:
    """Average/min/max per metric and condition frequency, or None without data."""
    data = get_historical_data(store, location, days, now=now)
    if not data:
        return None

    counts = Counter(e.condition for e in data)
    conditions = [
        ConditionFrequency(
            condition=condition,
            count=count,
            percentage=round_half_up(count / len(data) * 100),
        )
        for condition, count in counts.most_common()
    ]

    return LocationStats(
        total_days=len(data),
        temperature=_metric([e.temperature for e in data]),
        humidity=_metric([e.humidity for e in data]),
        wind_speed=_metric([e.wind_speed for e in data]),
        pressure=_metric([e.pressure for e in data]),
        conditions=conditions,
        temperature_trend=temperature_change(data),
    )


def temperature_change(entries: list[HistoricalWeatherEntry]) -> TemperatureChange:
    """Compare the newest week's mean temperature with the oldest week's.

    Entries must be ordered oldest first. A difference beyond 1 degree C
    either way is a trend; fewer than two entries is stable.
    """
    if len(entries) < 2:
        return TemperatureChange(Trend.STABLE, 0.0)

    recent = entries[-TREND_WINDOW_DAYS:]
    older = entries[:TREND_WINDOW_DAYS]
    change = (
        sum(e.temperature for e in recent) / len(recent)
        - sum(e.temperature for e in older) / len(older)
    )

    if change > TREND_THRESHOLD_C:
        trend = Trend.UP
    elif change < -TREND_THRESHOLD_C:
        trend = Trend.DOWN
    else:
        trend = Trend.STABLE
    return TemperatureChange(trend, abs(change))


def get_temperature_trend(
    store: KeyValueStore | None,
    location: str,
    days: int = 30,
    now: datetime | None = None,
) -> TemperatureChange:
    return temperature_change(get_historical_data(store, location, days, now=now))
