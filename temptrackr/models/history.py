"""Historical weather snapshot and aggregate models."""

from dataclasses import dataclass

from temptrackr.models.common import Trend


@dataclass(frozen=True)
class HistoricalWeatherEntry:
    id: str
    location: str
    date: str  # YYYY-MM-DD (UTC)
    temperature: float
    condition: str
    humidity: int
    wind_speed: int
    pressure: int
    visibility: int
    timestamp: str


@dataclass(frozen=True)
class MetricStats:
    avg: float
    min: float
    max: float


@dataclass(frozen=True)
class ConditionFrequency:
    condition: str
    count: int
    percentage: int


@dataclass(frozen=True)
class TemperatureChange:
    """Recent week average against the oldest week in a history window."""

    trend: Trend
    change: float  # absolute difference, degrees C


@dataclass(frozen=True)
class LocationStats:
    total_days: int
    temperature: MetricStats
    humidity: MetricStats
    wind_speed: MetricStats
    pressure: MetricStats
    conditions: list[ConditionFrequency]
    temperature_trend: TemperatureChange | None = None
