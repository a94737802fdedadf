"""Current-conditions and daily forecast models."""

from dataclasses import dataclass

from temptrackr.models.common import Coordinates


@dataclass(frozen=True)
class WeatherData:
    location: str
    temperature: float  # degrees C, one decimal
    condition: str
    humidity: int
    wind_speed: int  # km/h
    pressure: int  # hPa
    visibility: int  # km
    uv_index: float | None
    timestamp: str
    description: str | None = None
    icon: str | None = None
    coordinates: Coordinates | None = None


@dataclass(frozen=True)
class ForecastData:
    day: str
    date: str  # YYYY-MM-DD
    high: float
    low: float
    condition: str
    description: str
    icon: str
    humidity: int
    wind_speed: int
    pressure: int | None = None


@dataclass(frozen=True)
class ApiKeyStatus:
    valid: bool
    message: str
    error: str | None = None


@dataclass(frozen=True)
class CityWeather:
    """One column of a multi-city comparison; weather is None when it failed to load."""

    city: str
    weather: WeatherData | None
