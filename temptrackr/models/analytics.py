"""Analytics and prediction result models."""

from dataclasses import dataclass, field
from enum import StrEnum

from temptrackr.models.common import Severity, Trend


class PredictionType(StrEnum):
    TEMPERATURE = "temperature"
    PRECIPITATION = "precipitation"
    PRESSURE = "pressure"
    WIND = "wind"
    AIR_QUALITY = "air_quality"


class TemperatureDirection(StrEnum):
    WARMING = "warming"
    COOLING = "cooling"
    STABLE = "stable"


class PrecipitationIntensity(StrEnum):
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


class PressureTrend(StrEnum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


class WindStrengthTrend(StrEnum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass(frozen=True)
class TemperatureTrend:
    direction: TemperatureDirection
    rate: float
    confidence: int


@dataclass(frozen=True)
class PrecipitationRisk:
    probability: int
    intensity: PrecipitationIntensity
    timeframe: str


@dataclass(frozen=True)
class PressureAnalysis:
    trend: PressureTrend
    rate: float
    weather_implication: str


@dataclass(frozen=True)
class WindAnalysis:
    gust_probability: int
    direction_stability: int
    strength_trend: WindStrengthTrend


@dataclass(frozen=True)
class AirQualityPrediction:
    aqi: int
    category: str
    confidence: int
    trend: Trend


@dataclass(frozen=True)
class WeatherAnalytics:
    temperature_trend: TemperatureTrend
    precipitation_risk: PrecipitationRisk
    pressure_analysis: PressureAnalysis
    wind_analysis: WindAnalysis


@dataclass(frozen=True)
class PredictionResult:
    type: PredictionType
    title: str
    description: str
    confidence: int
    severity: Severity
    value: str
    trend: Trend
    timeframe: str


@dataclass(frozen=True)
class OutfitSuggestion:
    category: str
    reason: str
    icon: str
    items: list[str] = field(default_factory=list)
