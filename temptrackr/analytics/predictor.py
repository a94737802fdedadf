"""Heuristic weather analytics: trends, risks and prediction cards.

All functions are pure. They never raise on well-formed readings; short or
empty forecasts degrade to neutral results instead.
"""

from scipy.stats import linregress

from temptrackr.models.analytics import (
    AirQualityPrediction,
    PrecipitationIntensity,
    PrecipitationRisk,
    PredictionResult,
    PredictionType,
    PressureAnalysis,
    PressureTrend,
    TemperatureDirection,
    TemperatureTrend,
    WeatherAnalytics,
    WindAnalysis,
    WindStrengthTrend,
)
from temptrackr.models.common import Severity, Trend, round_half_up
from temptrackr.models.weather import ForecastData, WeatherData

NORMAL_PRESSURE_HPA = 1013.25
PRESSURE_BAND_HPA = 5.0
MAX_PROBABILITY = 95

_PRESSURE_IMPLICATIONS = {
    PressureTrend.RISING: "Clear, stable weather expected",
    PressureTrend.FALLING: "Unsettled weather, possible storms",
    PressureTrend.STABLE: "Weather conditions remain steady",
}


def _is_wet(day: ForecastData, keywords: tuple[str, ...]) -> bool:
    condition = day.condition.lower()
    return any(k in condition for k in keywords)


def _severity(value: float, high: float, medium: float) -> Severity:
    if value > high:
        return Severity.HIGH
    if value > medium:
        return Severity.MEDIUM
    return Severity.LOW


def analyze_temperature_trend(forecast: list[ForecastData]) -> TemperatureTrend:
    """Fit a least-squares line through daily midpoint temperatures.

    The slope is in degrees C per day. Fewer than three days gives a
    stable, zero-confidence result.
    """
    if len(forecast) < 3:
        return TemperatureTrend(TemperatureDirection.STABLE, 0.0, 0)

    midpoints = [(day.high + day.low) / 2 for day in forecast]
    slope = float(linregress(range(len(midpoints)), midpoints).slope)

    if slope > 0.5:
        direction = TemperatureDirection.WARMING
    elif slope < -0.5:
        direction = TemperatureDirection.COOLING
    else:
        direction = TemperatureDirection.STABLE

    return TemperatureTrend(
        direction=direction,
        rate=abs(slope),
        confidence=round_half_up(min(abs(slope) * 20, MAX_PROBABILITY)),
    )


def analyze_precipitation_risk(
    current: WeatherData, forecast: list[ForecastData]
) -> PrecipitationRisk:
    humidity_factor = current.humidity / 100
    pressure_factor = 1.2 if current.pressure < 1013 else 0.8

    rainy_days = sum(1 for day in forecast if _is_wet(day, ("rain", "storm")))
    base = (humidity_factor * 0.6 + pressure_factor * 0.4) * 100
    boost = (rainy_days / len(forecast)) * 50 if forecast else 0.0

    probability = min(base + boost, MAX_PROBABILITY)
    if probability > 70:
        intensity = PrecipitationIntensity.HEAVY
    elif probability > 40:
        intensity = PrecipitationIntensity.MODERATE
    else:
        intensity = PrecipitationIntensity.LIGHT

    return PrecipitationRisk(
        probability=round_half_up(probability),
        intensity=intensity,
        timeframe="24-48 hours" if rainy_days > 0 else "3-5 days",
    )


def analyze_pressure(current: WeatherData) -> PressureAnalysis:
    pressure = current.pressure
    # Strict comparisons: exactly ref +/- 5 hPa still counts as stable.
    if pressure > NORMAL_PRESSURE_HPA + PRESSURE_BAND_HPA:
        trend = PressureTrend.RISING
    elif pressure < NORMAL_PRESSURE_HPA - PRESSURE_BAND_HPA:
        trend = PressureTrend.FALLING
    else:
        trend = PressureTrend.STABLE

    return PressureAnalysis(
        trend=trend,
        rate=abs(pressure - NORMAL_PRESSURE_HPA),
        weather_implication=_PRESSURE_IMPLICATIONS[trend],
    )


def analyze_wind(current: WeatherData, forecast: list[ForecastData]) -> WindAnalysis:
    wind = current.wind_speed

    if wind > 25:
        gust_probability = 80
    elif wind > 15:
        gust_probability = 50
    else:
        gust_probability = 20

    if wind < 10:
        direction_stability = 90
    elif wind < 20:
        direction_stability = 70
    else:
        direction_stability = 40

    strength_trend = WindStrengthTrend.STABLE
    if forecast:
        avg_forecast_wind = sum(day.wind_speed for day in forecast) / len(forecast)
        if avg_forecast_wind > wind + 5:
            strength_trend = WindStrengthTrend.INCREASING
        elif avg_forecast_wind < wind - 5:
            strength_trend = WindStrengthTrend.DECREASING

    return WindAnalysis(
        gust_probability=gust_probability,
        direction_stability=direction_stability,
        strength_trend=strength_trend,
    )


def analyze(current: WeatherData, forecast: list[ForecastData]) -> WeatherAnalytics:
    """Run the four core analyzers over one reading and its forecast."""
    return WeatherAnalytics(
        temperature_trend=analyze_temperature_trend(forecast),
        precipitation_risk=analyze_precipitation_risk(current, forecast),
        pressure_analysis=analyze_pressure(current),
        wind_analysis=analyze_wind(current, forecast),
    )


def predict_air_quality(
    current: WeatherData, forecast: list[ForecastData]
) -> AirQualityPrediction:
    """Estimate tomorrow's AQI from dispersion, washout and inversion cues."""
    aqi = 45

    if current.wind_speed < 5:
        aqi += 20
    elif current.wind_speed > 15:
        aqi -= 10

    rainy = any(_is_wet(day, ("rain",)) for day in forecast)
    if rainy:
        aqi -= 15
    if current.pressure > 1020:
        aqi += 10
    if current.humidity > 80:
        aqi += 5

    aqi = max(15, min(150, aqi))

    if aqi <= 50:
        category = "Good"
    elif aqi <= 100:
        category = "Moderate"
    else:
        category = "Unhealthy"

    if rainy:
        trend = Trend.DOWN
    elif current.wind_speed < 5:
        trend = Trend.UP
    else:
        trend = Trend.STABLE

    return AirQualityPrediction(aqi=aqi, category=category, confidence=75, trend=trend)


def generate_predictions(
    current: WeatherData, forecast: list[ForecastData]
) -> list[PredictionResult]:
    """Build the five prediction cards in fixed order."""
    analytics = analyze(current, forecast)
    temp = analytics.temperature_trend
    precip = analytics.precipitation_risk
    pressure = analytics.pressure_analysis
    wind = analytics.wind_analysis
    aqi = predict_air_quality(current, forecast)

    temp_label, temp_sign, temp_trend = {
        TemperatureDirection.WARMING: ("Rising", "+", Trend.UP),
        TemperatureDirection.COOLING: ("Falling", "-", Trend.DOWN),
        TemperatureDirection.STABLE: ("Stable", "±", Trend.STABLE),
    }[temp.direction]

    pressure_trend = {
        PressureTrend.RISING: Trend.UP,
        PressureTrend.FALLING: Trend.DOWN,
        PressureTrend.STABLE: Trend.STABLE,
    }[pressure.trend]

    wind_trend = {
        WindStrengthTrend.INCREASING: Trend.UP,
        WindStrengthTrend.DECREASING: Trend.DOWN,
        WindStrengthTrend.STABLE: Trend.STABLE,
    }[wind.strength_trend]

    return [
        PredictionResult(
            type=PredictionType.TEMPERATURE,
            title="Temperature Trend",
            description=f"{temp_label} temperature pattern detected",
            confidence=temp.confidence,
            severity=_severity(temp.rate, high=2, medium=1),
            value=f"{temp_sign}{temp.rate:.1f}°C/day",
            trend=temp_trend,
            timeframe="Next 5 days",
        ),
        PredictionResult(
            type=PredictionType.PRECIPITATION,
            title="Precipitation Forecast",
            description=f"{precip.intensity} precipitation expected",
            confidence=precip.probability,
            severity=_severity(precip.probability, high=70, medium=40),
            value=f"{precip.probability}% chance",
            trend=Trend.UP if precip.probability > 50 else Trend.DOWN,
            timeframe=precip.timeframe,
        ),
        PredictionResult(
            type=PredictionType.PRESSURE,
            title="Atmospheric Pressure",
            description=pressure.weather_implication,
            confidence=85,
            severity=_severity(pressure.rate, high=10, medium=5),
            value=f"{current.pressure} hPa",
            trend=pressure_trend,
            timeframe="Current conditions",
        ),
        PredictionResult(
            type=PredictionType.WIND,
            title="Wind Analysis",
            description=(
                f"Wind gusts {'likely' if wind.gust_probability > 60 else 'possible'}"
            ),
            confidence=wind.direction_stability,
            severity=_severity(wind.gust_probability, high=70, medium=40),
            value=f"{wind.gust_probability}% gust risk",
            trend=wind_trend,
            timeframe="Next 24 hours",
        ),
        PredictionResult(
            type=PredictionType.AIR_QUALITY,
            title="Air Quality Index",
            description=f"Air quality expected to be {aqi.category.lower()}",
            confidence=aqi.confidence,
            severity=_severity(aqi.aqi, high=100, medium=50),
            value=f"{aqi.category} ({aqi.aqi})",
            trend=aqi.trend,
            timeframe="Tomorrow",
        ),
    ]


def calculate_severity_index(
    current: WeatherData, forecast: list[ForecastData]
) -> int:
    """Additive 0-100 risk score over temperature, wind, rain and pressure."""
    severity = 0

    if forecast:
        avg_high = sum(day.high for day in forecast) / len(forecast)
        if avg_high > 35 or avg_high < -10:
            severity += 30
        elif avg_high > 30 or avg_high < 0:
            severity += 15

    if current.wind_speed > 50:
        severity += 40
    elif current.wind_speed > 25:
        severity += 20

    precip = analyze_precipitation_risk(current, forecast)
    if precip.probability > 80 and precip.intensity == PrecipitationIntensity.HEAVY:
        severity += 35
    elif precip.probability > 60:
        severity += 20

    if current.pressure < 990:
        severity += 25
    elif current.pressure < 1000:
        severity += 15

    return max(0, min(100, severity))
