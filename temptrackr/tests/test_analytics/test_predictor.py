"""Tests for the heuristic analytics with hand-verified values."""

import pytest

from temptrackr.analytics.predictor import (
    analyze,
    analyze_precipitation_risk,
    analyze_pressure,
    analyze_temperature_trend,
    analyze_wind,
    calculate_severity_index,
    generate_predictions,
    predict_air_quality,
)
from temptrackr.models.analytics import (
    PrecipitationIntensity,
    PredictionType,
    PressureTrend,
    TemperatureDirection,
    WindStrengthTrend,
)
from temptrackr.models.common import Severity, Trend

FLAT = [(20, 10)] * 5


class TestTemperatureTrend:
    @pytest.mark.parametrize("n", [0, 1, 2])
    def test_short_forecast_is_neutral(self, make_forecast, n):
        trend = analyze_temperature_trend(make_forecast(FLAT[:n]))
        assert trend.direction == TemperatureDirection.STABLE
        assert trend.rate == 0
        assert trend.confidence == 0

    def test_constant_midpoint(self, make_forecast):
        # Midpoints all 15 even though highs and lows differ per day
        forecast = make_forecast([(20, 10), (25, 5), (18, 12), (15, 15), (30, 0)])
        trend = analyze_temperature_trend(forecast)
        assert trend.direction == TemperatureDirection.STABLE
        assert trend.rate == pytest.approx(0.0, abs=1e-9)
        assert trend.confidence == 0

    def test_warming(self, make_forecast):
        """Midpoints 10, 12, 14, 16, 18 -> slope 2 C/day."""
        forecast = make_forecast([(15, 5), (17, 7), (19, 9), (21, 11), (23, 13)])
        trend = analyze_temperature_trend(forecast)
        assert trend.direction == TemperatureDirection.WARMING
        assert trend.rate == pytest.approx(2.0)
        assert trend.confidence == 40

    def test_cooling(self, make_forecast):
        """Midpoints 20, 19, 18, 17, 16 -> slope -1, rate reported as magnitude."""
        forecast = make_forecast([(25, 15), (24, 14), (23, 13), (22, 12), (21, 11)])
        trend = analyze_temperature_trend(forecast)
        assert trend.direction == TemperatureDirection.COOLING
        assert trend.rate == pytest.approx(1.0)
        assert trend.confidence == 20

    def test_gentle_slope_is_stable(self, make_forecast):
        forecast = make_forecast([(20, 10), (20.4, 10.4), (20.8, 10.8)])
        trend = analyze_temperature_trend(forecast)
        assert trend.direction == TemperatureDirection.STABLE
        assert trend.rate == pytest.approx(0.4)
        assert trend.confidence == 8

    def test_confidence_capped(self, make_forecast):
        forecast = make_forecast([(0, 0), (10, 10), (20, 20)])
        assert analyze_temperature_trend(forecast).confidence == 95


class TestPrecipitationRisk:
    def test_humid_low_pressure_scenario(self, make_weather, make_forecast):
        """(0.85*0.6 + 1.2*0.4) * 100 = 99, capped at 95."""
        current = make_weather(temperature=32, humidity=85, wind_speed=10, pressure=1005)
        forecast = make_forecast(FLAT, conditions=["Clear", "Clouds", "Clear", "Haze", "Clear"])
        risk = analyze_precipitation_risk(current, forecast)
        assert risk.probability == 95
        assert risk.intensity == PrecipitationIntensity.HEAVY
        assert risk.timeframe == "3-5 days"

    def test_dry_high_pressure(self, make_weather, make_forecast):
        """0.2*60 + 0.8*40 = 44 -> moderate."""
        current = make_weather(humidity=20, pressure=1020)
        risk = analyze_precipitation_risk(current, make_forecast(FLAT))
        assert risk.probability == 44
        assert risk.intensity == PrecipitationIntensity.MODERATE

    def test_light(self, make_weather, make_forecast):
        """0.1*60 + 0.8*40 = 38 -> light."""
        current = make_weather(humidity=10, pressure=1030)
        risk = analyze_precipitation_risk(current, make_forecast(FLAT))
        assert risk.probability == 38
        assert risk.intensity == PrecipitationIntensity.LIGHT

    def test_rainy_days_boost(self, make_weather, make_forecast):
        """62 base + 2/5 * 50 = 82."""
        current = make_weather(humidity=50, pressure=1020)
        forecast = make_forecast(
            FLAT, conditions=["Rain", "Clouds", "Thunderstorm", "Clear", "Clear"]
        )
        risk = analyze_precipitation_risk(current, forecast)
        assert risk.probability == 82
        assert risk.intensity == PrecipitationIntensity.HEAVY
        assert risk.timeframe == "24-48 hours"

    def test_condition_match_is_case_insensitive(self, make_weather, make_forecast):
        current = make_weather(humidity=50, pressure=1020)
        forecast = make_forecast([(20, 10)], conditions=["light RAIN"])
        assert analyze_precipitation_risk(current, forecast).timeframe == "24-48 hours"

    def test_empty_forecast(self, make_weather):
        risk = analyze_precipitation_risk(make_weather(humidity=20, pressure=1020), [])
        assert risk.probability == 44
        assert risk.timeframe == "3-5 days"


class TestPressure:
    @pytest.mark.parametrize(
        "pressure,trend",
        [
            (1030, PressureTrend.RISING),
            (1019, PressureTrend.RISING),
            (1018, PressureTrend.STABLE),
            (1013, PressureTrend.STABLE),
            (1009, PressureTrend.STABLE),
            (1008, PressureTrend.FALLING),
            (980, PressureTrend.FALLING),
        ],
    )
    def test_bands(self, make_weather, pressure, trend):
        assert analyze_pressure(make_weather(pressure=pressure)).trend == trend

    def test_rate_and_implication(self, make_weather):
        analysis = analyze_pressure(make_weather(pressure=1000))
        assert analysis.rate == pytest.approx(13.25)
        assert analysis.weather_implication == "Unsettled weather, possible storms"

    def test_stable_implication(self, make_weather):
        analysis = analyze_pressure(make_weather(pressure=1013))
        assert analysis.weather_implication == "Weather conditions remain steady"


class TestWind:
    def test_calm(self, make_weather, make_forecast):
        wind = analyze_wind(make_weather(wind_speed=5), make_forecast(FLAT, wind=5))
        assert wind.gust_probability == 20
        assert wind.direction_stability == 90
        assert wind.strength_trend == WindStrengthTrend.STABLE

    def test_moderate(self, make_weather, make_forecast):
        wind = analyze_wind(make_weather(wind_speed=16), make_forecast(FLAT, wind=16))
        assert wind.gust_probability == 50
        assert wind.direction_stability == 70

    def test_strong_and_increasing(self, make_weather, make_forecast):
        wind = analyze_wind(make_weather(wind_speed=30), make_forecast(FLAT, wind=40))
        assert wind.gust_probability == 80
        assert wind.direction_stability == 40
        assert wind.strength_trend == WindStrengthTrend.INCREASING

    def test_decreasing(self, make_weather, make_forecast):
        wind = analyze_wind(make_weather(wind_speed=20), make_forecast(FLAT, wind=10))
        assert wind.strength_trend == WindStrengthTrend.DECREASING

    def test_deadband(self, make_weather, make_forecast):
        wind = analyze_wind(make_weather(wind_speed=20), make_forecast(FLAT, wind=25))
        assert wind.strength_trend == WindStrengthTrend.STABLE

    def test_empty_forecast(self, make_weather):
        assert analyze_wind(make_weather(), []).strength_trend == WindStrengthTrend.STABLE


class TestAirQuality:
    def test_stagnant_air(self, make_weather, make_forecast):
        current = make_weather(wind_speed=3, pressure=1025, humidity=85)
        aqi = predict_air_quality(current, make_forecast(FLAT))
        assert aqi.aqi == 80
        assert aqi.category == "Moderate"
        assert aqi.trend == Trend.UP
        assert aqi.confidence == 75

    def test_windy_and_rain(self, make_weather, make_forecast):
        forecast = make_forecast(FLAT, conditions=["Clear", "Rain", "Clear", "Clear", "Clear"])
        aqi = predict_air_quality(make_weather(wind_speed=20), forecast)
        assert aqi.aqi == 20
        assert aqi.category == "Good"
        assert aqi.trend == Trend.DOWN

    def test_storms_do_not_wash_out(self, make_weather, make_forecast):
        forecast = make_forecast(FLAT, conditions=["Thunderstorm"] * 5)
        aqi = predict_air_quality(make_weather(wind_speed=10), forecast)
        assert aqi.aqi == 45
        assert aqi.trend == Trend.STABLE


class TestGeneratePredictions:
    @pytest.fixture
    def scenario(self, make_weather, make_forecast):
        current = make_weather(temperature=32, humidity=85, wind_speed=10, pressure=1005)
        forecast = make_forecast([(15, 5), (17, 7), (19, 9), (21, 11), (23, 13)])
        return current, forecast

    def test_five_cards_in_order(self, scenario):
        predictions = generate_predictions(*scenario)
        assert [p.type for p in predictions] == [
            PredictionType.TEMPERATURE,
            PredictionType.PRECIPITATION,
            PredictionType.PRESSURE,
            PredictionType.WIND,
            PredictionType.AIR_QUALITY,
        ]

    def test_deterministic(self, scenario):
        assert generate_predictions(*scenario) == generate_predictions(*scenario)

    def test_card_contents(self, scenario):
        temp, precip, pressure, wind, aqi = generate_predictions(*scenario)

        assert temp.value == "+2.0°C/day"
        assert temp.description == "Rising temperature pattern detected"
        assert temp.severity == Severity.MEDIUM
        assert temp.trend == Trend.UP
        assert temp.timeframe == "Next 5 days"

        assert precip.value == "95% chance"
        assert precip.confidence == 95
        assert precip.severity == Severity.HIGH
        assert precip.trend == Trend.UP
        assert precip.description == "heavy precipitation expected"

        assert pressure.value == "1005 hPa"
        assert pressure.confidence == 85
        assert pressure.severity == Severity.MEDIUM
        assert pressure.trend == Trend.DOWN

        assert wind.description == "Wind gusts possible"
        assert wind.confidence == 70
        assert wind.severity == Severity.LOW
        assert wind.value == "20% gust risk"

        assert aqi.value == "Good (50)"
        assert aqi.severity == Severity.LOW
        assert aqi.description == "Air quality expected to be good"
        assert aqi.timeframe == "Tomorrow"

    def test_stable_temperature_value(self, make_weather, make_forecast):
        temp = generate_predictions(make_weather(), make_forecast(FLAT))[0]
        assert temp.value == "±0.0°C/day"
        assert temp.trend == Trend.STABLE

    def test_short_forecast_still_five_cards(self, make_weather):
        assert len(generate_predictions(make_weather(), [])) == 5

    def test_analyze_bundle(self, scenario):
        analytics = analyze(*scenario)
        assert analytics.temperature_trend.direction == TemperatureDirection.WARMING
        assert analytics.pressure_analysis.trend == PressureTrend.FALLING


class TestSeverityIndex:
    def test_benign(self, make_weather, make_forecast):
        assert calculate_severity_index(make_weather(), make_forecast(FLAT)) == 0

    def test_wind_bands(self, make_weather, make_forecast):
        forecast = make_forecast(FLAT)
        assert calculate_severity_index(make_weather(wind_speed=25), forecast) == 0
        assert calculate_severity_index(make_weather(wind_speed=26), forecast) == 20
        assert calculate_severity_index(make_weather(wind_speed=51), forecast) == 40

    def test_monotonic_in_wind(self, make_weather, make_forecast):
        forecast = make_forecast(FLAT)
        scores = [
            calculate_severity_index(make_weather(wind_speed=w), forecast)
            for w in range(0, 81)
        ]
        assert scores == sorted(scores)
        assert all(0 <= s <= 100 for s in scores)

    def test_temperature_bands(self, make_weather, make_forecast):
        current = make_weather()
        assert calculate_severity_index(current, make_forecast([(32, 20)] * 5)) == 15
        assert calculate_severity_index(current, make_forecast([(36, 20)] * 5)) == 30
        assert calculate_severity_index(current, make_forecast([(-5, -10)] * 5)) == 15
        assert calculate_severity_index(current, make_forecast([(-11, -20)] * 5)) == 30

    def test_pressure_bands(self, make_weather, make_forecast):
        forecast = make_forecast(FLAT)
        # humidity 0 keeps precipitation below 60 even with the low-pressure factor
        assert calculate_severity_index(make_weather(humidity=0, pressure=995), forecast) == 15
        assert calculate_severity_index(make_weather(humidity=0, pressure=985), forecast) == 25

    def test_precipitation_bands(self, make_weather, make_forecast):
        forecast = make_forecast(FLAT)
        # 0.5*60 + 0.8*40 = 62 -> +20
        assert calculate_severity_index(make_weather(humidity=50), forecast) == 20
        # 95 heavy -> +35, plus pressure < 1000 -> +15
        assert calculate_severity_index(make_weather(humidity=95, pressure=999), forecast) == 50

    def test_clamped(self, make_weather, make_forecast):
        current = make_weather(wind_speed=60, humidity=95, pressure=980)
        assert calculate_severity_index(current, make_forecast([(40, 30)] * 5)) == 100

    def test_empty_forecast(self, make_weather):
        assert calculate_severity_index(make_weather(wind_speed=30), []) == 20
