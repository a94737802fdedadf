"""Output formatters for weather reports, predictions and history stats."""

import dataclasses
import json

from temptrackr.models.analytics import OutfitSuggestion, PredictionResult
from temptrackr.models.history import LocationStats
from temptrackr.models.weather import CityWeather, ForecastData, WeatherData
from temptrackr.utils.weather_utils import get_weather_icon

_TREND_ARROWS = {"up": "↑", "down": "↓", "stable": "→"}


def format_report_text(
    current: WeatherData,
    forecast: list[ForecastData],
    predictions: list[PredictionResult],
    severity_index: int,
    outfits: list[OutfitSuggestion],
) -> str:
    """Plain text report for the terminal."""
    uv = "unknown" if current.uv_index is None else f"{current.uv_index:g}"
    lines = [
        f"=== {current.location} ===",
        f"{get_weather_icon(current.condition)} {current.temperature:.1f}°C "
        f"{current.condition}"
        + (f" ({current.description})" if current.description else ""),
        f"Humidity: {current.humidity}% | Wind: {current.wind_speed} km/h | "
        f"Pressure: {current.pressure} hPa",
        f"Visibility: {current.visibility} km | UV index: {uv}",
    ]

    if forecast:
        lines.append("")
        lines.append("Forecast:")
        for day in forecast:
            lines.append(
                f"  {day.day} {day.date}: {get_weather_icon(day.condition)} "
                f"{day.low:.1f}..{day.high:.1f}°C {day.condition}, "
                f"{day.humidity}%, {day.wind_speed} km/h"
            )

    lines.append("")
    lines.append(f"Severity index: {severity_index}/100")
    lines.append("Predictions:")
    for p in predictions:
        lines.append(
            f"  [{p.severity.upper():<6}] {p.title}: {p.value} "
            f"{_TREND_ARROWS[p.trend]} ({p.confidence}% conf, {p.timeframe})"
        )
        lines.append(f"           {p.description}")

    if outfits:
        lines.append("")
        lines.append("What to wear:")
        for o in outfits:
            lines.append(f"  {o.category}: {', '.join(o.items)}")
    return "\n".join(lines)


def format_report_json(
    current: WeatherData,
    forecast: list[ForecastData],
    predictions: list[PredictionResult],
    severity_index: int,
    outfits: list[OutfitSuggestion],
) -> str:
    """JSON report for programmatic consumption."""
    data = {
        "current": dataclasses.asdict(current),
        "forecast": [dataclasses.asdict(d) for d in forecast],
        "predictions": [dataclasses.asdict(p) for p in predictions],
        "severity_index": severity_index,
        "outfits": [dataclasses.asdict(o) for o in outfits],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_stats_text(location: str, days: int, stats: LocationStats | None) -> str:
    if stats is None:
        return f"No historical data for {location} in the last {days} days"
    lines = [f"{location}: {stats.total_days} days recorded (last {days} days)"]
    for label, metric, unit in (
        ("Temperature", stats.temperature, "°C"),
        ("Humidity", stats.humidity, "%"),
        ("Wind", stats.wind_speed, " km/h"),
        ("Pressure", stats.pressure, " hPa"),
    ):
        lines.append(
            f"  {label}: avg {metric.avg:.1f}{unit}, "
            f"min {metric.min:g}{unit}, max {metric.max:g}{unit}"
        )
    if stats.temperature_trend is not None:
        t = stats.temperature_trend
        lines.append(
            f"  Temperature trend: {_TREND_ARROWS[t.trend]} {t.trend} ({t.change:.1f}°C)"
        )
    lines.append("  Conditions:")
    for c in stats.conditions:
        lines.append(f"    {c.condition}: {c.count} ({c.percentage}%)")
    return "\n".join(lines)


def format_comparison_text(cities: list[CityWeather]) -> str:
    """One line per city: temperature, condition, humidity, wind, visibility, pressure."""
    width = max((len(c.city) for c in cities), default=0)
    lines = []
    for c in cities:
        w = c.weather
        if w is None:
            lines.append(f"{c.city:<{width}}  failed to load")
            continue
        lines.append(
            f"{c.city:<{width}}  {get_weather_icon(w.condition)} {w.temperature:g}°C "
            f"{w.condition}, {w.humidity}%, {w.wind_speed} km/h, "
            f"{w.visibility} km, {w.pressure} hPa"
        )
    return "\n".join(lines)
