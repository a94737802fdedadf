"""Display lookups keyed by weather condition."""

DEFAULT_ICON = "🌤️"
DEFAULT_COLOR = "text-primary"

CONDITION_ICONS: dict[str, str] = {
    "Clear": "☀️",
    "Clouds": "☁️",
    "Rain": "🌧️",
    "Drizzle": "🌦️",
    "Thunderstorm": "⛈️",
    "Snow": "❄️",
    "Mist": "🌫️",
    "Fog": "🌫️",
    "Haze": "🌫️",
}

CONDITION_COLORS: dict[str, str] = {
    "Clear": "text-yellow-500",
    "Clouds": "text-gray-500",
    "Rain": "text-blue-500",
    "Drizzle": "text-blue-400",
    "Thunderstorm": "text-purple-500",
    "Snow": "text-blue-200",
    "Mist": "text-gray-400",
    "Fog": "text-gray-400",
    "Haze": "text-gray-400",
}


def get_weather_icon(condition: str) -> str:
    return CONDITION_ICONS.get(condition, DEFAULT_ICON)


def get_weather_condition_color(condition: str) -> str:
    return CONDITION_COLORS.get(condition, DEFAULT_COLOR)
