"""Clothing suggestions derived from current conditions."""

from temptrackr.models.analytics import OutfitSuggestion
from temptrackr.models.weather import WeatherData


def _temperature_band(temp: float) -> OutfitSuggestion:
    if temp < 0:
        return OutfitSuggestion(
            category="Winter Essentials",
            items=[
                "Heavy winter coat", "Thermal underwear", "Wool sweater",
                "Insulated boots", "Warm hat & gloves",
            ],
            reason=f"Extremely cold at {temp:g}°C - dress in layers for warmth",
            icon="snowflake",
        )
    if temp < 10:
        return OutfitSuggestion(
            category="Cold Weather",
            items=[
                "Warm jacket", "Long pants", "Closed shoes", "Light scarf",
                "Sweater or hoodie",
            ],
            reason=f"Cold temperature at {temp:g}°C - layer up for comfort",
            icon="thermometer",
        )
    if temp < 20:
        return OutfitSuggestion(
            category="Mild Weather",
            items=[
                "Light jacket or cardigan", "Long pants or jeans",
                "Comfortable shoes", "Light sweater",
            ],
            reason=f"Mild temperature at {temp:g}°C - perfect for layering",
            icon="shirt",
        )
    if temp < 30:
        return OutfitSuggestion(
            category="Warm Weather",
            items=[
                "T-shirt or light blouse", "Shorts or light pants",
                "Sandals or sneakers", "Light cardigan",
            ],
            reason=f"Pleasant temperature at {temp:g}°C - dress comfortably",
            icon="sun",
        )
    return OutfitSuggestion(
        category="Hot Weather",
        items=[
            "Lightweight breathable fabrics", "Shorts", "Sandals", "Sun hat",
            "Sunglasses",
        ],
        reason=f"Hot temperature at {temp:g}°C - stay cool and protected",
        icon="sun",
    )


def suggest_outfits(weather: WeatherData) -> list[OutfitSuggestion]:
    """One temperature band first, then condition, wind and humidity add-ons."""
    suggestions = [_temperature_band(weather.temperature)]
    condition = weather.condition.lower()

    if "rain" in condition or "drizzle" in condition:
        suggestions.append(OutfitSuggestion(
            category="Rain Protection",
            items=[
                "Waterproof jacket or raincoat", "Umbrella", "Waterproof shoes",
                "Quick-dry materials",
            ],
            reason="Rain expected - stay dry and comfortable",
            icon="cloud-rain",
        ))

    if "snow" in condition:
        suggestions.append(OutfitSuggestion(
            category="Snow Gear",
            items=["Waterproof boots", "Warm socks", "Gloves", "Snow-resistant outer layer"],
            reason="Snow conditions - prioritize warmth and traction",
            icon="snowflake",
        ))

    if weather.wind_speed > 20:
        suggestions.append(OutfitSuggestion(
            category="Windy Conditions",
            items=[
                "Wind-resistant jacket", "Secure hat or avoid loose items",
                "Closed shoes", "Fitted clothing",
            ],
            reason=f"Strong winds at {weather.wind_speed} km/h - avoid loose clothing",
            icon="wind",
        ))

    if weather.humidity > 80:
        suggestions.append(OutfitSuggestion(
            category="High Humidity",
            items=[
                "Breathable fabrics", "Moisture-wicking materials", "Light colors",
                "Minimal layers",
            ],
            reason=f"High humidity at {weather.humidity}% - choose breathable materials",
            icon="droplets",
        ))

    return suggestions
