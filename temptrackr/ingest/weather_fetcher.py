"""Weather fetcher: resolves a place name and builds WeatherData / ForecastData."""

import logging
from datetime import UTC, datetime, timedelta, timezone

from temptrackr.ingest.openweather_client import OpenWeatherClient
from temptrackr.models.common import (
    Coordinates,
    round_half_up,
    round_tenths,
    utc_now_iso,
)
from temptrackr.models.weather import CityWeather, ForecastData, WeatherData

logger = logging.getLogger(__name__)

MS_TO_KMH = 3.6
DEFAULT_VISIBILITY_M = 10000
MAX_COMPARE_CITIES = 6


def normalize_location(location: str) -> list[str]:
    """Query variations to try, in order, when geocoding a user-typed place."""
    normalized = location.strip()
    variations = [normalized]

    for state in (", NY", ", CA"):
        if state in normalized:
            variations.append(normalized.replace(state, ", US"))
            variations.append(normalized.replace(state, ""))

    if "new york" in normalized.lower():
        variations.extend(["New York City, US", "NYC, US", "New York"])

    return list(dict.fromkeys(variations))


class WeatherFetcher:
    def __init__(
        self,
        client: OpenWeatherClient,
        uv_index_estimate: float | None = None,
    ):
        self.client = client
        self.uv_index_estimate = uv_index_estimate
        self._places: dict[str, dict] = {}

    def resolve(self, location: str) -> dict | None:
        """Geocode a location, trying each normalized variation in turn.

        Prefers a result whose name equals the first comma-separated part
        of the variation. Results are cached per location string.
        """
        key = location.strip().lower()
        if key in self._places:
            return self._places[key]

        for variation in normalize_location(location):
            try:
                results = self.client.geocode(variation, limit=5)
            except Exception:
                logger.exception("Geocoding failed for %r", variation)
                continue
            if not results:
                continue
            wanted = variation.split(",")[0].strip().lower()
            place = next(
                (r for r in results if str(r.get("name", "")).lower() == wanted),
                results[0],
            )
            logger.info(
                "Resolved %r to %s, %s at %s,%s",
                location, place.get("name"), place.get("country"),
                place.get("lat"), place.get("lon"),
            )
            self._places[key] = place
            return place

        logger.warning("No coordinates found for %r", location)
        return None

    def fetch_current(self, location: str) -> WeatherData | None:
        place = self.resolve(location)
        if place is None:
            return None
        try:
            raw = self.client.get_current(place["lat"], place["lon"])
            return _parse_current(
                raw, Coordinates(place["lat"], place["lon"]), self.uv_index_estimate
            )
        except Exception:
            logger.exception("Failed to fetch current weather for %s", location)
            return None

    def fetch_forecast(self, location: str, days: int = 5) -> list[ForecastData]:
        place = self.resolve(location)
        if place is None:
            return []
        try:
            raw = self.client.get_forecast(place["lat"], place["lon"])
            return _aggregate_forecast(raw, days)
        except Exception:
            logger.exception("Failed to fetch forecast for %s", location)
            return []

    def compare(self, locations: list[str]) -> list[CityWeather]:
        """Current weather for several cities side by side, in the given order.

        Blank names are ignored. A city whose fetch fails is kept with
        weather=None. Raises ValueError for more than MAX_COMPARE_CITIES.
        """
        cities = [loc.strip() for loc in locations if loc.strip()]
        if len(cities) > MAX_COMPARE_CITIES:
            raise ValueError(
                f"At most {MAX_COMPARE_CITIES} cities can be compared, got {len(cities)}"
            )
        return [CityWeather(city, self.fetch_current(city)) for city in cities]

    def clear_cache(self) -> None:
        self._places.clear()


def _parse_current(
    raw: dict, coordinates: Coordinates, uv_index: float | None
) -> WeatherData:
    """Convert an OpenWeatherMap current-weather payload (metric units)."""
    main = raw["main"]
    weather = raw["weather"][0]
    return WeatherData(
        location=f"{raw['name']}, {raw['sys']['country']}",
        temperature=round_tenths(main["temp"]),
        condition=weather["main"],
        description=weather.get("description"),
        humidity=int(main["humidity"]),
        wind_speed=round_half_up(raw.get("wind", {}).get("speed", 0) * MS_TO_KMH),
        pressure=round_half_up(main["pressure"]),
        visibility=round_half_up((raw.get("visibility") or DEFAULT_VISIBILITY_M) / 1000),
        uv_index=uv_index,
        icon=weather.get("icon"),
        timestamp=utc_now_iso(),
        coordinates=coordinates,
    )


def _aggregate_forecast(raw: dict, days: int) -> list[ForecastData]:
    """Collapse 3-hourly forecast items into per-day summaries.

    Items are grouped by local calendar date using the city's UTC offset.
    Condition, description, icon and pressure come from each day's first item.
    """
    offset = timezone(timedelta(seconds=raw.get("city", {}).get("timezone", 0)))
    grouped: dict[str, list[dict]] = {}
    for item in raw.get("list", []):
        local = datetime.fromtimestamp(item["dt"], UTC).astimezone(offset)
        grouped.setdefault(local.date().isoformat(), []).append(item)

    forecast = []
    for day_iso, items in list(grouped.items())[:days]:
        temps = [i["main"]["temp"] for i in items]
        humidity = [i["main"]["humidity"] for i in items]
        wind = [i.get("wind", {}).get("speed", 0) * MS_TO_KMH for i in items]
        first = items[0]["weather"][0]
        forecast.append(
            ForecastData(
                day=datetime.fromisoformat(day_iso).strftime("%a"),
                date=day_iso,
                high=round_tenths(max(temps)),
                low=round_tenths(min(temps)),
                condition=first["main"],
                description=first.get("description", ""),
                icon=first.get("icon", ""),
                humidity=round_half_up(sum(humidity) / len(humidity)),
                wind_speed=round_half_up(sum(wind) / len(wind)),
                pressure=round_half_up(items[0]["main"]["pressure"]),
            )
        )
    return forecast
