"""Location search, reverse geocoding and current-position lookup.

Every function here degrades to a local answer instead of raising: network
failures, bad status codes and odd payloads fall back to the built-in city
table, and geolocation problems resolve to None.
"""

import asyncio
import logging

from temptrackr.config.defaults import FALLBACK_CITIES
from temptrackr.ingest.geocoding_client import GeocodingClient
from temptrackr.ingest.geolocation import GeolocationProvider
from temptrackr.models.common import Coordinates
from temptrackr.models.location import LocationSuggestion

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 5
GEOLOCATION_TIMEOUT_SECONDS = 10.0


def format_display_name(item: dict) -> str:
    """'{name}, {state}, {country}' with the state omitted when absent."""
    state = item.get("state")
    return f"{item['name']}{f', {state}' if state else ''}, {item['country']}"


def _to_suggestion(item: dict) -> LocationSuggestion:
    return LocationSuggestion(
        name=item["name"],
        display_name=format_display_name(item),
        country=item["country"],
        coordinates=Coordinates(lat=float(item["lat"]), lon=float(item["lon"])),
    )


def fallback_search(query: str, limit: int = SEARCH_LIMIT) -> list[LocationSuggestion]:
    """Case-insensitive substring match over the built-in city table."""
    q = query.strip().lower()
    if not q:
        return []
    matches = [
        city for city in FALLBACK_CITIES
        if q in city.name.lower()
        or q in city.display_name.lower()
        or q in city.country.lower()
    ]
    return matches[:limit]


def fallback_reverse_geocode(lat: float, lon: float) -> str | None:
    """Display name of the nearest built-in city by Manhattan distance in degrees."""
    if not FALLBACK_CITIES:
        return None
    closest = min(
        FALLBACK_CITIES,
        key=lambda c: abs(lat - c.coordinates.lat) + abs(lon - c.coordinates.lon),
    )
    return closest.display_name


async def search_locations(
    client: GeocodingClient, query: str, limit: int = SEARCH_LIMIT
) -> list[LocationSuggestion]:
    """Search places by free text, falling back to the built-in table."""
    if not query.strip():
        return []

    try:
        items = await client.search(query, limit=limit)
        return [_to_suggestion(item) for item in items]
    except Exception as e:
        logger.warning("Location search failed for %r, using fallback list: %s", query, e)
        return fallback_search(query, limit)


async def reverse_geocode(client: GeocodingClient, lat: float, lon: float) -> str | None:
    """Display name for a coordinate, falling back to the nearest built-in city."""
    try:
        items = await client.reverse(lat, lon, limit=1)
        if items:
            return format_display_name(items[0])
        logger.info("Reverse geocoding returned no results for %.4f,%.4f", lat, lon)
    except Exception as e:
        logger.warning(
            "Reverse geocoding failed for %.4f,%.4f, using fallback list: %s", lat, lon, e
        )
    return fallback_reverse_geocode(lat, lon)


async def get_current_location(
    provider: GeolocationProvider | None,
    timeout: float = GEOLOCATION_TIMEOUT_SECONDS,
    high_accuracy: bool = True,
) -> Coordinates | None:
    """Ask the provider for the current position; None on absence, error or timeout."""
    if provider is None:
        return None
    try:
        return await asyncio.wait_for(provider.locate(high_accuracy=high_accuracy), timeout)
    except TimeoutError:
        logger.warning("Geolocation timed out after %.1fs", timeout)
        return None
    except Exception as e:
        logger.warning("Geolocation unavailable: %s", e)
        return None
