"""Repository for saved, favorite and recent locations."""

import dataclasses
import logging
from datetime import datetime

from temptrackr.models.common import Coordinates, epoch_ms, utc_now
from temptrackr.models.location import SavedLocation
from temptrackr.storage.kv_store import KeyValueStore, read_json_list, write_json_list

logger = logging.getLogger(__name__)

SAVED_KEY = "weather-locations"
RECENT_KEY = "weather-recent-locations"
MAX_RECENT = 10


def _to_record(location: SavedLocation) -> dict:
    return dataclasses.asdict(location)


def _from_record(record: dict) -> SavedLocation:
    coords = record.get("coordinates")
    return SavedLocation(
        id=str(record["id"]),
        name=record["name"],
        display_name=record.get("display_name", record["name"]),
        country=record.get("country", ""),
        is_favorite=bool(record.get("is_favorite", False)),
        last_updated=record.get("last_updated", ""),
        coordinates=Coordinates(**coords) if coords else None,
    )


def _persist(store: KeyValueStore | None, locations: list[SavedLocation]) -> None:
    write_json_list(store, SAVED_KEY, [_to_record(loc) for loc in locations])


def _new_id(now: datetime, taken: set[str]) -> str:
    candidate = epoch_ms(now)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


# --- Saved locations ---

def get_saved_locations(store: KeyValueStore | None) -> list[SavedLocation]:
    """Get all saved locations. Records that do not parse are skipped."""
    locations = []
    for record in read_json_list(store, SAVED_KEY):
        try:
            locations.append(_from_record(record))
        except (KeyError, TypeError, AttributeError):
            logger.warning("Dropping malformed saved location: %r", record)
    return locations


def save_location(
    store: KeyValueStore | None,
    name: str,
    display_name: str,
    country: str,
    is_favorite: bool = False,
    coordinates: Coordinates | None = None,
    now: datetime | None = None,
) -> SavedLocation:
    """Insert a location, or update the one whose name matches case-insensitively.

    An update keeps the existing id. Returns the stored record.
    """
    if now is None:
        now = utc_now()
    locations = get_saved_locations(store)

    fields = {
        "name": name,
        "display_name": display_name,
        "country": country,
        "is_favorite": is_favorite,
        "coordinates": coordinates,
        "last_updated": now.isoformat(),
    }

    for i, existing in enumerate(locations):
        if existing.name.lower() == name.lower():
            saved = dataclasses.replace(existing, **fields)
            locations[i] = saved
            break
    else:
        saved = SavedLocation(id=_new_id(now, {loc.id for loc in locations}), **fields)
        locations.append(saved)

    _persist(store, locations)
    return saved


def remove_location(store: KeyValueStore | None, location_id: str) -> None:
    """Remove a location by id. Unknown ids are ignored."""
    locations = get_saved_locations(store)
    remaining = [loc for loc in locations if loc.id != location_id]
    if len(remaining) != len(locations):
        _persist(store, remaining)


def toggle_favorite(
    store: KeyValueStore | None, location_id: str, now: datetime | None = None
) -> SavedLocation | None:
    """Flip the favorite flag. Returns the updated record, or None if unknown."""
    if now is None:
        now = utc_now()
    locations = get_saved_locations(store)
    for i, loc in enumerate(locations):
        if loc.id == location_id:
            locations[i] = dataclasses.replace(
                loc, is_favorite=not loc.is_favorite, last_updated=now.isoformat()
            )
            _persist(store, locations)
            return locations[i]
    return None


def get_favorite_locations(store: KeyValueStore | None) -> list[SavedLocation]:
    return [loc for loc in get_saved_locations(store) if loc.is_favorite]


# --- Recent locations ---

def get_recent_locations(store: KeyValueStore | None) -> list[str]:
    """Most-recent-first display strings."""
    return [str(item) for item in read_json_list(store, RECENT_KEY)]


def add_to_recent(
    store: KeyValueStore | None, location: str, max_recent: int = MAX_RECENT
) -> list[str]:
    """Move (or insert) a location to the front, capped at max_recent."""
    recent = [loc for loc in get_recent_locations(store) if loc != location]
    updated = [location, *recent][:max_recent]
    write_json_list(store, RECENT_KEY, updated)
    return updated
