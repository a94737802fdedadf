"""Saved-location and geocoding suggestion models."""

from dataclasses import dataclass

from temptrackr.models.common import Coordinates


@dataclass(frozen=True)
class SavedLocation:
    id: str
    name: str
    display_name: str
    country: str
    is_favorite: bool
    last_updated: str
    coordinates: Coordinates | None = None


@dataclass(frozen=True)
class LocationSuggestion:
    name: str
    display_name: str
    country: str
    coordinates: Coordinates
