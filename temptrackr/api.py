"""TempTrackr JSON API: FastAPI backend for the browser dashboard."""

import dataclasses
import os
from collections.abc import Iterator
from datetime import UTC, datetime
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from temptrackr.analytics.outfits import suggest_outfits
from temptrackr.analytics.predictor import (
    analyze,
    calculate_severity_index,
    generate_predictions,
)
from temptrackr.config.loader import load_config
from temptrackr.config.schema import TrackrConfig
from temptrackr.ingest.geocoding_client import GeocodingClient
from temptrackr.ingest.location_resolver import reverse_geocode, search_locations
from temptrackr.ingest.openweather_client import OpenWeatherClient
from temptrackr.ingest.weather_fetcher import WeatherFetcher
from temptrackr.models.common import Coordinates
from temptrackr.models.weather import ForecastData, WeatherData
from temptrackr.storage import history_repo, location_repo
from temptrackr.storage.database import connect, run_migrations
from temptrackr.storage.kv_store import KeyValueStore, SqliteStore

CONFIG_PATH = os.environ.get("TEMPTRACKR_CONFIG", "ops/configs/default.yaml")
DB_PATH = os.environ.get("TEMPTRACKR_DB", "data/temptrackr.db")

app = FastAPI(title="TempTrackr", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Dependencies ────────────────────────────────────────────────


@lru_cache
def get_config() -> TrackrConfig:
    return load_config(CONFIG_PATH)


def get_store() -> Iterator[KeyValueStore]:
    conn = connect(DB_PATH)
    run_migrations(conn)
    try:
        yield SqliteStore(conn)
    finally:
        conn.close()


def get_fetcher(config: TrackrConfig = Depends(get_config)) -> WeatherFetcher:
    ow = config.openweather
    client = OpenWeatherClient(
        base_url=ow.base_url,
        api_key=ow.api_key,
        timeout=ow.timeout,
        max_retries=ow.max_retries,
        retry_base_delay=ow.retry_base_delay,
    )
    return WeatherFetcher(client, uv_index_estimate=config.analytics.uv_index_estimate)


def get_geocoder(config: TrackrConfig = Depends(get_config)) -> GeocodingClient:
    ow = config.openweather
    return GeocodingClient(base_url=ow.base_url, api_key=ow.api_key, timeout=ow.timeout)


class LocationIn(BaseModel):
    name: str
    display_name: str | None = None
    country: str = ""
    is_favorite: bool = False
    lat: float | None = None
    lon: float | None = None


class RecentIn(BaseModel):
    location: str


def _current_or_404(fetcher: WeatherFetcher, location: str) -> WeatherData:
    if not location.strip():
        raise HTTPException(400, "Location is required")
    current = fetcher.fetch_current(location)
    if current is None:
        raise HTTPException(
            404, f'Location "{location}" not found or weather service unavailable'
        )
    return current


def _forecast(
    fetcher: WeatherFetcher, config: TrackrConfig, location: str
) -> list[ForecastData]:
    return fetcher.fetch_forecast(location, days=config.analytics.forecast_days)


# ── Weather endpoints ───────────────────────────────────────────


@app.get("/api/weather/current")
def get_current_weather(
    location: str = "",
    fetcher: WeatherFetcher = Depends(get_fetcher),
    store: KeyValueStore = Depends(get_store),
    config: TrackrConfig = Depends(get_config),
):
    """Current conditions; also records today's snapshot for the location."""
    current = _current_or_404(fetcher, location)
    history_repo.store_weather_data(
        store, current.location, current,
        max_entries=config.storage.max_history_entries,
    )
    return dataclasses.asdict(current)


@app.get("/api/weather/forecast")
def get_forecast(
    location: str = "",
    fetcher: WeatherFetcher = Depends(get_fetcher),
    config: TrackrConfig = Depends(get_config),
):
    if not location.strip():
        raise HTTPException(400, "Location is required")
    forecast = _forecast(fetcher, config, location)
    if not forecast:
        raise HTTPException(
            404, f'Location "{location}" not found or forecast service unavailable'
        )
    return [dataclasses.asdict(d) for d in forecast]


@app.get("/api/weather/compare")
def compare_weather(
    locations: list[str] = Query(default=[]),
    fetcher: WeatherFetcher = Depends(get_fetcher),
):
    """Current weather per city; cities that failed to load carry weather=null."""
    try:
        cities = fetcher.compare(locations)
    except ValueError as e:
        raise HTTPException(400, str(e)) from e
    if not cities:
        raise HTTPException(400, "At least one location is required")
    return [dataclasses.asdict(c) for c in cities]


@app.get("/api/predictions")
def get_predictions(
    location: str = "",
    fetcher: WeatherFetcher = Depends(get_fetcher),
    config: TrackrConfig = Depends(get_config),
):
    """Analytics, the five prediction cards and the severity index."""
    current = _current_or_404(fetcher, location)
    forecast = _forecast(fetcher, config, location)
    return {
        "location": current.location,
        "analytics": dataclasses.asdict(analyze(current, forecast)),
        "predictions": [
            dataclasses.asdict(p) for p in generate_predictions(current, forecast)
        ],
        "severity_index": calculate_severity_index(current, forecast),
    }


@app.get("/api/outfits")
def get_outfits(location: str = "", fetcher: WeatherFetcher = Depends(get_fetcher)):
    current = _current_or_404(fetcher, location)
    return [dataclasses.asdict(o) for o in suggest_outfits(current)]


# ── Location endpoints ──────────────────────────────────────────


@app.get("/api/locations/search")
async def search(q: str = "", geocoder: GeocodingClient = Depends(get_geocoder)):
    results = await search_locations(geocoder, q)
    return [dataclasses.asdict(r) for r in results]


@app.get("/api/locations/reverse")
async def reverse(lat: float, lon: float, geocoder: GeocodingClient = Depends(get_geocoder)):
    return {"display_name": await reverse_geocode(geocoder, lat, lon)}


@app.get("/api/locations")
def list_locations(favorites: bool = False, store: KeyValueStore = Depends(get_store)):
    locations = (
        location_repo.get_favorite_locations(store)
        if favorites else location_repo.get_saved_locations(store)
    )
    return [dataclasses.asdict(loc) for loc in locations]


@app.post("/api/locations")
def save_location(body: LocationIn, store: KeyValueStore = Depends(get_store)):
    coords = None
    if body.lat is not None and body.lon is not None:
        coords = Coordinates(body.lat, body.lon)
    saved = location_repo.save_location(
        store,
        name=body.name,
        display_name=body.display_name or body.name,
        country=body.country,
        is_favorite=body.is_favorite,
        coordinates=coords,
    )
    return dataclasses.asdict(saved)


@app.delete("/api/locations/{location_id}")
def delete_location(location_id: str, store: KeyValueStore = Depends(get_store)):
    location_repo.remove_location(store, location_id)
    return {"status": "ok"}


@app.post("/api/locations/{location_id}/favorite")
def toggle_favorite(location_id: str, store: KeyValueStore = Depends(get_store)):
    updated = location_repo.toggle_favorite(store, location_id)
    if updated is None:
        raise HTTPException(404, "Location not found")
    return dataclasses.asdict(updated)


@app.get("/api/locations/recent")
def get_recent(store: KeyValueStore = Depends(get_store)):
    return location_repo.get_recent_locations(store)


@app.post("/api/locations/recent")
def add_recent(
    body: RecentIn,
    store: KeyValueStore = Depends(get_store),
    config: TrackrConfig = Depends(get_config),
):
    return location_repo.add_to_recent(
        store, body.location, max_recent=config.storage.max_recent_locations
    )


# ── History endpoints ───────────────────────────────────────────


@app.get("/api/history")
def get_history(location: str, days: int = 30, store: KeyValueStore = Depends(get_store)):
    entries = history_repo.get_historical_data(store, location, days)
    return [dataclasses.asdict(e) for e in entries]


@app.get("/api/history/stats")
def get_history_stats(
    location: str, days: int = 30, store: KeyValueStore = Depends(get_store)
):
    stats = history_repo.get_location_stats(store, location, days)
    return None if stats is None else dataclasses.asdict(stats)


@app.get("/api/history/trend")
def get_history_trend(
    location: str, days: int = 30, store: KeyValueStore = Depends(get_store)
):
    return dataclasses.asdict(history_repo.get_temperature_trend(store, location, days))


@app.get("/api/health")
def get_health():
    return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}


if __name__ == "__main__":
    import uvicorn

    cfg = get_config()
    uvicorn.run(app, host=cfg.api.host, port=cfg.api.port)
