"""CLI entry point for the TempTrackr weather dashboard."""

import argparse
import asyncio
import dataclasses
import json
import logging

import yaml
from pydantic import ValidationError

from temptrackr.analytics.outfits import suggest_outfits
from temptrackr.analytics.predictor import calculate_severity_index, generate_predictions
from temptrackr.config.loader import (
    config_hash,
    get_config_value,
    load_config,
    redacted_dump,
    save_config,
    set_config_value,
)
from temptrackr.config.schema import TrackrConfig
from temptrackr.ingest.geocoding_client import GeocodingClient
from temptrackr.ingest.geolocation import IpGeolocationProvider
from temptrackr.ingest.location_resolver import (
    get_current_location,
    reverse_geocode,
    search_locations,
)
from temptrackr.ingest.openweather_client import OpenWeatherClient
from temptrackr.ingest.weather_fetcher import WeatherFetcher
from temptrackr.models.common import Coordinates
from temptrackr.reporting.formatters import (
    format_comparison_text,
    format_report_json,
    format_report_text,
    format_stats_text,
)
from temptrackr.storage import history_repo, location_repo
from temptrackr.storage.database import connect, run_migrations
from temptrackr.storage.kv_store import SqliteStore

DEFAULT_CONFIG = "ops/configs/default.yaml"
DEFAULT_DB = "data/temptrackr.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="temptrackr",
        description="Weather dashboard: conditions, predictions and history",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")

    sub = parser.add_subparsers(dest="command")

    # weather
    weather_p = sub.add_parser("weather", help="Current weather, forecast and predictions")
    weather_p.add_argument("location")
    weather_p.add_argument("--json", action="store_true", help="Emit JSON")

    # compare
    compare_p = sub.add_parser("compare", help="Compare current weather across cities")
    compare_p.add_argument("locations", nargs="+", metavar="LOCATION")
    compare_p.add_argument("--json", action="store_true", help="Emit JSON")

    # search / reverse / locate
    search_p = sub.add_parser("search", help="Search for a location")
    search_p.add_argument("query")
    reverse_p = sub.add_parser("reverse", help="Reverse-geocode coordinates")
    reverse_p.add_argument("lat", type=float)
    reverse_p.add_argument("lon", type=float)
    sub.add_parser("locate", help="Look up the current position")

    # locations list / save / remove / favorite
    loc_p = sub.add_parser("locations", help="Saved location operations")
    loc_sub = loc_p.add_subparsers(dest="locations_command")
    list_p = loc_sub.add_parser("list", help="List saved locations")
    list_p.add_argument("--favorites", action="store_true")
    save_p = loc_sub.add_parser("save", help="Save a location")
    save_p.add_argument("name")
    save_p.add_argument("--display-name", default=None)
    save_p.add_argument("--country", default="")
    save_p.add_argument("--favorite", action="store_true")
    save_p.add_argument("--lat", type=float, default=None)
    save_p.add_argument("--lon", type=float, default=None)
    remove_p = loc_sub.add_parser("remove", help="Remove a saved location")
    remove_p.add_argument("id")
    fav_p = loc_sub.add_parser("favorite", help="Toggle favorite")
    fav_p.add_argument("id")

    # recent
    sub.add_parser("recent", help="Show recently viewed locations")

    # history / stats / prune
    history_p = sub.add_parser("history", help="Show stored daily snapshots")
    history_p.add_argument("location")
    history_p.add_argument("--days", type=int, default=30)
    stats_p = sub.add_parser("stats", help="Aggregate stored snapshots")
    stats_p.add_argument("location")
    stats_p.add_argument("--days", type=int, default=30)
    prune_p = sub.add_parser("prune", help="Delete old snapshots")
    prune_p.add_argument("--days", type=int, default=None)

    # check-key
    sub.add_parser("check-key", help="Verify the OpenWeatherMap API key")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except (ValidationError, yaml.YAMLError) as e:
        print(f"Error: invalid config {args.config}: {e}")
        return 1

    handlers = {
        "weather": _cmd_weather,
        "compare": _cmd_compare,
        "search": _cmd_search,
        "reverse": _cmd_reverse,
        "locate": _cmd_locate,
        "locations": _cmd_locations,
        "recent": _cmd_recent,
        "history": _cmd_history,
        "stats": _cmd_stats,
        "prune": _cmd_prune,
        "check-key": _cmd_check_key,
        "config": _cmd_config,
    }
    return handlers[args.command](config, args)


def _open_store(args) -> SqliteStore:
    conn = connect(args.db)
    run_migrations(conn)
    return SqliteStore(conn)


def _openweather(config: TrackrConfig) -> OpenWeatherClient:
    ow = config.openweather
    return OpenWeatherClient(
        base_url=ow.base_url,
        api_key=ow.api_key,
        timeout=ow.timeout,
        max_retries=ow.max_retries,
        retry_base_delay=ow.retry_base_delay,
    )


def _geocoder(config: TrackrConfig) -> GeocodingClient:
    ow = config.openweather
    return GeocodingClient(base_url=ow.base_url, api_key=ow.api_key, timeout=ow.timeout)


def _fetcher(config: TrackrConfig) -> WeatherFetcher:
    return WeatherFetcher(
        _openweather(config), uv_index_estimate=config.analytics.uv_index_estimate
    )


def _cmd_weather(config: TrackrConfig, args) -> int:
    fetcher = _fetcher(config)
    current = fetcher.fetch_current(args.location)
    if current is None:
        print(f"Error: could not fetch weather for {args.location!r}")
        return 1
    forecast = fetcher.fetch_forecast(args.location, days=config.analytics.forecast_days)

    predictions = generate_predictions(current, forecast)
    severity = calculate_severity_index(current, forecast)
    outfits = suggest_outfits(current)

    store = _open_store(args)
    try:
        history_repo.store_weather_data(
            store, current.location, current,
            max_entries=config.storage.max_history_entries,
        )
        location_repo.add_to_recent(
            store, current.location, max_recent=config.storage.max_recent_locations
        )
    finally:
        store.conn.close()

    formatter = format_report_json if args.json else format_report_text
    print(formatter(current, forecast, predictions, severity, outfits))
    return 0


def _cmd_compare(config: TrackrConfig, args) -> int:
    try:
        cities = _fetcher(config).compare(args.locations)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps([dataclasses.asdict(c) for c in cities], indent=2, ensure_ascii=False))
    else:
        print(format_comparison_text(cities))
    return 0 if any(c.weather is not None for c in cities) else 1


def _cmd_search(config: TrackrConfig, args) -> int:
    results = asyncio.run(
        search_locations(_geocoder(config), args.query, limit=config.openweather.search_limit)
    )
    if not results:
        print("No locations found")
        return 1
    for r in results:
        print(f"{r.display_name} ({r.coordinates.lat:.4f}, {r.coordinates.lon:.4f})")
    return 0


def _cmd_reverse(config: TrackrConfig, args) -> int:
    name = asyncio.run(reverse_geocode(_geocoder(config), args.lat, args.lon))
    if name is None:
        print("Location unknown")
        return 1
    print(name)
    return 0


def _cmd_locate(config: TrackrConfig, args) -> int:
    geo = config.geolocation
    provider = (
        IpGeolocationProvider(geo.provider_url, timeout=geo.timeout_seconds)
        if geo.enabled else None
    )
    coords = asyncio.run(
        get_current_location(provider, geo.timeout_seconds, geo.high_accuracy)
    )
    if coords is None:
        print("Current location unavailable")
        return 1
    name = asyncio.run(reverse_geocode(_geocoder(config), coords.lat, coords.lon))
    print(f"{coords.lat:.4f}, {coords.lon:.4f}" + (f" ({name})" if name else ""))
    return 0


def _cmd_locations(config: TrackrConfig, args) -> int:
    if args.locations_command is None:
        print("Use: locations list | save NAME | remove ID | favorite ID")
        return 1

    store = _open_store(args)
    try:
        if args.locations_command == "list":
            locations = (
                location_repo.get_favorite_locations(store)
                if args.favorites else location_repo.get_saved_locations(store)
            )
            if not locations:
                print("No saved locations")
            for loc in locations:
                star = "*" if loc.is_favorite else " "
                print(f"{star} {loc.id}  {loc.display_name}")
            return 0

        if args.locations_command == "save":
            coords = None
            if args.lat is not None and args.lon is not None:
                coords = Coordinates(args.lat, args.lon)
            saved = location_repo.save_location(
                store,
                name=args.name,
                display_name=args.display_name or args.name,
                country=args.country,
                is_favorite=args.favorite,
                coordinates=coords,
            )
            print(f"Saved {saved.display_name} ({saved.id})")
            return 0

        if args.locations_command == "remove":
            location_repo.remove_location(store, args.id)
            print(f"Removed {args.id}")
            return 0

        updated = location_repo.toggle_favorite(store, args.id)
        if updated is None:
            print(f"No saved location with id {args.id}")
            return 1
        print(f"{updated.display_name}: favorite={updated.is_favorite}")
        return 0
    finally:
        store.conn.close()


def _cmd_recent(config: TrackrConfig, args) -> int:
    store = _open_store(args)
    try:
        recent = location_repo.get_recent_locations(store)
    finally:
        store.conn.close()
    if not recent:
        print("No recent locations")
    for loc in recent:
        print(loc)
    return 0


def _cmd_history(config: TrackrConfig, args) -> int:
    store = _open_store(args)
    try:
        entries = history_repo.get_historical_data(store, args.location, args.days)
    finally:
        store.conn.close()
    if not entries:
        print(f"No historical data for {args.location}")
        return 0
    for e in entries:
        print(
            f"{e.date} {e.location}: {e.temperature:.1f}°C {e.condition}, "
            f"{e.humidity}%, {e.wind_speed} km/h, {e.pressure} hPa"
        )
    return 0


def _cmd_stats(config: TrackrConfig, args) -> int:
    store = _open_store(args)
    try:
        stats = history_repo.get_location_stats(store, args.location, args.days)
    finally:
        store.conn.close()
    print(format_stats_text(args.location, args.days, stats))
    return 0


def _cmd_prune(config: TrackrConfig, args) -> int:
    days = args.days or config.storage.history_retention_days
    store = _open_store(args)
    try:
        removed = history_repo.clear_old_data(store, days)
    finally:
        store.conn.close()
    print(f"Removed {removed} entries older than {days} days")
    return 0


def _cmd_check_key(config: TrackrConfig, args) -> int:
    status = _openweather(config).verify_api_key()
    print(status.message)
    if status.error:
        print(f"Error: {status.error}")
    return 0 if status.valid else 1


def _cmd_config(config: TrackrConfig, args) -> int:
    if args.config_command == "show":
        print(redacted_dump(config))
        print(f"hash: {config_hash(config)}")
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            save_config(new_config, args.config)
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1
