"""Shared test fixtures."""

import sqlite3
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml

from temptrackr.config.schema import TrackrConfig
from temptrackr.models.weather import ForecastData, WeatherData
from temptrackr.storage.database import connect, run_migrations
from temptrackr.storage.kv_store import MemoryStore, SqliteStore

FIXED_NOW = datetime(2026, 2, 11, 15, 30, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def sqlite_store(db: sqlite3.Connection) -> SqliteStore:
    return SqliteStore(db)


@pytest.fixture
def make_weather() -> Callable[..., WeatherData]:
    """Factory for a mild, dry current reading with overridable fields."""

    def _make(**overrides) -> WeatherData:
        fields = {
            "location": "London, GB",
            "temperature": 15.0,
            "condition": "Clouds",
            "humidity": 30,
            "wind_speed": 10,
            "pressure": 1013,
            "visibility": 10,
            "uv_index": None,
            "timestamp": FIXED_NOW.isoformat(),
        }
        fields.update(overrides)
        return WeatherData(**fields)

    return _make


@pytest.fixture
def make_forecast() -> Callable[..., list[ForecastData]]:
    """Factory: one ForecastData per (high, low) pair."""

    def _make(
        temps: list[tuple[float, float]],
        conditions: list[str] | None = None,
        wind: int | list[int] = 10,
        humidity: int = 60,
    ) -> list[ForecastData]:
        conditions = conditions or ["Clouds"] * len(temps)
        winds = wind if isinstance(wind, list) else [wind] * len(temps)
        return [
            ForecastData(
                day=f"D{i}",
                date=f"2026-02-{11 + i:02d}",
                high=high,
                low=low,
                condition=conditions[i],
                description=conditions[i].lower(),
                icon="04d",
                humidity=humidity,
                wind_speed=winds[i],
            )
            for i, (high, low) in enumerate(temps)
        ]

    return _make


@pytest.fixture
def default_config() -> TrackrConfig:
    return TrackrConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "openweather": {
            "base_url": "https://test-owm.example.com",
            "api_key": "test-key",
            "max_retries": 0,
            "retry_base_delay": 0.0,
        },
        "storage": {"max_recent_locations": 5},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _no_api_key_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's OPENWEATHER_API_KEY out of config-loading tests."""
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
