"""YAML config loader with environment overrides and runtime get/set."""

import hashlib
import json
import os
from pathlib import Path
from typing import Any

import yaml

from temptrackr.config.schema import TrackrConfig

API_KEY_ENV = "OPENWEATHER_API_KEY"


def load_config(path: str | Path) -> TrackrConfig:
    """Load and validate config from a YAML file.

    A missing file yields the defaults. A non-empty OPENWEATHER_API_KEY
    environment variable replaces the configured key.
    """
    path = Path(path)
    raw: dict = {}
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    env_key = os.environ.get(API_KEY_ENV)
    if env_key:
        raw.setdefault("openweather", {})["api_key"] = env_key

    return TrackrConfig(**raw)


def config_hash(config: TrackrConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def redacted_dump(config: TrackrConfig) -> str:
    """JSON dump with the API key masked."""
    data = json.loads(config.model_dump_json())
    key = data["openweather"]["api_key"]
    if key:
        data["openweather"]["api_key"] = key[:4] + "..."
    return json.dumps(data, indent=2)


def get_config_value(config: TrackrConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'storage.max_recent_locations'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: TrackrConfig, dotted_key: str, value: Any) -> TrackrConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new TrackrConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    # Attempt type coercion for common cases
    old_value = target[parts[-1]]
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return TrackrConfig(**data)


def save_config(config: TrackrConfig, path: str | Path) -> None:
    """Write the config back out as YAML."""
    with open(Path(path), "w") as f:
        yaml.safe_dump(json.loads(config.model_dump_json()), f, sort_keys=False)
