"""Common types and helpers shared across models."""

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum


class Trend(StrEnum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class Severity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def round_tenths(value: float) -> float:
    """Round to one decimal place with .05 going up."""
    return round_half_up(value * 10) / 10
