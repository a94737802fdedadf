"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"


class OpenWeatherConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OPENWEATHER_BASE_URL
    api_key: str = ""
    timeout: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=2.0, ge=0.0)
    search_limit: int = Field(default=5, ge=1, le=5)


class GeolocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    provider_url: str = "https://ipapi.co/json/"
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    high_accuracy: bool = True


class StorageConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_history_entries: int = Field(default=1000, ge=1)
    max_recent_locations: int = Field(default=10, ge=1)
    history_retention_days: int = Field(default=90, ge=1)


class AnalyticsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    # None reports the UV index as unknown
    uv_index_estimate: float | None = Field(default=None, ge=0.0, le=15.0)
    forecast_days: int = Field(default=5, ge=1, le=5)


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class TrackrConfig(BaseModel):
    model_config = {"extra": "forbid"}

    openweather: OpenWeatherConfig = OpenWeatherConfig()
    geolocation: GeolocationConfig = GeolocationConfig()
    storage: StorageConfig = StorageConfig()
    analytics: AnalyticsConfig = AnalyticsConfig()
    api: ApiConfig = ApiConfig()
