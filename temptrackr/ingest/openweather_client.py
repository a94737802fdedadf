"""OpenWeatherMap API client with retry and rate limit handling."""

import logging
import time

import httpx

from temptrackr.config.schema import OPENWEATHER_BASE_URL
from temptrackr.models.weather import ApiKeyStatus

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "temptrackr/0.1.0"
KEY_CHECK_CITY = "London"


class OpenWeatherClient:
    def __init__(
        self,
        base_url: str = OPENWEATHER_BASE_URL,
        api_key: str = "",
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 2.0,
    ):
        self.base_url = base_url
        self.api_key = api_key
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def geocode(self, query: str, limit: int = 5) -> list[dict]:
        """Direct geocoding lookup for a free-text location."""
        return self._get("/geo/1.0/direct", {"q": query, "limit": limit})

    def get_current(self, lat: float, lon: float) -> dict:
        """Current conditions in metric units."""
        return self._get(
            "/data/2.5/weather", {"lat": lat, "lon": lon, "units": "metric"}
        )

    def get_forecast(self, lat: float, lon: float) -> dict:
        """5-day / 3-hour forecast in metric units."""
        return self._get(
            "/data/2.5/forecast", {"lat": lat, "lon": lon, "units": "metric"}
        )

    def verify_api_key(self) -> ApiKeyStatus:
        """Check the configured key against a cheap current-weather call.

        Demo keys (anything containing "demo") are accepted without a request.
        """
        if not self.api_key:
            return ApiKeyStatus(False, "No OpenWeatherMap API key configured.", "Missing API key")
        if "demo" in self.api_key:
            return ApiKeyStatus(True, "Demo API key accepted.")

        url = f"{self.base_url}/data/2.5/weather"
        params = {"q": KEY_CHECK_CITY, "appid": self.api_key, "units": "metric"}
        try:
            resp = httpx.get(url, params=params, headers=self._headers(), timeout=self.timeout)
        except httpx.RequestError as e:
            logger.error("API key check failed: %s", e)
            return ApiKeyStatus(
                False,
                "Failed to test API key. Check your internet connection.",
                "Network error during API key test",
            )

        if resp.is_success:
            return ApiKeyStatus(True, "OpenWeatherMap API key is valid.")
        if resp.status_code == 401:
            return ApiKeyStatus(False, "Invalid OpenWeatherMap API key.", "Invalid API key")
        return ApiKeyStatus(
            False,
            "API key test failed.",
            f"API test failed with status {resp.status_code}",
        )

    def _headers(self) -> dict:
        return {"User-Agent": self.user_agent, "Accept": "application/json"}

    def _get(self, path: str, params: dict):
        """GET with retries on 503/429 and transport errors, exponential backoff."""
        url = f"{self.base_url}{path}"
        params = {**params, "appid": self.api_key}

        last_error: Exception | None = None
        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(
                    url, params=params, headers=self._headers(), timeout=self.timeout
                )
                if resp.status_code in (503, 429) and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "OpenWeatherMap %s returned %d, retrying in %.1fs (attempt %d/%d)",
                        path, resp.status_code, delay, attempt + 1, self.max_retries,
                    )
                    time.sleep(delay)
                    continue
                resp.raise_for_status()
                return resp.json()
            except httpx.RequestError as e:
                last_error = e
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "OpenWeatherMap request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                raise

        assert last_error is not None
        raise last_error
