"""Async OpenWeatherMap geocoding client (direct and reverse lookups)."""

import httpx

from temptrackr.config.schema import OPENWEATHER_BASE_URL


class GeocodingClient:
    def __init__(
        self,
        base_url: str = OPENWEATHER_BASE_URL,
        api_key: str = "",
        timeout: float = 30.0,
    ):
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout

    async def search(self, query: str, limit: int = 5) -> list[dict]:
        """Free-text place search. Raises httpx errors on failure."""
        return await self._get(
            "/geo/1.0/direct", {"q": query, "limit": limit}
        )

    async def reverse(self, lat: float, lon: float, limit: int = 1) -> list[dict]:
        """Places nearest to a coordinate. Raises httpx errors on failure."""
        return await self._get(
            "/geo/1.0/reverse", {"lat": lat, "lon": lon, "limit": limit}
        )

    async def _get(self, path: str, params: dict) -> list[dict]:
        url = f"{self.base_url}{path}"
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(url, params={**params, "appid": self.api_key})
            resp.raise_for_status()
            data = resp.json()
        if not isinstance(data, list):
            raise ValueError(f"Unexpected geocoding payload from {path}: {type(data).__name__}")
        return data
