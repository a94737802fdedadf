"""Device/host geolocation providers."""

from typing import Protocol

import httpx

from temptrackr.models.common import Coordinates

DEFAULT_PROVIDER_URL = "https://ipapi.co/json/"


class GeolocationError(Exception):
    """Position could not be determined."""


class GeolocationProvider(Protocol):
    async def locate(self, high_accuracy: bool = True) -> Coordinates: ...


class IpGeolocationProvider:
    """Approximates the host position from its public IP address.

    IP lookups have a single accuracy level, so high_accuracy is accepted
    for interface compatibility and ignored.
    """

    def __init__(self, url: str = DEFAULT_PROVIDER_URL, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    async def locate(self, high_accuracy: bool = True) -> Coordinates:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.url)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise GeolocationError(f"IP geolocation failed: {e}") from e

        lat = data.get("latitude", data.get("lat")) if isinstance(data, dict) else None
        lon = data.get("longitude", data.get("lon")) if isinstance(data, dict) else None
        if lat is None or lon is None:
            raise GeolocationError("IP geolocation response has no coordinates")
        return Coordinates(lat=float(lat), lon=float(lon))
