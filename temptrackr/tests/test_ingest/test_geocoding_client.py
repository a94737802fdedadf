"""Tests for the async geocoding client with mocked httpx."""

import asyncio
import json
from pathlib import Path

import httpx
import pytest
import respx

from temptrackr.ingest.geocoding_client import GeocodingClient

FIXTURE_DIR = Path(__file__).parent.parent / "fixtures"
BASE = "https://test-owm.example.com"


@pytest.fixture
def geocoder() -> GeocodingClient:
    return GeocodingClient(base_url=BASE, api_key="test-key", timeout=5)


@pytest.fixture
def london_matches() -> list[dict]:
    with open(FIXTURE_DIR / "geo_direct_london.json") as f:
        return json.load(f)


class TestSearch:
    @respx.mock
    def test_success(self, geocoder: GeocodingClient, london_matches: list[dict]):
        route = respx.get(f"{BASE}/geo/1.0/direct").mock(
            return_value=httpx.Response(200, json=london_matches)
        )

        result = asyncio.run(geocoder.search("London", limit=3))
        assert [r["country"] for r in result] == ["GB", "CA"]

        params = route.calls[0].request.url.params
        assert params["q"] == "London"
        assert params["limit"] == "3"
        assert params["appid"] == "test-key"

    @respx.mock
    def test_http_error_raises(self, geocoder: GeocodingClient):
        respx.get(f"{BASE}/geo/1.0/direct").mock(return_value=httpx.Response(401))

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(geocoder.search("London"))

    @respx.mock
    def test_non_list_payload_raises(self, geocoder: GeocodingClient):
        respx.get(f"{BASE}/geo/1.0/direct").mock(
            return_value=httpx.Response(200, json={"cod": 400, "message": "bad query"})
        )

        with pytest.raises(ValueError, match="Unexpected geocoding payload"):
            asyncio.run(geocoder.search("London"))


class TestReverse:
    @respx.mock
    def test_success(self, geocoder: GeocodingClient, london_matches: list[dict]):
        route = respx.get(f"{BASE}/geo/1.0/reverse").mock(
            return_value=httpx.Response(200, json=london_matches[:1])
        )

        result = asyncio.run(geocoder.reverse(51.5, -0.12))
        assert result[0]["state"] == "England"

        params = route.calls[0].request.url.params
        assert float(params["lat"]) == 51.5
        assert float(params["lon"]) == -0.12
        assert params["limit"] == "1"
