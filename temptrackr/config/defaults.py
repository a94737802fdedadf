"""Built-in city table used when the geocoding API is unavailable."""

from temptrackr.models.common import Coordinates
from temptrackr.models.location import LocationSuggestion


def _city(name: str, display_name: str, country: str, lat: float, lon: float) -> LocationSuggestion:
    return LocationSuggestion(
        name=name,
        display_name=display_name,
        country=country,
        coordinates=Coordinates(lat=lat, lon=lon),
    )


FALLBACK_CITIES: list[LocationSuggestion] = [
    _city("New York", "New York, NY, US", "US", 40.7128, -74.006),
    _city("London", "London, UK", "GB", 51.5074, -0.1278),
    _city("Tokyo", "Tokyo, Japan", "JP", 35.6762, 139.6503),
    _city("Sydney", "Sydney, Australia", "AU", -33.8688, 151.2093),
    _city("Mumbai", "Mumbai, India", "IN", 19.076, 72.8777),
    _city("Paris", "Paris, France", "FR", 48.8566, 2.3522),
    _city("Berlin", "Berlin, Germany", "DE", 52.52, 13.405),
    _city("Toronto", "Toronto, ON, Canada", "CA", 43.6532, -79.3832),
    _city("Dubai", "Dubai, UAE", "AE", 25.2048, 55.2708),
    _city("Singapore", "Singapore", "SG", 1.3521, 103.8198),
    _city("Los Angeles", "Los Angeles, CA, US", "US", 34.0522, -118.2437),
    _city("Chicago", "Chicago, IL, US", "US", 41.8781, -87.6298),
    _city("Miami", "Miami, FL, US", "US", 25.7617, -80.1918),
    _city("San Francisco", "San Francisco, CA, US", "US", 37.7749, -122.4194),
    _city("Seattle", "Seattle, WA, US", "US", 47.6062, -122.3321),
    _city("Barcelona", "Barcelona, Spain", "ES", 41.3851, 2.1734),
    _city("Rome", "Rome, Italy", "IT", 41.9028, 12.4964),
    _city("Amsterdam", "Amsterdam, Netherlands", "NL", 52.3676, 4.9041),
    _city("Stockholm", "Stockholm, Sweden", "SE", 59.3293, 18.0686),
    _city("Copenhagen", "Copenhagen, Denmark", "DK", 55.6761, 12.5683),
    _city("Moscow", "Moscow, Russia", "RU", 55.7558, 37.6176),
    _city("Beijing", "Beijing, China", "CN", 39.9042, 116.4074),
    _city("Shanghai", "Shanghai, China", "CN", 31.2304, 121.4737),
    _city("Seoul", "Seoul, South Korea", "KR", 37.5665, 126.978),
    _city("Bangkok", "Bangkok, Thailand", "TH", 13.7563, 100.5018),
    _city("Cairo", "Cairo, Egypt", "EG", 30.0444, 31.2357),
    _city("Cape Town", "Cape Town, South Africa", "ZA", -33.9249, 18.4241),
    _city("São Paulo", "São Paulo, Brazil", "BR", -23.5505, -46.6333),
    _city("Mexico City", "Mexico City, Mexico", "MX", 19.4326, -99.1332),
    _city("Buenos Aires", "Buenos Aires, Argentina", "AR", -34.6118, -58.396),
]
