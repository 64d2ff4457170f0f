import math
from collections.abc import Iterable

from country_atlas.models.country import Country

EARTH_RADIUS_KM = 6371.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two points given in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def has_coordinates(country: Country) -> bool:
    return country.geo.latitude is not None and country.geo.longitude is not None


def get_distance_between_countries(first: Country, second: Country) -> float | None:
    if not has_coordinates(first) or not has_coordinates(second):
        return None
    return haversine_distance(
        first.geo.latitude, first.geo.longitude, second.geo.latitude, second.geo.longitude
    )


def get_nearest_countries(
    country: Country, countries: Iterable[Country], limit: int = 5
) -> list[tuple[Country, float]]:
    if not has_coordinates(country):
        return []
    distances = [
        (other, get_distance_between_countries(country, other))
        for other in countries
        if other.iso.alpha2 != country.iso.alpha2 and has_coordinates(other)
    ]
    distances.sort(key=lambda pair: pair[1])
    return distances[:limit]


def do_countries_share_border(first: Country, second: Country) -> bool:
    borders = first.geo.borders
    return second.iso.alpha2 in borders or second.iso.alpha3 in borders
