from collections.abc import Iterable

from country_atlas.models.country import Country


def sort_by_name(countries: Iterable[Country], order: str = "asc") -> list[Country]:
    return sorted(countries, key=lambda c: c.name.casefold(), reverse=order == "desc")


def sort_by_area(countries: Iterable[Country], order: str = "desc") -> list[Country]:
    return sorted(countries, key=lambda c: c.geo.area_km2 or 0, reverse=order == "desc")


def _group(countries: Iterable[Country], key) -> dict[str, list[Country]]:
    groups: dict[str, list[Country]] = {}
    for country in countries:
        groups.setdefault(key(country), []).append(country)
    return groups


def group_by_continent(countries: Iterable[Country]) -> dict[str, list[Country]]:
    return _group(countries, lambda c: c.geo.continent.value)


def group_by_region(countries: Iterable[Country]) -> dict[str, list[Country]]:
    return _group(countries, lambda c: c.geo.region or "Unknown")


def group_by_currency(countries: Iterable[Country]) -> dict[str, list[Country]]:
    return _group(countries, lambda c: c.currency.code if c.currency else "No Currency")
