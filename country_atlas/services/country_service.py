import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from country_atlas.errors import CountryNotFoundError, InvalidInputError
from country_atlas.models.country import Continent, Country
from country_atlas.models.query import CountryFilter
from country_atlas.services.country_index import CountryIndex, normalize_calling_code
from country_atlas.services.dataset import load_dataset

logger = logging.getLogger(__name__)

CONTINENTS: tuple[str, ...] = tuple(c.value for c in Continent)

_lock = threading.Lock()
_index: CountryIndex | None = None


def init(data_dir: Path | str | None = None) -> CountryIndex:
    """Load the dataset and build the index, once per process.

    Later calls return the existing index; call reset() first to load
    from a different directory.
    """
    global _index
    with _lock:
        if _index is None:
            _index = CountryIndex(load_dataset(data_dir).countries)
            logger.info("Country index built with %d records", len(_index))
        return _index


def reset() -> None:
    global _index
    with _lock:
        _index = None


def _get_index() -> CountryIndex:
    index = _index
    if index is None:
        index = init()
    return index


def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidInputError(field, value, "Expected a string")
    return value.strip()


# Point lookups


def get_by_iso2(code: str) -> Country | None:
    return _get_index().by_alpha2.get(_require_text("iso2", code).lower())


def get_by_iso3(code: str) -> Country | None:
    return _get_index().by_alpha3.get(_require_text("iso3", code).lower())


def get_by_numeric(code: str) -> Country | None:
    code = _require_text("numeric", code)
    if code.isdigit():
        code = code.zfill(3)
    return _get_index().by_numeric.get(code)


def get_by_name(name: str) -> Country | None:
    """Exact, case-insensitive match on common, official or native names and ISO codes."""
    return _get_index().by_name.get(_require_text("name", name).lower())


def get_all_by_calling_code(code: str) -> tuple[Country, ...]:
    """Every country sharing a calling code, in dataset order."""
    key = normalize_calling_code(_require_text("callingCode", code))
    return _get_index().by_calling_code.get(key, ())


def get_by_calling_code(code: str) -> Country | None:
    matches = get_all_by_calling_code(code)
    return matches[0] if matches else None


def get_by_iso2_or_raise(code: str) -> Country:
    country = get_by_iso2(code)
    if country is None:
        raise CountryNotFoundError(code, "iso2")
    return country


def get_by_iso3_or_raise(code: str) -> Country:
    country = get_by_iso3(code)
    if country is None:
        raise CountryNotFoundError(code, "iso3")
    return country


def get_by_name_or_raise(name: str) -> Country:
    country = get_by_name(name)
    if country is None:
        raise CountryNotFoundError(name, "name")
    return country


def get_by_calling_code_or_raise(code: str) -> Country:
    country = get_by_calling_code(code)
    if country is None:
        raise CountryNotFoundError(code, "callingCode")
    return country


def lookup(query: str) -> Country | None:
    """Resolve a free-form query as ISO2, then ISO3, then any indexed name."""
    return get_by_iso2(query) or get_by_iso3(query) or get_by_name(query)


def get_all() -> list[Country]:
    return list(_get_index().countries)


def get_regions() -> dict[str, list[Country]]:
    return {continent.value: list(items) for continent, items in _get_index().regions.items()}


# Set queries


def get_by_continent(continent: str) -> list[Country]:
    query = _require_text("continent", continent).lower()
    return [c for c in _get_index().countries if c.geo.continent.value.lower() == query]


def get_by_currency(code: str) -> list[Country]:
    return list(_get_index().by_currency.get(_require_text("currency", code).upper(), ()))


def get_by_language(language: str) -> list[Country]:
    return list(_get_index().by_language.get(_require_text("language", language).lower(), ()))


def _matches(country: Country, criteria: CountryFilter) -> bool:
    if criteria.continent is not None:
        if country.geo.continent.value.lower() != criteria.continent.strip().lower():
            return False
    if criteria.region is not None:
        if country.geo.region.lower() != criteria.region.strip().lower():
            return False
    if criteria.currency is not None:
        if not country.currency or country.currency.code.upper() != criteria.currency.strip().upper():
            return False
    if criteria.language is not None:
        wanted = criteria.language.strip().lower()
        if not any(lang.lower() == wanted for lang in country.languages):
            return False
    if criteria.landlocked is not None and country.geo.landlocked != criteria.landlocked:
        return False
    if criteria.un_member is not None and country.un_member != criteria.un_member:
        return False
    if criteria.name is not None:
        needle = criteria.name.strip().lower()
        if needle not in country.name.lower() and needle not in country.official_name.lower():
            return False
    return True


def filter_countries(criteria: CountryFilter | None = None, **kwargs) -> list[Country]:
    """AND-combine the given criteria over the whole dataset, keeping dataset order."""
    if criteria is None:
        criteria = CountryFilter(**kwargs)
    return [c for c in _get_index().countries if _matches(c, criteria)]


def get_border_countries(code_or_name: str) -> list[Country]:
    country = lookup(code_or_name)
    if country is None:
        return []
    by_alpha3 = _get_index().by_alpha3
    neighbours = []
    for code in country.geo.borders:
        neighbour = by_alpha3.get(code.lower())
        if neighbour is not None:
            neighbours.append(neighbour)
    return neighbours


# Search and field selection


def search(query: str) -> list[Country]:
    """Case-insensitive substring match on common or official name.

    A blank query matches nothing.
    """
    q = _require_text("query", query).lower()
    if not q:
        return []
    return [
        c for c in _get_index().countries
        if q in c.name.lower() or q in c.official_name.lower()
    ]


def project(country: Country, fields: Iterable[str] | None = None) -> dict[str, Any]:
    """Return the requested top-level fields of a country as JSON-ready data.

    Unknown field names are ignored; no fields means the whole record.
    """
    fields = list(fields or [])
    if not fields:
        return country.model_dump(by_alias=True, mode="json")
    attrs = {
        attr for attr in (Country.field_attribute(f.strip()) for f in fields if isinstance(f, str))
        if attr is not None
    }
    if not attrs:
        return {}
    return country.model_dump(by_alias=True, mode="json", include=attrs)


def get_country(code: str, fields: Iterable[str] | None = None) -> dict[str, Any] | None:
    country = get_by_iso2(code)
    if country is None:
        return None
    return project(country, fields)


# Code lists


def iso2_codes() -> list[str]:
    return sorted(c.iso.alpha2 for c in _get_index().countries)


def iso3_codes() -> list[str]:
    return sorted(c.iso.alpha3 for c in _get_index().countries)


def currency_codes() -> list[str]:
    return sorted(_get_index().by_currency.keys())
