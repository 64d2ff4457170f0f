"""Secondary lookup maps over the country dataset.

A CountryIndex is built once from a sequence of records and is read-only
afterwards. All keys are stored lower-cased (currency codes upper-cased) and
calling codes without their leading ``+``. Regions hold every continent, in
enum order, even when no record falls in it.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from country_atlas.models.country import Continent, Country


def normalize_calling_code(code: str) -> str:
    code = "".join(code.split())
    if code.startswith("+"):
        code = code[1:]
    return code


def _freeze_multi(groups: dict[str, list[Country]]) -> Mapping[str, tuple[Country, ...]]:
    return MappingProxyType({key: tuple(items) for key, items in groups.items()})


def _name_keys(country: Country) -> list[str]:
    keys = [country.name, country.official_name, country.iso.alpha2, country.iso.alpha3]
    for native in country.native_names.values():
        keys.append(native.common)
        keys.append(native.official)
    return [k.strip().lower() for k in keys if k and k.strip()]


class CountryIndex:
    def __init__(self, countries: Iterable[Country]):
        self.countries: tuple[Country, ...] = tuple(countries)

        by_alpha2: dict[str, Country] = {}
        by_alpha3: dict[str, Country] = {}
        by_numeric: dict[str, Country] = {}
        by_name: dict[str, Country] = {}
        by_calling_code: dict[str, list[Country]] = {}
        by_currency: dict[str, list[Country]] = {}
        by_language: dict[str, list[Country]] = {}
        regions: dict[Continent, list[Country]] = {continent: [] for continent in Continent}

        for country in self.countries:
            regions[country.geo.continent].append(country)
            by_alpha2[country.iso.alpha2.lower()] = country
            by_alpha3[country.iso.alpha3.lower()] = country
            if country.iso.numeric:
                by_numeric[country.iso.numeric] = country

            # First record in dataset order keeps a contested name.
            for key in _name_keys(country):
                by_name.setdefault(key, country)

            if country.calling_code:
                code = normalize_calling_code(country.calling_code)
                if code:
                    by_calling_code.setdefault(code, []).append(country)
            if country.currency and country.currency.code:
                by_currency.setdefault(country.currency.code.upper(), []).append(country)
            for language in dict.fromkeys(lang.lower() for lang in country.languages):
                by_language.setdefault(language, []).append(country)

        self.by_alpha2: Mapping[str, Country] = MappingProxyType(by_alpha2)
        self.by_alpha3: Mapping[str, Country] = MappingProxyType(by_alpha3)
        self.by_numeric: Mapping[str, Country] = MappingProxyType(by_numeric)
        self.by_name: Mapping[str, Country] = MappingProxyType(by_name)
        self.by_calling_code = _freeze_multi(by_calling_code)
        self.by_currency = _freeze_multi(by_currency)
        self.by_language = _freeze_multi(by_language)
        self.regions: Mapping[Continent, tuple[Country, ...]] = MappingProxyType(
            {continent: tuple(items) for continent, items in regions.items()}
        )

    def __len__(self) -> int:
        return len(self.countries)
