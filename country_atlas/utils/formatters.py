"""Display helpers that resolve a country by ISO2 code and format one of its fields."""

import re

from country_atlas.services import country_service

_NON_DIAL_CHARS = re.compile(r"[^\d+]")


def get_country_flag(iso2: str, fmt: str = "emoji") -> str | None:
    country = country_service.get_by_iso2(iso2)
    if not country:
        return None
    return country.flag.emoji if fmt == "emoji" else country.flag.svg


def format_phone_number(phone: str, iso2: str) -> str | None:
    """Prefix a phone number with the country's calling code unless it already has it."""
    country = country_service.get_by_iso2(iso2)
    if not country or not country.calling_code:
        return None

    clean = _NON_DIAL_CHARS.sub("", phone)
    if clean.startswith(country.calling_code):
        return clean
    return f"{country.calling_code}{clean.lstrip('0')}"


def format_country_with_flag(iso2: str) -> str | None:
    country = country_service.get_by_iso2(iso2)
    if not country:
        return None
    return f"{country.flag.emoji} {country.name}"


def format_currency(iso2: str, amount: int | float | None = None) -> str | None:
    country = country_service.get_by_iso2(iso2)
    if not country or not country.currency:
        return None

    symbol, code = country.currency.symbol, country.currency.code
    if amount is not None:
        return f"{symbol}{amount:,} {code}"
    return f"{symbol} ({code})"


def format_area(area: int | float) -> str:
    if isinstance(area, float) and area.is_integer():
        area = int(area)
    return f"{area:,} km²"
