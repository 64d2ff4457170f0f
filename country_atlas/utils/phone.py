"""Phone number validation against the calling codes in the dataset.

Numbers may carry an international prefix (``+`` or ``00``) or be given as
national numbers together with an ISO2 country code. National numbers must
be 4 to 15 digits long.
"""

import re

from country_atlas.models.country import Country
from country_atlas.models.phone import PhoneParts, PhoneValidationResult
from country_atlas.services import country_service
from country_atlas.services.country_index import normalize_calling_code

MIN_NATIONAL_DIGITS = 4
MAX_NATIONAL_DIGITS = 15
MAX_CALLING_CODE_DIGITS = 4

_NON_DIAL_CHARS = re.compile(r"[^\d+]")


def _length_error(national: str) -> str | None:
    if len(national) < MIN_NATIONAL_DIGITS:
        return "Phone number too short"
    if len(national) > MAX_NATIONAL_DIGITS:
        return "Phone number too long"
    return None


def _result(country: Country, national: str) -> PhoneValidationResult:
    error = _length_error(national)
    return PhoneValidationResult(
        is_valid=error is None,
        country=country,
        calling_code=country.calling_code,
        national_number=national,
        formatted_number=None if error else f"{country.calling_code} {national}",
        error=error,
    )


def _validate_for_country(cleaned: str, country_code: str) -> PhoneValidationResult:
    country = country_service.get_by_iso2(country_code)
    if country is None:
        return PhoneValidationResult(is_valid=False, error=f"Invalid country code: {country_code}")
    if not country.calling_code:
        return PhoneValidationResult(
            is_valid=False, country=country, error=f"Country {country.name} has no calling code"
        )

    code = normalize_calling_code(country.calling_code)
    for prefix in (f"+{code}", f"00{code}"):
        if cleaned.startswith(prefix):
            national = cleaned[len(prefix):]
            break
    else:
        national = cleaned
    return _result(country, national.lstrip("+").lstrip("0"))


def _detect_country(cleaned: str) -> PhoneValidationResult | None:
    if cleaned.startswith("+"):
        digits = cleaned[1:]
    elif cleaned.startswith("00"):
        digits = cleaned[2:]
    else:
        return None
    digits = digits.replace("+", "")

    # Longest calling code first so +1876 wins over +1.
    for length in range(min(MAX_CALLING_CODE_DIGITS, len(digits)), 0, -1):
        country = country_service.get_by_calling_code(digits[:length])
        if country is not None:
            return _result(country, digits[length:].lstrip("0"))
    return None


def validate_phone_number(phone: str, country_code: str | None = None) -> PhoneValidationResult:
    if not phone or not phone.strip():
        return PhoneValidationResult(is_valid=False, error="Phone number is required")

    cleaned = _NON_DIAL_CHARS.sub("", phone)
    if country_code:
        return _validate_for_country(cleaned, country_code)

    detected = _detect_country(cleaned)
    if detected is not None:
        return detected
    return PhoneValidationResult(
        is_valid=False,
        error="Could not determine country from phone number. Please provide country code.",
    )


def is_valid_phone_number(phone: str, country_code: str | None = None) -> bool:
    return validate_phone_number(phone, country_code).is_valid


def format_phone_number_international(phone: str, country_code: str | None = None) -> str | None:
    result = validate_phone_number(phone, country_code)
    return result.formatted_number if result.is_valid else None


def get_country_from_phone_number(phone: str) -> Country | None:
    return validate_phone_number(phone).country


def parse_phone_number(phone: str, country_code: str | None = None) -> PhoneParts | None:
    result = validate_phone_number(phone, country_code)
    if not result.is_valid:
        return None
    return PhoneParts(
        country=result.country,
        calling_code=result.calling_code,
        national_number=result.national_number,
    )
