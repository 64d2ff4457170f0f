import re

_ISO2_RE = re.compile(r"^[A-Z]{2}$")
_ISO3_RE = re.compile(r"^[A-Z]{3}$")
_CALLING_CODE_RE = re.compile(r"^\+?\d{1,4}$")
_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")


def is_valid_iso2(code: str) -> bool:
    return isinstance(code, str) and bool(_ISO2_RE.match(code))


def is_valid_iso3(code: str) -> bool:
    return isinstance(code, str) and bool(_ISO3_RE.match(code))


def is_valid_calling_code(code: str) -> bool:
    return isinstance(code, str) and bool(_CALLING_CODE_RE.match(code))


def is_valid_currency_code(code: str) -> bool:
    return isinstance(code, str) and bool(_CURRENCY_RE.match(code))
