class AtlasError(Exception):
    """Base class for errors raised by country_atlas."""


class CountryNotFoundError(AtlasError):
    """Raised by the strict lookups when no country matches."""

    def __init__(self, code: str, search_type: str = "iso2"):
        self.code = code
        self.search_type = search_type
        super().__init__(f"Country not found with {search_type}: {code}")


class InvalidInputError(AtlasError):
    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {value}. {reason}")


class DatasetError(AtlasError):
    """A data partition is missing, malformed or breaks a dataset invariant."""

    def __init__(self, message: str, code: str | None = None):
        self.code = code
        super().__init__(message)
