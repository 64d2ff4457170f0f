import re
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_ALPHA2_RE = re.compile(r"^[A-Z]{2}$")
_ALPHA3_RE = re.compile(r"^[A-Z]{3}$")

# Regional indicator symbol letter A is U+1F1E6, "A" is 0x41.
_REGIONAL_INDICATOR_OFFSET = 0x1F1E6 - ord("A")


class Continent(str, Enum):
    ASIA = "Asia"
    EUROPE = "Europe"
    AFRICA = "Africa"
    AMERICAS = "Americas"
    OCEANIA = "Oceania"
    ANTARCTIC = "Antarctic"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


def flag_emoji(alpha2: str) -> str:
    """Build the flag emoji for an alpha-2 code from regional indicator symbols."""
    return "".join(chr(_REGIONAL_INDICATOR_OFFSET + ord(ch)) for ch in alpha2.upper())


class ISO(_Record):
    alpha2: str
    alpha3: str
    numeric: str | None = None

    @field_validator("alpha2", "alpha3", mode="before")
    @classmethod
    def upper_case(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("alpha2")
    @classmethod
    def check_alpha2(cls, v: str) -> str:
        if not _ALPHA2_RE.match(v):
            raise ValueError(f"alpha2 must be two letters, got {v!r}")
        return v

    @field_validator("alpha3")
    @classmethod
    def check_alpha3(cls, v: str) -> str:
        if not _ALPHA3_RE.match(v):
            raise ValueError(f"alpha3 must be three letters, got {v!r}")
        return v


class Geo(_Record):
    latitude: float | None = None
    longitude: float | None = None
    region: str = ""
    continent: Continent
    landlocked: bool = False
    area_km2: int | float = Field(0, alias="areaKm2")
    borders: list[str] = []


class NativeName(_Record):
    official: str
    common: str


class Currency(_Record):
    code: str
    name: str = ""
    symbol: str = ""


class Flag(_Record):
    emoji: str = ""
    svg: str = ""


class Timezone(_Record):
    name: str
    utc_offset: str = Field("", alias="utcOffset")


class Domains(_Record):
    tld: list[str] = []


class Postal(_Record):
    format: str = ""
    regex: str = ""


class Country(_Record):
    name: str
    official_name: str = Field(alias="officialName")
    capital: list[str] = []
    iso: ISO
    geo: Geo
    native_names: dict[str, NativeName] = Field(default_factory=dict, alias="nativeNames")
    languages: list[str] = []
    currency: Currency | None = None
    calling_code: str | None = Field(None, alias="callingCode")
    timezones: list[Timezone] = []
    flag: Flag = Field(default_factory=Flag)
    domains: Domains = Field(default_factory=Domains)
    postal: Postal | None = None
    start_of_week: str | None = Field(None, alias="startOfWeek")
    un_member: bool = Field(False, alias="unMember")

    # Top-level names accepted by the field selector, in wire (camelCase) form.
    FIELDS: ClassVar[tuple[str, ...]] = (
        "name",
        "officialName",
        "capital",
        "iso",
        "geo",
        "nativeNames",
        "languages",
        "currency",
        "callingCode",
        "timezones",
        "flag",
        "domains",
        "postal",
        "startOfWeek",
        "unMember",
    )

    @field_validator("name", "official_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @model_validator(mode="before")
    @classmethod
    def fill_flag_emoji(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        iso = data.get("iso")
        alpha2 = iso.alpha2 if isinstance(iso, ISO) else (iso or {}).get("alpha2")
        flag = data.get("flag") or {}
        if isinstance(flag, Flag) or not isinstance(alpha2, str):
            return data
        if not flag.get("emoji"):
            data = {**data, "flag": {**flag, "emoji": flag_emoji(alpha2.strip())}}
        return data

    @classmethod
    def field_attribute(cls, name: str) -> str | None:
        """Map a selector field name (camelCase or snake_case) to the model attribute."""
        for attr, info in cls.model_fields.items():
            if name == attr or name == info.alias:
                return attr
        return None
