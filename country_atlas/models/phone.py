from pydantic import BaseModel, Field

from country_atlas.models.country import Country


class PhoneValidationResult(BaseModel):
    is_valid: bool = Field(alias="isValid")
    country: Country | None = None
    calling_code: str | None = Field(None, alias="callingCode")
    national_number: str | None = Field(None, alias="nationalNumber")
    formatted_number: str | None = Field(None, alias="formattedNumber")
    error: str | None = None

    model_config = {"populate_by_name": True}


class PhoneParts(BaseModel):
    country: Country | None = None
    calling_code: str | None = Field(None, alias="callingCode")
    national_number: str | None = Field(None, alias="nationalNumber")

    model_config = {"populate_by_name": True}
