from pydantic import BaseModel, Field


class CountryFilter(BaseModel):
    """Criteria for multi-field country filtering. Unset fields match everything."""

    continent: str | None = None
    region: str | None = None
    currency: str | None = None
    language: str | None = None
    landlocked: bool | None = None
    un_member: bool | None = Field(None, alias="unMember")
    name: str | None = None

    model_config = {"populate_by_name": True}

    @property
    def is_empty(self) -> bool:
        return all(v is None for v in self.model_dump().values())


class PhoneValidationRequest(BaseModel):
    phone: str
    country: str | None = None
