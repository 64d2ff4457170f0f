from fastapi import APIRouter, Request

from country_atlas.config import settings
from country_atlas.limiter import limiter
from country_atlas.models.phone import PhoneValidationResult
from country_atlas.models.query import PhoneValidationRequest
from country_atlas.utils.phone import validate_phone_number

router = APIRouter(prefix="/phone", tags=["phone"])


@router.post("/validate", response_model=PhoneValidationResult)
@limiter.limit(settings.rate_limit)
async def validate_phone(request: Request, body: PhoneValidationRequest):
    return validate_phone_number(body.phone, body.country)
