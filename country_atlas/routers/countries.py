from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import Response

from country_atlas.config import settings
from country_atlas.errors import CountryNotFoundError, InvalidInputError
from country_atlas.limiter import limiter
from country_atlas.models.country import Country
from country_atlas.models.query import CountryFilter
from country_atlas.services import country_service
from country_atlas.utils.geo import get_nearest_countries
from country_atlas.utils.image import resize_flag_svg, resize_flag_svg_maintain_ratio

router = APIRouter(prefix="/countries", tags=["countries"])


def _resolve(code: str) -> Country:
    country = country_service.lookup(code)
    if country is None:
        raise CountryNotFoundError(code, "name")
    return country


@router.get("", response_model=list[Country])
@limiter.limit(settings.rate_limit)
async def list_countries(
    request: Request,
    continent: str | None = None,
    region: str | None = None,
    currency: str | None = None,
    language: str | None = None,
    landlocked: bool | None = None,
    un_member: bool | None = None,
    name: str | None = None,
):
    criteria = CountryFilter(
        continent=continent,
        region=region,
        currency=currency,
        language=language,
        landlocked=landlocked,
        un_member=un_member,
        name=name,
    )
    if criteria.is_empty:
        return country_service.get_all()
    return country_service.filter_countries(criteria)


@router.get("/search", response_model=list[Country])
@limiter.limit(settings.rate_limit)
async def search_countries(request: Request, q: str = ""):
    return country_service.search(q)


@router.get("/continent/{continent}", response_model=list[Country])
async def countries_by_continent(continent: str):
    if continent.lower() not in {c.lower() for c in country_service.CONTINENTS}:
        raise InvalidInputError(
            "continent", continent, f"Expected one of: {', '.join(country_service.CONTINENTS)}"
        )
    return country_service.get_by_continent(continent)


@router.get("/currency/{code}", response_model=list[Country])
async def countries_by_currency(code: str):
    return country_service.get_by_currency(code)


@router.get("/language/{language}", response_model=list[Country])
async def countries_by_language(language: str):
    return country_service.get_by_language(language)


@router.get("/calling-code/{code}", response_model=list[Country])
async def countries_by_calling_code(code: str):
    return list(country_service.get_all_by_calling_code(code))


@router.get("/{code}")
@limiter.limit(settings.rate_limit)
async def get_country(request: Request, code: str, fields: str | None = None):
    country = _resolve(code)
    selected = [f for f in fields.split(",") if f.strip()] if fields else None
    return country_service.project(country, selected)


@router.get("/{code}/borders", response_model=list[Country])
async def get_borders(code: str):
    _resolve(code)
    return country_service.get_border_countries(code)


@router.get("/{code}/nearest")
async def get_nearest(code: str, limit: int = Query(5, ge=1, le=50)):
    country = _resolve(code)
    nearest = get_nearest_countries(country, country_service.get_all(), limit)
    return [
        {
            "name": other.name,
            "alpha2": other.iso.alpha2,
            "distanceKm": round(distance, 1),
        }
        for other, distance in nearest
    ]


@router.get("/{code}/flag.svg")
async def get_flag_svg(
    code: str,
    width: int | None = Query(None, ge=1, le=2048),
    height: int | None = Query(None, ge=1, le=2048),
):
    country = _resolve(code)
    svg = country.flag.svg
    if not svg:
        raise HTTPException(status_code=404, detail=f"No flag artwork for {country.iso.alpha2}")
    if width and height:
        svg = resize_flag_svg(svg, width, height)
    elif width or height:
        svg = resize_flag_svg_maintain_ratio(svg, width or 2048, height or 2048)
    return Response(content=svg, media_type="image/svg+xml")
