import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from country_atlas import __version__
from country_atlas.config import settings
from country_atlas.errors import CountryNotFoundError, InvalidInputError
from country_atlas.limiter import limiter
from country_atlas.routers import countries, health, phone
from country_atlas.services import country_service

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Country Atlas", version=__version__)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(countries.router)
app.include_router(phone.router)


@app.exception_handler(CountryNotFoundError)
async def country_not_found_handler(request: Request, exc: CountryNotFoundError):
    return JSONResponse(
        status_code=404,
        content={"detail": str(exc), "code": exc.code, "searchType": exc.search_type},
    )


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(status_code=400, content={"detail": str(exc), "field": exc.field})


@app.get("/")
async def root():
    return {
        "name": "Country Atlas API",
        "version": __version__,
        "endpoints": ["/health", "/countries", "/countries/search", "/phone/validate"],
    }


@app.on_event("startup")
async def startup():
    index = country_service.init(settings.data_dir)
    logger.info("Country Atlas API is running with %d countries", len(index))
