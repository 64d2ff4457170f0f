import time

from fastapi import APIRouter

from country_atlas import __version__
from country_atlas.services import country_service

router = APIRouter(tags=["health"])

_start_time = time.time()


@router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _start_time),
        "version": __version__,
        "countries": len(country_service.get_all()),
    }
