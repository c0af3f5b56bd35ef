"""Health and readiness check routes."""

import asyncio
import logging

from fastapi import APIRouter, Depends

from config import settings
from dependencies import get_open_meteo, get_weather_service
from services.open_meteo import OpenMeteoClient
from services.weather import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter()

PROBE_CITY = "London"


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "weather-api", "commit": settings.git_sha}


@router.get("/health")
async def health(
    service: WeatherService = Depends(get_weather_service),
    client: OpenMeteoClient = Depends(get_open_meteo),
) -> dict:
    """Deep health check that verifies geocoder connectivity."""
    cached = await asyncio.to_thread(service.list_cached)
    result = {
        "status": "ok",
        "service": "weather-api",
        "commit": settings.git_sha,
        "cached_cities": len(cached),
        "upstream": "not_tested",
    }

    try:
        await asyncio.to_thread(client.search_cities, PROBE_CITY, 1)
        result["upstream"] = "connected"
    except Exception as e:
        logger.exception("Open-Meteo health check failed")
        result["upstream"] = "error"
        result["upstream_error"] = str(e)

    return result
