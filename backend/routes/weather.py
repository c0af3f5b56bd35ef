"""Weather routes: live lookups, cached results and history.

GET /api/weather/current       → cache-then-fetch, temperature summary + hit flag
GET /api/weather/details       → cache-then-fetch
GET /api/weather/result        → cache only, 404 when cold
GET /api/weather/results       → every live cached city, optional date filters
GET /api/weather/history       → snapshots for one city
GET /api/weather/history/all   → snapshots for every city
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Query

from dependencies import get_weather_service
from errors import InvalidInputError
from services.weather import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/weather")


def _require_city(city: str) -> str:
    city = city.strip()
    if not city:
        raise InvalidInputError("city is required")
    return city


def _parse_filter(name: str, raw: str | None) -> int | None:
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInputError(f"invalid {name}") from None


def _summary(city: str, details) -> dict:
    return {
        "city": city,
        "temperature": details.temperature,
        "fetched_at": details.updated_at.isoformat(),
    }


@router.get("/current")
async def current_weather(
    city: str = Query(""),
    service: WeatherService = Depends(get_weather_service),
) -> dict:
    """Temperature summary for a city, flagged with whether the cache served it."""
    city = _require_city(city)
    details, cached = await asyncio.to_thread(service.lookup, city)
    return {**_summary(city, details), "cached": cached}


@router.get("/details")
async def weather_details(
    city: str = Query(""),
    service: WeatherService = Depends(get_weather_service),
) -> dict:
    """Normalized current conditions. Served from cache within the TTL."""
    city = _require_city(city)
    details = await asyncio.to_thread(service.get_details, city)
    return details.to_dict()


@router.get("/result")
async def cached_result(
    city: str = Query(""),
    service: WeatherService = Depends(get_weather_service),
) -> dict:
    """Latest cached result for a city. Never calls upstream."""
    city = _require_city(city)
    details = await asyncio.to_thread(service.get_cached, city)
    return _summary(city, details)


@router.get("/results")
async def cached_results(
    day: str | None = Query(None),
    month: str | None = Query(None),
    year: str | None = Query(None),
    service: WeatherService = Depends(get_weather_service),
) -> list[dict]:
    """All live cached results, filtered by fetch date when asked."""
    d = _parse_filter("day", day)
    m = _parse_filter("month", month)
    y = _parse_filter("year", year)

    cached = await asyncio.to_thread(service.list_cached)
    out = []
    for city, details in sorted(cached.items()):
        t = details.updated_at
        if (d is None or t.day == d) and (m is None or t.month == m) and (y is None or t.year == y):
            out.append(_summary(city, details))
    return out


@router.get("/history")
async def city_history(
    city: str = Query(""),
    service: WeatherService = Depends(get_weather_service),
) -> list[dict]:
    city = _require_city(city)
    history = await asyncio.to_thread(service.list_history, city)
    return [details.to_dict() for details in history]


@router.get("/history/all")
async def all_history(service: WeatherService = Depends(get_weather_service)) -> dict:
    history = await asyncio.to_thread(service.list_all_history)
    return {city: [details.to_dict() for details in entries] for city, entries in history.items()}
