"""City auto-suggest route."""

import asyncio

from fastapi import APIRouter, Depends, Query

from dependencies import get_city_search
from errors import InvalidInputError
from services.cities import CitySearchService

router = APIRouter()

MIN_QUERY_LENGTH = 2


@router.get("/api/cities/search")
async def search_cities(
    query: str = Query(""),
    search: CitySearchService = Depends(get_city_search),
) -> list[dict]:
    """Up to 5 city suggestions from the Open-Meteo geocoder."""
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        raise InvalidInputError(f"query must be at least {MIN_QUERY_LENGTH} characters")
    suggestions = await asyncio.to_thread(search.search, query)
    return [s.to_dict() for s in suggestions]
