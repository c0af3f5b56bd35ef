"""Flood risk route (demo heuristic, no upstream calls)."""

from fastapi import APIRouter, Query

from errors import InvalidInputError
from services.flood import assess_flood_risk

router = APIRouter()


def _coordinate(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise InvalidInputError(f"invalid {name}") from None


@router.get("/api/flood/risk")
async def flood_risk(latitude: str = Query(""), longitude: str = Query("")) -> dict:
    lat = _coordinate("latitude", latitude)
    lon = _coordinate("longitude", longitude)
    return assess_flood_risk(lat, lon)
