"""Open-Meteo client: city name → coordinates → current conditions.

Free API, no key required. Two sequential calls per lookup, the geocoder
first and the forecast second. Any failure at either step surfaces as a
FetchError naming the step; no partial result is ever returned.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

import httpx

from errors import FetchError, NotFoundError
from services.models import CitySuggestion, WeatherDetails

logger = logging.getLogger(__name__)

HOURLY_FIELDS = [
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "precipitation_probability",
    "rain",
    "snowfall",
    "cloudcover",
    "uv_index",
    "visibility",
    "surface_pressure",
    "windspeed_10m",
    "winddirection_10m",
]

_MALFORMED = (KeyError, IndexError, TypeError, ValueError, AttributeError)


def hour_index(hourly_times: list[str], current_time: str, strict: bool = False) -> int:
    """Position of current_time in the hourly series.

    Exact string match only. Without a match this falls back to 0, or
    raises FetchError when strict is set.
    """
    for i, t in enumerate(hourly_times):
        if t == current_time:
            return i
    if strict:
        raise FetchError("forecast", f"current time {current_time!r} not in hourly series")
    logger.warning("No hourly sample for %s, falling back to index 0", current_time)
    return 0


def _sample(hourly: dict, field: str, idx: int) -> float:
    value = hourly[field][idx]
    return 0.0 if value is None else float(value)


class OpenMeteoClient:
    def __init__(
        self,
        geocode_url: str,
        forecast_url: str,
        timeout: float = 10.0,
        strict_hour_match: bool = False,
        http_client: httpx.Client | None = None,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.geocode_url = geocode_url
        self.forecast_url = forecast_url
        self.strict_hour_match = strict_hour_match
        self._client = http_client or httpx.Client(timeout=timeout)
        self._now = now

    def close(self) -> None:
        self._client.close()

    def _get_json(self, step: str, url: str, params: dict):
        try:
            resp = self._client.get(url, params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            logger.warning("Open-Meteo %s request failed: %s", step, e)
            raise FetchError(step, str(e)) from e
        except ValueError as e:
            logger.warning("Open-Meteo %s returned invalid JSON: %s", step, e)
            raise FetchError(step, f"invalid response body: {e}") from e

    def _geocode(self, name: str, count: int) -> list[dict]:
        data = self._get_json(
            "geocode",
            self.geocode_url,
            {"name": name, "count": count, "language": "en", "format": "json"},
        )
        if not isinstance(data, dict):
            raise FetchError("geocode", "invalid response body: expected an object")
        # Open-Meteo omits "results" entirely when nothing matches
        results = data.get("results") or []
        if not isinstance(results, list):
            raise FetchError("geocode", "invalid response body: results is not a list")
        if not results:
            raise NotFoundError(f"city not found: {name}")
        return results

    def search_cities(self, query: str, count: int = 5) -> list[CitySuggestion]:
        """Up to `count` geocoding candidates for an auto-suggest box."""
        results = self._geocode(query, count)
        try:
            return [
                CitySuggestion(
                    name=r["name"],
                    country=r.get("country", ""),
                    lat=float(r["latitude"]),
                    lon=float(r["longitude"]),
                )
                for r in results
            ]
        except _MALFORMED as e:
            raise FetchError("geocode", f"invalid response body: {e!r}") from e

    def get_weather_details(self, city: str) -> WeatherDetails:
        """Geocode city, then fetch and normalize its current conditions."""
        first = self._geocode(city, 1)[0]
        try:
            name = first["name"]
            country = first.get("country", "")
            lat = float(first["latitude"])
            lon = float(first["longitude"])
        except _MALFORMED as e:
            raise FetchError("geocode", f"invalid response body: {e!r}") from e

        data = self._get_json(
            "forecast",
            self.forecast_url,
            {
                "latitude": f"{lat:.4f}",
                "longitude": f"{lon:.4f}",
                "current_weather": "true",
                "hourly": ",".join(HOURLY_FIELDS),
                "daily": "sunrise,sunset",
                "timezone": "auto",
            },
        )

        try:
            current = data["current_weather"]
            hourly = data["hourly"]
            daily = data["daily"]
            idx = hour_index(hourly["time"], current["time"], strict=self.strict_hour_match)

            details = WeatherDetails(
                city=name,
                country=country,
                temperature=float(current["temperature"]),
                feels_like=_sample(hourly, "apparent_temperature", idx),
                humidity=int(_sample(hourly, "relative_humidity_2m", idx)),
                wind_speed=float(current["windspeed"]),
                wind_dir=f"{float(current['winddirection']):.0f}°",
                visibility=_sample(hourly, "visibility", idx) / 1000.0,
                pressure=int(_sample(hourly, "surface_pressure", idx)),
                uv_index=int(_sample(hourly, "uv_index", idx)),
                sunrise=datetime.fromisoformat(daily["sunrise"][0]),
                sunset=datetime.fromisoformat(daily["sunset"][0]),
                cloud_cover=int(_sample(hourly, "cloudcover", idx)),
                precip_prob=_sample(hourly, "precipitation_probability", idx) / 100.0,
                rain=_sample(hourly, "rain", idx),
                snow=_sample(hourly, "snowfall", idx),
                weather_code=int(current.get("weathercode") or 0),
                updated_at=self._now(),
            )
        except _MALFORMED as e:
            raise FetchError("forecast", f"invalid response body: {e!r}") from e

        logger.info("Fetched weather for %s (%.4f, %.4f)", name, lat, lon)
        return details
