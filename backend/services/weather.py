"""Weather lookups with a TTL cache in front of Open-Meteo.

A hit returns the stored record as-is (TTL is not extended) and logs a
timestamped snapshot to history. A miss fetches outside the store lock, so
two threads missing the same city at once both fetch and the later write
wins. Fetch errors propagate untouched and nothing is written.
"""

import dataclasses
import logging
from datetime import datetime, timezone
from typing import Callable

from errors import NotFoundError
from services.models import WeatherDetails
from services.open_meteo import OpenMeteoClient
from services.store import CacheStore

logger = logging.getLogger(__name__)


class WeatherService:
    def __init__(
        self,
        store: CacheStore,
        client: OpenMeteoClient,
        ttl_seconds: float,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._store = store
        self._client = client
        self._ttl = ttl_seconds
        self._now = now

    def lookup(self, city: str) -> tuple[WeatherDetails, bool]:
        """Details for city and whether the cache served them."""
        cached = self._store.get(city)
        if cached is not None:
            logger.debug("Cache hit for %s", city)
            self._store.append_history(city, dataclasses.replace(cached, updated_at=self._now()))
            return cached, True

        logger.info("Cache miss for %s, fetching from Open-Meteo", city)
        details = self._client.get_weather_details(city)
        self._store.set(city, details, self._ttl)
        return details, False

    def get_details(self, city: str) -> WeatherDetails:
        """Cached details for city, fetching from upstream on a miss."""
        details, _ = self.lookup(city)
        return details

    def get_cached(self, city: str) -> WeatherDetails:
        """Cached details for city. Never fetches."""
        cached = self._store.get(city)
        if cached is None:
            raise NotFoundError(f"no cached result for city: {city}")
        return cached

    def list_cached(self) -> dict[str, WeatherDetails]:
        return self._store.list()

    def list_history(self, city: str) -> list[WeatherDetails]:
        return self._store.list_history(city)

    def list_all_history(self) -> dict[str, list[WeatherDetails]]:
        return self._store.list_all_history()
