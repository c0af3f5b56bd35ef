"""City auto-suggest backed by the Open-Meteo geocoder, cached per query."""

import logging

from services.models import CitySuggestion
from services.open_meteo import OpenMeteoClient
from services.store import CacheStore

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


class CitySearchService:
    def __init__(self, store: CacheStore, client: OpenMeteoClient, ttl_seconds: float):
        self._store = store
        self._client = client
        self._ttl = ttl_seconds

    def search(self, query: str) -> list[CitySuggestion]:
        cached = self._store.get(query)
        if cached is not None:
            return cached

        suggestions = self._client.search_cities(query, count=MAX_SUGGESTIONS)
        self._store.set(query, suggestions, self._ttl)
        logger.info("Cached %d city suggestions for %r", len(suggestions), query)
        return suggestions
