"""
Shared fixtures for the weather API test suite.

Provides:
- canned Open-Meteo geocoding and forecast payloads
- a fake upstream built on httpx.MockTransport that counts calls per step
- a controllable clock for expiry tests
- a FastAPI TestClient wired to the fake upstream
"""

import copy
import os
from datetime import datetime, timezone

import httpx
import pytest

# Ensure test env vars before any app imports
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("CACHE_TTL", "300")

GEOCODE_URL = "https://geocoding.test/v1/search"
FORECAST_URL = "https://forecast.test/v1/forecast"
FIXED_NOW = datetime(2024, 1, 1, 11, 5, tzinfo=timezone.utc)


def geocode_payload(name="Hanoi", country="Vietnam", lat=21.0245, lon=105.84117):
    return {
        "results": [
            {"id": 1581130, "name": name, "country": country, "latitude": lat, "longitude": lon},
            {"id": 1581131, "name": f"{name} Bis", "country": country, "latitude": 10.0, "longitude": 106.0},
        ],
        "generationtime_ms": 0.5,
    }


FORECAST_PAYLOAD = {
    "latitude": 21.0,
    "longitude": 105.875,
    "timezone": "Asia/Bangkok",
    "current_weather": {
        "time": "2024-01-01T11:00",
        "temperature": 22.4,
        "windspeed": 7.9,
        "winddirection": 274.6,
        "weathercode": 3,
    },
    "hourly": {
        "time": ["2024-01-01T10:00", "2024-01-01T11:00"],
        "temperature_2m": [21.0, 22.4],
        "apparent_temperature": [20.1, 23.7],
        "relative_humidity_2m": [80, 71],
        "precipitation_probability": [10, 42],
        "rain": [0.0, 0.3],
        "snowfall": [0.0, 0.0],
        "cloudcover": [90, 64],
        "uv_index": [2.1, 3.85],
        "visibility": [20000.0, 24140.0],
        "surface_pressure": [1015.2, 1014.8],
        "windspeed_10m": [6.0, 7.9],
        "winddirection_10m": [270, 275],
    },
    "daily": {
        "time": ["2024-01-01"],
        "sunrise": ["2024-01-01T06:34"],
        "sunset": ["2024-01-01T17:25"],
    },
}


class FakeOpenMeteo:
    """Routes requests by host and records every call."""

    def __init__(self):
        self.geocode = geocode_payload()
        self.forecast = copy.deepcopy(FORECAST_PAYLOAD)
        self.geocode_status = 200
        self.forecast_status = 200
        self.calls = {"geocode": 0, "forecast": 0}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "geocoding.test":
            self.calls["geocode"] += 1
            return httpx.Response(self.geocode_status, json=self.geocode)
        if request.url.host == "forecast.test":
            self.calls["forecast"] += 1
            return httpx.Response(self.forecast_status, json=self.forecast)
        return httpx.Response(404)

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


class FakeClock:
    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def upstream():
    return FakeOpenMeteo()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def open_meteo(upstream):
    from services.open_meteo import OpenMeteoClient

    client = OpenMeteoClient(
        geocode_url=GEOCODE_URL,
        forecast_url=FORECAST_URL,
        http_client=upstream.http_client(),
        now=lambda: FIXED_NOW,
    )
    yield client
    client.close()


@pytest.fixture
def api(upstream, monkeypatch):
    """TestClient for a fresh app pointed at the fake upstream."""
    from fastapi.testclient import TestClient

    from app import create_app
    from config import Settings

    monkeypatch.setenv("GEOCODE_API_URL", GEOCODE_URL)
    monkeypatch.setenv("WEATHER_API_URL", FORECAST_URL)
    app = create_app(Settings(), http_client=upstream.http_client())
    app.state.open_meteo._now = lambda: FIXED_NOW
    return TestClient(app)
