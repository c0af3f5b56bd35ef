"""FastAPI application entry point for the weather API."""

import logging
import sys

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings
from errors import register_error_handlers
from services.cities import CitySearchService
from services.open_meteo import OpenMeteoClient
from services.store import CacheStore
from services.weather import WeatherService

JSON_LOG_FORMAT = '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}'
TEXT_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}
HSTS = "max-age=31536000; includeSubDomains"

logger = logging.getLogger(__name__)


def configure_logging(config: Settings) -> None:
    """JSON lines to stdout in production, plain text locally."""
    logging.basicConfig(
        level=config.log_level,
        format=JSON_LOG_FORMAT if config.is_production else TEXT_LOG_FORMAT,
        stream=sys.stdout,
    )
    # httpx logs every upstream request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app(config: Settings = settings, http_client: httpx.Client | None = None) -> FastAPI:
    app = FastAPI(title="Weather API", version="1.0.0")

    # Read-only API: the dashboard only issues GETs
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["GET"],
        allow_headers=["Accept", "Content-Type"],
    )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        if config.is_production:
            response.headers["Strict-Transport-Security"] = HSTS
        return response

    register_error_handlers(app)

    # One store per concern; each worker process has its own
    client = OpenMeteoClient(
        geocode_url=config.geocode_api_url,
        forecast_url=config.weather_api_url,
        timeout=config.fetch_timeout,
        strict_hour_match=config.strict_hour_match,
        http_client=http_client,
    )
    app.state.open_meteo = client
    app.state.weather_service = WeatherService(CacheStore(), client, ttl_seconds=config.cache_ttl)
    app.state.city_search = CitySearchService(CacheStore(keep_history=False), client, ttl_seconds=config.cache_ttl)

    from routes.health import router as health_router
    from routes.weather import router as weather_router
    from routes.cities import router as cities_router
    from routes.flood import router as flood_router

    app.include_router(health_router)
    app.include_router(weather_router)
    app.include_router(cities_router)
    app.include_router(flood_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        problems = config.validate()
        if problems:
            logger.warning("Configuration problems: %s", "; ".join(problems))
        logger.info("Weather cache TTL is %ds", config.cache_ttl)

    @app.on_event("shutdown")
    async def _close_client() -> None:
        client.close()

    return app


configure_logging(settings)
app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
