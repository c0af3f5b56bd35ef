"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WeatherAPIError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class InvalidInputError(WeatherAPIError):
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class NotFoundError(WeatherAPIError):
    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class FetchError(WeatherAPIError):
    """Upstream lookup failed. `step` is "geocode" or "forecast"."""

    def __init__(self, step: str, message: str):
        super().__init__(f"{step} failed: {message}", status_code=500)
        self.step = step


def _error_body(exc: WeatherAPIError) -> dict:
    body = {"error": str(exc)}
    if isinstance(exc, FetchError):
        body["step"] = exc.step
    return body


def register_error_handlers(app: FastAPI) -> None:
    """Map the weather error taxonomy onto HTTP responses."""

    @app.exception_handler(WeatherAPIError)
    async def handle_weather_error(request: Request, exc: WeatherAPIError):
        if exc.status_code >= 500:
            logger.warning("%s %s failed upstream: %s", request.method, request.url.path, exc)
        return JSONResponse(_error_body(exc), status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse({"error": "Internal server error"}, status_code=500)
