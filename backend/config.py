"""Centralized configuration — all env vars in one place."""

import os

DEFAULT_CACHE_TTL = 300
DEFAULT_FETCH_TIMEOUT = 10.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _get_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _get_log_level() -> str:
    level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    return level if level in LOG_LEVELS else "INFO"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.cors_origins: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
        self.git_sha: str = os.getenv("GIT_SHA", "unknown")
        self.environment: str = os.getenv("ENVIRONMENT", "local")
        self.port: int = _get_int("PORT", 8080)
        self.log_level: str = _get_log_level()

        # Open-Meteo
        self.weather_api_url: str = os.getenv("WEATHER_API_URL", "https://api.open-meteo.com/v1/forecast")
        self.geocode_api_url: str = os.getenv("GEOCODE_API_URL", "https://geocoding-api.open-meteo.com/v1/search")
        self.fetch_timeout: float = _get_float("FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT)
        self.strict_hour_match: bool = _get_bool("STRICT_HOUR_MATCH")

        # Cache
        self.cache_ttl: int = _get_int("CACHE_TTL", DEFAULT_CACHE_TTL)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate(self) -> list[str]:
        """Return list of configuration problems worth warning about."""
        problems = []
        for attr in ("weather_api_url", "geocode_api_url"):
            url = getattr(self, attr)
            if not url.startswith(("http://", "https://")):
                problems.append(f"{attr.upper()} is not an http(s) URL: {url!r}")
        if "*" in self.cors_origins and self.is_production:
            problems.append("CORS_ORIGINS allows any origin in production")
        return problems


settings = Settings()
