"""Value types returned by the weather and city services."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WeatherDetails:
    """Normalized current conditions for one city.

    Visibility is in km and precipitation probability is a 0..1 fraction.
    """

    city: str
    country: str
    temperature: float
    feels_like: float
    humidity: int
    wind_speed: float
    wind_dir: str
    visibility: float
    pressure: int
    uv_index: int
    sunrise: datetime
    sunset: datetime
    cloud_cover: int
    precip_prob: float
    rain: float
    snow: float
    weather_code: int
    updated_at: datetime

    def to_dict(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return {
            "city": self.city,
            "country": self.country,
            "temperature": self.temperature,
            "feelsLike": self.feels_like,
            "humidity": self.humidity,
            "windSpeed": self.wind_speed,
            "windDir": self.wind_dir,
            "visibility": self.visibility,
            "pressure": self.pressure,
            "uvIndex": self.uv_index,
            "sunrise": self.sunrise.isoformat(),
            "sunset": self.sunset.isoformat(),
            "cloudCover": self.cloud_cover,
            "precipProb": self.precip_prob,
            "rain": self.rain,
            "snow": self.snow,
            "weatherCode": self.weather_code,
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class CitySuggestion:
    name: str
    country: str
    lat: float
    lon: float

    def to_dict(self) -> dict:
        return {"name": self.name, "country": self.country, "lat": self.lat, "lon": self.lon}
