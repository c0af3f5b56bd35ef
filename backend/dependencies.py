"""FastAPI dependencies that hand routes the services built in create_app()."""

from fastapi import Request

from services.cities import CitySearchService
from services.open_meteo import OpenMeteoClient
from services.weather import WeatherService


def get_weather_service(request: Request) -> WeatherService:
    return request.app.state.weather_service


def get_city_search(request: Request) -> CitySearchService:
    return request.app.state.city_search


def get_open_meteo(request: Request) -> OpenMeteoClient:
    return request.app.state.open_meteo
