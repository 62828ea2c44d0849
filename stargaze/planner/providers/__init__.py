from .base import PositionProvider, WeatherProvider
from .astronomy_api import AstronomyApiPositionProvider
from .seventimer import SevenTimerWeatherProvider


def get_weather_provider(config) -> WeatherProvider:
    return SevenTimerWeatherProvider(base_url=config.weather_url, timeout_s=config.timeout_s)


def get_position_provider(config) -> PositionProvider:
    return AstronomyApiPositionProvider(
        app_id=config.app_id,
        app_secret=config.app_secret,
        base_url=config.astronomy_api_url,
        timeout_s=config.timeout_s,
    )


__all__ = [
    "AstronomyApiPositionProvider",
    "PositionProvider",
    "SevenTimerWeatherProvider",
    "WeatherProvider",
    "get_position_provider",
    "get_weather_provider",
]
