import logging
from urllib.parse import urlencode

from stargaze.config import DEFAULT_WEATHER_URL
from stargaze.errors import MalformedResponseError
from stargaze.planner.types import ForecastSample, ObserverLocation, PrecipitationKind

from .base import WeatherProvider, fetch_json

logger = logging.getLogger(__name__)


class SevenTimerWeatherProvider(WeatherProvider):
    """7Timer! ASTRO forecast, three-hourly cloud/seeing/transparency indices."""

    name = "7timer"

    def __init__(self, base_url: str | None = None, timeout_s: float | None = None):
        self._base_url = base_url or DEFAULT_WEATHER_URL
        self._timeout_s = timeout_s

    def build_url(self, location: ObserverLocation) -> str:
        params = {
            "lon": location.longitude_deg,
            "lat": location.latitude_deg,
            "ac": 0,
            "lang": "en",
            "unit": "metric",
            "output": "json",
            "tzshift": 0,
        }
        return f"{self._base_url}?{urlencode(params)}"

    def fetch_forecast(self, location: ObserverLocation) -> list[ForecastSample]:
        payload = fetch_json(self.build_url(location), timeout_s=self._timeout_s)
        samples = parse_forecast(payload)
        logger.debug("7timer returned %d forecast points", len(samples))
        return samples


def parse_forecast(payload) -> list[ForecastSample]:
    if not isinstance(payload, dict) or not isinstance(payload.get("dataseries"), list):
        raise MalformedResponseError("Weather response has no dataseries")
    samples = []
    for point in payload["dataseries"]:
        try:
            samples.append(
                ForecastSample(
                    hour_of_day=int(point["timepoint"]) % 24,
                    cloud_cover=int(point["cloudcover"]),
                    seeing=int(point["seeing"]),
                    transparency=int(point["transparency"]),
                    precipitation=PrecipitationKind.parse(point.get("prec_type")),
                )
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MalformedResponseError(f"Unexpected forecast point {point!r}: {e}") from e
    return samples
