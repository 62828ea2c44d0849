import datetime
import logging

from stargaze.errors import UpstreamRequestError

from .aggregate import NightAggregator, observation_hours
from .providers import (
    PositionProvider,
    WeatherProvider,
    get_position_provider,
    get_weather_provider,
)
from .types import NightReport, ObserverLocation, OutputMode, WeatherVerdict
from .visibility import get_telescope_profile
from .weather import assess_weather

logger = logging.getLogger(__name__)

NO_WINDOW_DATA_MESSAGE = "no forecast data in observation window"


class Planner:
    def __init__(
        self,
        config,
        weather_provider: WeatherProvider | None = None,
        position_provider: PositionProvider | None = None,
    ):
        config.validate()
        self._config = config
        self._weather = weather_provider or get_weather_provider(config)
        self._positions = position_provider or get_position_provider(config)

    @property
    def location(self) -> ObserverLocation:
        return ObserverLocation(
            latitude_deg=self._config.site_latitude_deg,
            longitude_deg=self._config.site_longitude_deg,
            elevation_m=self._config.site_elevation_m,
        )

    def plan(
        self,
        date: str | None = None,
        mode: OutputMode | str | None = None,
    ) -> NightReport:
        date = date or _today_utc()
        mode = OutputMode(mode or self._config.output_mode)
        telescope = get_telescope_profile(self._config.telescope_level)
        start_hour = self._config.start_hour
        end_hour = self._config.end_hour
        location = self.location

        weather, weather_error = self._assess_weather(location, start_hour, end_hour)

        hours = observation_hours(start_hour, end_hour)
        aggregator = NightAggregator(telescope)
        failed_hours: list[int] = []
        for hour in hours:
            try:
                samples = self._positions.fetch_positions(location, date, hour)
            except UpstreamRequestError as e:
                logger.warning("Error fetching data for %02d:00:00: %s", hour, e)
                failed_hours.append(hour)
                continue
            aggregator.add_hour(samples)

        records = aggregator.summary(mode)
        logger.info(
            "Ranked %d of %d bodies over %d hours",
            len(records),
            len(aggregator.body_names),
            len(hours) - len(failed_hours),
        )
        return NightReport(
            date=date,
            location=location,
            telescope=telescope,
            start_hour=start_hour,
            end_hour=end_hour,
            hours=hours,
            records=records,
            mode=mode,
            weather=weather,
            weather_error=weather_error,
            failed_hours=failed_hours,
        )

    def _assess_weather(
        self, location: ObserverLocation, start_hour: int, end_hour: int
    ) -> tuple[WeatherVerdict | None, str | None]:
        try:
            forecast = self._weather.fetch_forecast(location)
        except UpstreamRequestError as e:
            logger.warning("Could not fetch weather data: %s", e)
            return None, str(e)
        verdict = assess_weather(forecast, start_hour, end_hour)
        if verdict is None:
            logger.warning("Weather forecast has no points between %02d:00 and %02d:00", start_hour, end_hour)
            return None, NO_WINDOW_DATA_MESSAGE
        return verdict, None


def _today_utc() -> str:
    return datetime.datetime.now(datetime.timezone.utc).date().isoformat()
