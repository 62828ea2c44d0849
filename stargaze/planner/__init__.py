from .planner import Planner
from .aggregate import NightAggregator, observation_hours, rank_records
from .types import (
    BodyPositionSample,
    ForecastSample,
    NightlyBodyRecord,
    NightReport,
    ObserverLocation,
    OutputMode,
    TelescopeProfile,
    Tier,
    WeatherVerdict,
)
from .visibility import rate_visibility
from .weather import assess_weather, select_window

__all__ = [
    "Planner",
    "NightAggregator",
    "observation_hours",
    "rank_records",
    "BodyPositionSample",
    "ForecastSample",
    "NightlyBodyRecord",
    "NightReport",
    "ObserverLocation",
    "OutputMode",
    "TelescopeProfile",
    "Tier",
    "WeatherVerdict",
    "rate_visibility",
    "assess_weather",
    "select_window",
]
