from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence


class Tier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    TOO_FAINT = "too-faint"
    NOT_VISIBLE = "not-visible"

    @property
    def rank(self) -> int:
        return _TIER_ORDER.index(self)


_TIER_ORDER = (
    Tier.EXCELLENT,
    Tier.GOOD,
    Tier.FAIR,
    Tier.POOR,
    Tier.TOO_FAINT,
    Tier.NOT_VISIBLE,
)


class Quality(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    UNSUITABLE = "unsuitable"


class PrecipitationKind(str, Enum):
    NONE = "none"
    RAIN = "rain"
    SNOW = "snow"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "PrecipitationKind":
        if not value:
            return cls.NONE
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OTHER


class OutputMode(str, Enum):
    TERSE = "terse"
    VERBOSE = "verbose"


@dataclass(frozen=True)
class ObserverLocation:
    latitude_deg: float
    longitude_deg: float
    elevation_m: float = 0.0


@dataclass(frozen=True)
class TelescopeProfile:
    label: str
    max_magnitude: float
    min_altitude_deg: float
    description: str = ""


@dataclass(frozen=True)
class ForecastSample:
    hour_of_day: int
    cloud_cover: int
    seeing: int
    transparency: int
    precipitation: PrecipitationKind = PrecipitationKind.NONE


@dataclass(frozen=True)
class WeatherVerdict:
    quality: Quality
    worth_observing: bool
    avg_cloud_cover: float
    avg_seeing: float
    avg_transparency: float
    has_precipitation: bool
    reasons: tuple[str, ...]
    samples: tuple[ForecastSample, ...] = ()


@dataclass(frozen=True)
class BodyPositionSample:
    body_name: str
    hour: int
    altitude_deg: float
    azimuth_deg: float
    magnitude: float | None = None
    constellation: str = ""
    distance_km: float | None = None
    body_id: str | None = None


@dataclass(frozen=True)
class VisibilityRating:
    tier: Tier
    explanation: str


@dataclass(frozen=True)
class HourlyEntry:
    hour: int
    altitude_deg: float
    azimuth_deg: float
    tier: Tier
    explanation: str


@dataclass(frozen=True)
class NightlyBodyRecord:
    body_name: str
    best_tier: Tier
    best_explanation: str
    magnitude: float | None
    constellation: str
    visible_hour_count: int
    total_hour_count: int
    peak_altitude_deg: float | None = None
    peak_hour: int | None = None
    peak_azimuth_deg: float | None = None
    distance_km: float | None = None


@dataclass
class NightReport:
    date: str
    location: ObserverLocation
    telescope: TelescopeProfile
    start_hour: int
    end_hour: int
    hours: Sequence[int]
    records: Sequence[NightlyBodyRecord]
    mode: OutputMode = OutputMode.TERSE
    weather: WeatherVerdict | None = None
    weather_error: str | None = None
    failed_hours: list[int] = field(default_factory=list)
