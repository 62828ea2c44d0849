from typing import Sequence

import numpy as np

from .types import ForecastSample, PrecipitationKind, Quality, WeatherVerdict

_WET = (PrecipitationKind.RAIN, PrecipitationKind.SNOW)


def in_window(hour: int, start_hour: int, end_hour: int) -> bool:
    if end_hour > start_hour:
        return start_hour <= hour <= end_hour
    # Overnight window, e.g. 21:00 to 02:00
    return hour >= start_hour or hour <= end_hour


def select_window(
    samples: Sequence[ForecastSample], start_hour: int, end_hour: int
) -> list[ForecastSample]:
    return [s for s in samples if in_window(s.hour_of_day, start_hour, end_hour)]


def assess_weather(
    samples: Sequence[ForecastSample], start_hour: int, end_hour: int
) -> WeatherVerdict | None:
    """Reduce a day of forecast samples to a single observing verdict.

    Returns None when no sample falls inside the evening window.
    """
    evening = select_window(samples, start_hour, end_hour)
    if not evening:
        return None

    avg_cloud = float(np.mean([s.cloud_cover for s in evening]))
    avg_seeing = float(np.mean([s.seeing for s in evening]))
    avg_transparency = float(np.mean([s.transparency for s in evening]))
    has_precipitation = any(s.precipitation in _WET for s in evening)

    quality = Quality.EXCELLENT
    reasons: list[str] = []

    # Cloud cover: 1-9, 1 is clear
    if avg_cloud >= 7:
        quality = Quality.POOR
        reasons.append("heavy cloud cover")
    elif avg_cloud >= 5:
        if quality == Quality.EXCELLENT:
            quality = Quality.FAIR
        reasons.append("moderate cloud cover")
    elif avg_cloud >= 3:
        if quality == Quality.EXCELLENT:
            quality = Quality.GOOD
        reasons.append("some clouds")
    else:
        reasons.append("clear skies")

    if avg_seeing <= 3:
        if quality in (Quality.EXCELLENT, Quality.GOOD):
            quality = Quality.FAIR
        reasons.append("poor atmospheric stability")
    elif avg_seeing <= 5:
        reasons.append("average atmospheric stability")
    else:
        reasons.append("excellent atmospheric stability")

    if avg_transparency <= 3:
        reasons.append("reduced transparency")
    elif avg_transparency >= 6:
        reasons.append("excellent transparency")

    if has_precipitation:
        quality = Quality.UNSUITABLE
        reasons.append("precipitation expected")

    worth_observing = (
        quality not in (Quality.UNSUITABLE, Quality.POOR) and avg_cloud < 6
    )

    return WeatherVerdict(
        quality=quality,
        worth_observing=worth_observing,
        avg_cloud_cover=avg_cloud,
        avg_seeing=avg_seeing,
        avg_transparency=avg_transparency,
        has_precipitation=has_precipitation,
        reasons=tuple(reasons),
        samples=tuple(evening),
    )
